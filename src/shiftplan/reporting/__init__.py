from __future__ import annotations

from .data_models import CoverageMetrics, SlotRequirement
from .reporter import Reporter

__all__ = [
    "Reporter",
    "CoverageMetrics",
    "SlotRequirement",
]
