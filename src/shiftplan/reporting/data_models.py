from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SlotRequirement:
    """Resolved headcount for one (day, slot, role) after staffing overrides."""

    day: str
    slot_id: str
    role: str
    required: int


@dataclass(frozen=True)
class CoverageMetrics:
    """Key coverage metrics summarising filled vs required positions."""

    required_positions: int
    filled_positions: int
    unfilled_positions: int
    shortfall_records: int
    employees_unassigned: int
    employees_over_target: int
    days_spread_by_role: dict[str, int] = field(default_factory=dict)

    @property
    def fill_rate(self) -> float:
        if self.required_positions == 0:
            return 1.0
        return self.filled_positions / self.required_positions
