# tests/conftest.py
from __future__ import annotations

import os
import random
from pathlib import Path

import numpy as np
import pytest

from shiftplan.config import Config

TEST_SEED = int(os.environ.get("PYTEST_SEED", "1234"))


# -----------------------------
# Global, deterministic seeding
# -----------------------------
@pytest.fixture(autouse=True, scope="session")
def _seed_everything() -> None:
    """
    Make tests deterministic across runs. Generation draws from its own
    numpy Generators, not from these global states.
    """
    os.environ["PYTHONHASHSEED"] = str(TEST_SEED)
    random.seed(TEST_SEED)
    np.random.seed(TEST_SEED)


@pytest.fixture
def seeded_cfg() -> Config:
    """Fresh default config carrying the session seed."""
    return Config(SEED=TEST_SEED)


# -----------------------------
# Path helpers
# -----------------------------
@pytest.fixture(scope="session")
def project_root() -> Path:
    """Repository root (where pyproject.toml lives)."""
    return Path(__file__).resolve().parents[1]
