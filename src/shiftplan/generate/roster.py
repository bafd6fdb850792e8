# src/shiftplan/generate/roster.py
from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import time
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from shiftplan.generate.names import FIRST_NAMES
from shiftplan.staff import WEEKDAYS, ContractType, Employee, Role, TimeRange

DEFAULT_ROSTER_JSON = Path(__file__).resolve().parents[2] / "example_roster.json"


# ----------------------------
# Configuration container
# ----------------------------
@dataclass(slots=True)
class RosterGenConfig:
    """
    Configuration for generation of a synthetic store roster.
    """

    # Employees per role
    per_role: dict[Role, int] = field(
        default_factory=lambda: {
            Role.PRODUCTION: 7,
            Role.STORE_SERVICE: 6,
            Role.MODULE_STORE_SERVICE: 4,
            Role.MODULE_OPEN_SERVICE: 5,
        }
    )

    # Share of full-time contracts within each role
    full_time_pct: float = 0.70

    # Share of employees who are not available every day, and how many days they keep
    reduced_availability_pct: float = 0.20
    reduced_day_choices: Tuple[int, ...] = (3, 4, 5)
    reduced_day_weights: Tuple[float, ...] = (0.3, 0.4, 0.3)

    # Share of employees who cannot start before `late_start`
    late_start_pct: float = 0.10
    late_start: time = time(12, 0)

    # RNG seed
    seed: Optional[int] = 7

    def validate(self) -> None:
        if not self.per_role:
            raise ValueError("per_role must name at least one role.")
        if any(n < 0 for n in self.per_role.values()):
            raise ValueError("per_role counts must be non-negative.")
        for name in ("full_time_pct", "reduced_availability_pct", "late_start_pct"):
            val = getattr(self, name)
            if not (0.0 <= val <= 1.0):
                raise ValueError(f"{name} must be in [0,1].")
        if len(self.reduced_day_choices) != len(self.reduced_day_weights):
            raise ValueError(
                "reduced_day_choices and reduced_day_weights must be same length."
            )
        if any(not (0 <= c < len(WEEKDAYS)) for c in self.reduced_day_choices):
            raise ValueError("reduced_day_choices must be within [0, 6].")
        if not np.isclose(sum(self.reduced_day_weights), 1.0, atol=1e-9):
            raise ValueError("reduced_day_weights must sum to 1.0")
        if self.seed is not None and not isinstance(self.seed, int):
            raise ValueError("seed must be an int or None.")


# ----------------------------
# Generation helpers
# ----------------------------
def _rng(seed: Optional[int]) -> np.random.Generator:
    return np.random.default_rng(seed) if seed is not None else np.random.default_rng()


def _deterministic_counts(n: int, probs: np.ndarray) -> np.ndarray:
    """
    Turn probabilities into integer counts that sum to n with minimal rounding error.
    """
    expected = probs * n
    floors = np.floor(expected).astype(int)
    shortfall = n - floors.sum()
    if shortfall > 0:
        remainders = expected - floors
        bump_idx = np.argsort(remainders)[::-1][:shortfall]
        floors[bump_idx] += 1
    return floors


# ----------------------------
# Core API
# ----------------------------
def create_roster(cfg: RosterGenConfig) -> list[Employee]:
    cfg.validate()
    g = _rng(cfg.seed)

    total = sum(cfg.per_role.values())
    if len(FIRST_NAMES) < total:
        raise ValueError(f"Not enough FIRST_NAMES ({len(FIRST_NAMES)}) for n={total}.")
    names = list(FIRST_NAMES)
    g.shuffle(names)

    roster: list[Employee] = []
    for role, n in cfg.per_role.items():
        if n == 0:
            continue
        # contract mix per role, as close to the target share as rounding allows
        ft, pt = _deterministic_counts(
            n, np.array([cfg.full_time_pct, 1.0 - cfg.full_time_pct])
        )
        contracts = [ContractType.FULL_TIME] * int(ft) + [ContractType.PART_TIME] * int(pt)
        g.shuffle(contracts)

        reduced_flags = g.random(n) < cfg.reduced_availability_pct
        late_flags = g.random(n) < cfg.late_start_pct
        day_draws = g.choice(
            cfg.reduced_day_choices,
            size=n,
            p=np.array(cfg.reduced_day_weights, dtype=float),
        )

        for i in range(n):
            days = list(WEEKDAYS)
            if reduced_flags[i]:
                keep = np.sort(g.choice(len(WEEKDAYS), size=int(day_draws[i]), replace=False))
                days = [WEEKDAYS[int(k)] for k in keep]
            start = cfg.late_start if late_flags[i] else time(0, 0)
            avail = {d: TimeRange(start, time(23, 59)) for d in days}

            idx = len(roster)
            roster.append(
                Employee(
                    id=f"e{idx:03d}",
                    name=names[idx],
                    role=role,
                    contract_type=contracts[i],
                    availability=avail,
                )
            )
    return roster


# ----------------------------
# Convenience utilities
# ----------------------------
def roster_summary(roster: list[Employee]) -> dict:
    from collections import Counter

    n = len(roster)
    roles = Counter(e.role.value for e in roster)
    ft = sum(e.contract_type is ContractType.FULL_TIME for e in roster)
    full = sum(e.is_fully_available for e in roster)
    return {
        "N": n,
        "roles": roles,
        "full_time_pct": ft / n if n else 0.0,
        "fully_available_pct": full / n if n else 0.0,
    }


def roster_to_dataframe(roster: list[Employee]) -> pd.DataFrame:
    rows = []
    for e in roster:
        row: dict[str, Any] = {
            "id": e.id,
            "name": e.name,
            "role": e.role.value,
            "contract_type": e.contract_type.value,
            "available_days": len(e.availability),
        }
        for d in WEEKDAYS:
            rng = e.availability.get(d)
            row[d] = str(rng) if rng is not None else np.nan
        rows.append(row)
    return pd.DataFrame(rows)


def employee_from_dict(raw: Mapping[str, Any]) -> Employee:
    for key in ("id", "role"):
        if raw.get(key) in (None, ""):
            raise ValueError(f"Employee entry missing '{key}'.")
    contract = raw.get("contract_type", raw.get("contractType"))
    if contract in (None, ""):
        raise ValueError("Employee entry missing 'contract_type'.")

    avail = raw.get("availability")
    if avail is None:
        avail = raw.get("available_days", raw.get("availableDays", []))
    if isinstance(avail, (str, bytes, bytearray)):
        raise TypeError("availability must be a list of days or an object.")

    return Employee(
        id=str(raw["id"]),
        name=str(raw.get("name", "")),
        role=raw["role"],
        contract_type=contract,
        availability=avail,
    )


def roster_from_json(path: str | Path | None = None) -> list[Employee]:
    """
    Load the roster from a JSON file on disk.

    If `path` is omitted, the loader reads from `src/example_roster.json`. Files
    may contain either a list of employee objects or an object with a top-level
    `employees`/`staff` array. `availability` may be a list of weekday names or
    an object mapping weekday -> {"start": "HH:MM", "end": "HH:MM"}.
    """

    file_path = Path(path) if path is not None else DEFAULT_ROSTER_JSON
    file_path = file_path.expanduser()

    if file_path.suffix.lower() != ".json":
        raise ValueError("roster_from_json expects a path to a .json file.")
    if not file_path.exists():
        raise FileNotFoundError(f"Roster JSON file not found: {file_path}")

    try:
        data = json.loads(file_path.read_text())
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {file_path}") from exc

    if isinstance(data, Mapping):
        entries = data.get("employees", data.get("staff"))
        if entries is None:
            raise ValueError(
                "JSON file must contain a list or a 'employees'/'staff' key."
            )
    elif isinstance(data, Sequence):
        entries = data
    else:
        raise TypeError("JSON file must contain a list of employee objects.")

    if isinstance(entries, (str, bytes, bytearray)):
        raise TypeError("JSON file must contain a list of employee objects.")

    roster: list[Employee] = []
    for raw in entries:
        if not isinstance(raw, Mapping):
            raise TypeError("Each employee entry must be an object/dict.")
        roster.append(employee_from_dict(raw))
    return roster
