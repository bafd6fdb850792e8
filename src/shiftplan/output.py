from __future__ import annotations

from pathlib import Path

import pandas as pd

from shiftplan.config import Config
from shiftplan.extract import (
    extract_assignments,
    extract_employee_totals,
    extract_shortfalls,
)
from shiftplan.input_data import InputData
from shiftplan.result_types import ScheduleResult
from shiftplan.staff import WEEKDAYS


def weekly_grid(assignments: pd.DataFrame, data: InputData) -> pd.DataFrame:
    """
    Employee x day table of "HH:MM-HH:MM" windows; unassigned days read "off".
    """
    days = [d for d in WEEKDAYS if d in data.days]
    index = pd.Index([e.id for e in data.employees], name="employee_id")
    grid = pd.DataFrame("off", index=index, columns=days)
    for r in assignments.itertuples(index=False):
        grid.loc[r.employee_id, r.day] = f"{r.start}-{r.end}"
    grid.insert(0, "name", [e.name for e in data.employees])
    grid.insert(1, "role", [e.role.value for e in data.employees])
    return grid


def produce_outputs(
    res: ScheduleResult,
    data: InputData,
    C: Config,
    out_dir: str | Path = "outputs",
) -> dict[str, Path]:
    """Persist assignment, grid, per-employee and shortfall CSVs. Returns the written paths."""
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    assignments = extract_assignments(res, data, C)
    paths = {
        "assignments": out / "assignments.csv",
        "grid": out / "weekly_grid.csv",
        "employees": out / "employee_totals.csv",
        "shortfalls": out / "shortfalls.csv",
    }
    assignments.to_csv(paths["assignments"], index=False)
    weekly_grid(assignments, data).to_csv(paths["grid"])
    extract_employee_totals(res, data, C).to_csv(paths["employees"], index=False)
    extract_shortfalls(res).to_csv(paths["shortfalls"], index=False)
    return paths
