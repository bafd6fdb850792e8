# shiftplan/extract.py
from __future__ import annotations

from datetime import time

import pandas as pd

from shiftplan.catalog import ShiftSlot
from shiftplan.config import Config, weekly_target
from shiftplan.input_data import InputData
from shiftplan.result_types import ScheduleResult
from shiftplan.staff import WEEKDAYS
from shiftplan.state import shift_duration

_DAY_MINUTES = 24 * 60

ASSIGNMENT_COLUMNS = [
    "day",
    "day_index",
    "slot_id",
    "slot_name",
    "slot_kind",
    "employee_id",
    "name",
    "role",
    "contract_type",
    "duration_h",
    "start",
    "end",
]
EMPLOYEE_COLUMNS = [
    "id",
    "name",
    "role",
    "contract_type",
    "available_days",
    "rest_days",
    "days_assigned",
    "worked_days",
    "hours",
    "weekly_target",
    "closing_shifts",
]
SHORTFALL_COLUMNS = ["day", "slot_id", "role", "required", "assigned", "missing"]


def _minutes(t: time) -> int:
    return t.hour * 60 + t.minute


def _fmt(minutes: int) -> str:
    minutes %= _DAY_MINUTES
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def shift_window(slot: ShiftSlot, duration_h: float) -> tuple[str, str]:
    """
    Clock-in/clock-out strings for one assignment.

    Closing slots keep their end time and start `duration_h` earlier; every other
    slot keeps its start time and ends `duration_h` later. Wraps past midnight.
    """
    dur = int(round(duration_h * 60))
    if slot.is_closing:
        end = _minutes(slot.end_time)
        return _fmt(end - dur), _fmt(end)
    start = _minutes(slot.start_time)
    return _fmt(start), _fmt(start + dur)


def extract_assignments(
    res: ScheduleResult, data: InputData, C: Config
) -> pd.DataFrame:
    """Return one row per (day, slot, employee) with derived clock times."""
    emps = {e.id: e for e in data.employees}
    slots = {s.id: s for s in data.slots}
    rows: list[dict] = []
    for ds in res.schedule:
        for a in ds.assignments:
            slot = slots[a.slot_id]
            for emp_id in a.employee_ids:
                e = emps[emp_id]
                dur = shift_duration(e, C)
                start, end = shift_window(slot, dur)
                rows.append(
                    {
                        "day": ds.day,
                        "day_index": WEEKDAYS.index(ds.day),
                        "slot_id": slot.id,
                        "slot_name": slot.name,
                        "slot_kind": slot.kind.value,  # type: ignore[union-attr]
                        "employee_id": e.id,
                        "name": e.name,
                        "role": e.role.value,
                        "contract_type": e.contract_type.value,
                        "duration_h": round(dur, 4),
                        "start": start,
                        "end": end,
                    }
                )
    if not rows:
        return pd.DataFrame(columns=ASSIGNMENT_COLUMNS)
    return (
        pd.DataFrame(rows, columns=ASSIGNMENT_COLUMNS)
        .sort_values(["day_index", "start", "employee_id"])
        .reset_index(drop=True)
    )


def extract_employee_totals(
    res: ScheduleResult, data: InputData, C: Config
) -> pd.DataFrame:
    """Return per-employee totals dataframe."""
    rows: list[dict] = []
    for e in data.employees:
        rows.append(
            {
                "id": e.id,
                "name": e.name,
                "role": e.role.value,
                "contract_type": e.contract_type.value,
                "available_days": len(e.availability),
                "rest_days": ",".join(res.rest_days.get(e.id, [])),
                "days_assigned": int(res.days_assigned.get(e.id, 0)),
                "worked_days": ",".join(
                    d for d in WEEKDAYS if d in res.worked_days.get(e.id, [])
                ),
                "hours": round(float(res.hours_worked.get(e.id, 0.0)), 4),
                "weekly_target": weekly_target(C, e.contract_type),
                "closing_shifts": int(res.closing_counts.get(e.id, 0)),
            }
        )
    if not rows:
        return pd.DataFrame(columns=EMPLOYEE_COLUMNS)
    return pd.DataFrame(rows, columns=EMPLOYEE_COLUMNS).sort_values(
        ["hours", "id"], ascending=[False, True]
    )


def extract_shortfalls(res: ScheduleResult) -> pd.DataFrame:
    rows = [
        {
            "day": s.day,
            "slot_id": s.slot_id,
            "role": s.role.value,
            "required": s.required,
            "assigned": s.assigned,
            "missing": s.missing,
        }
        for s in res.shortfalls
    ]
    if not rows:
        return pd.DataFrame(columns=SHORTFALL_COLUMNS)
    return pd.DataFrame(rows, columns=SHORTFALL_COLUMNS)
