from __future__ import annotations

from collections import defaultdict

import pandas as pd

from shiftplan.config import Config, weekly_target
from shiftplan.engine import required_staff
from shiftplan.input_data import InputData
from shiftplan.result_types import ScheduleResult

from .data_models import CoverageMetrics, SlotRequirement


def slot_requirements(data: InputData, C: Config) -> list[SlotRequirement]:
    """Resolved requirement for every (day, slot, role) the catalog uses."""
    out: list[SlotRequirement] = []
    for day in data.days:
        for slot in data.slots:
            for role in slot.required_staff_by_role:
                k = required_staff(slot, role, day, C)
                if k > 0:
                    out.append(SlotRequirement(day, slot.id, role.value, k))
    return out


def assigned_counts(
    res: ScheduleResult, data: InputData
) -> dict[tuple[str, str, str], int]:
    """Build {(day, slot_id, role) -> assigned headcount} from the schedule."""
    roles = {e.id: e.role.value for e in data.employees}
    counts: dict[tuple[str, str, str], int] = defaultdict(int)
    for ds in res.schedule:
        for a in ds.assignments:
            for emp_id in a.employee_ids:
                counts[(ds.day, a.slot_id, roles[emp_id])] += 1
    return dict(counts)


def coverage_by_day_and_role(
    res: ScheduleResult, data: InputData, C: Config
) -> pd.DataFrame:
    """Required vs assigned headcount summed over slots, per (day, role)."""
    assigned = assigned_counts(res, data)
    rows = [
        {
            "day": r.day,
            "role": r.role,
            "required": r.required,
            "assigned": min(assigned.get((r.day, r.slot_id, r.role), 0), r.required),
        }
        for r in slot_requirements(data, C)
    ]
    if not rows:
        return pd.DataFrame(columns=["day", "role", "required", "assigned", "missing"])
    df = (
        pd.DataFrame(rows)
        .groupby(["day", "role"], sort=False, as_index=False)[["required", "assigned"]]
        .sum()
    )
    df["missing"] = df["required"] - df["assigned"]
    return df


def days_spread_by_role(res: ScheduleResult, data: InputData) -> dict[str, int]:
    """
    Largest max-min gap in days assigned among employees sharing a role and the
    same number of available days.
    """
    groups: dict[tuple[str, int], list[int]] = defaultdict(list)
    for e in data.employees:
        groups[(e.role.value, len(e.availability))].append(
            int(res.days_assigned.get(e.id, 0))
        )
    spread: dict[str, int] = {}
    for (role, _), vals in groups.items():
        spread[role] = max(spread.get(role, 0), max(vals) - min(vals))
    return spread


def compute_coverage_metrics(
    res: ScheduleResult, data: InputData, C: Config
) -> CoverageMetrics:
    df = coverage_by_day_and_role(res, data, C)
    required = int(df["required"].sum()) if not df.empty else 0
    filled = int(df["assigned"].sum()) if not df.empty else 0

    over = 0
    for e in data.employees:
        cap = weekly_target(C, e.contract_type) + C.HOURS_TOLERANCE
        if res.hours_worked.get(e.id, 0.0) > cap:
            over += 1

    return CoverageMetrics(
        required_positions=required,
        filled_positions=filled,
        unfilled_positions=required - filled,
        shortfall_records=len(res.shortfalls),
        employees_unassigned=sum(
            1 for e in data.employees if res.days_assigned.get(e.id, 0) == 0
        ),
        employees_over_target=over,
        days_spread_by_role=days_spread_by_role(res, data),
    )
