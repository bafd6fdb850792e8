from __future__ import annotations

from collections.abc import Iterable

from shiftplan.catalog import ShiftSlot
from shiftplan.config import Config, weekly_target
from shiftplan.staff import Employee


def shift_duration(emp: Employee, C: Config) -> float:
    """
    Per-day shift length in hours for `emp`.

    The weekly target is spread over min(available days, MAX_WORKING_DAYS):
    a 7-day available employee loses one day to the forced rest day.
    Zero available days gives 0.0, so the employee is never assignable.
    """
    working_days = min(len(emp.availability), C.MAX_WORKING_DAYS)
    if working_days == 0:
        return 0.0
    return weekly_target(C, emp.contract_type) / working_days


class SchedulingState:
    """Mutable per-call counters. Created fresh by every generation call."""

    def __init__(
        self,
        cfg: Config,
        employees: Iterable[Employee],
        rest_days: dict[str, list[str]],
    ) -> None:
        self.cfg = cfg
        self.rest_days: dict[str, list[str]] = {}
        self.hours_worked: dict[str, float] = {}
        self.days_assigned: dict[str, int] = {}
        self.closing_counts: dict[str, int] = {}
        self.worked_days: dict[str, list[str]] = {}
        for emp in employees:
            self.rest_days[emp.id] = list(rest_days.get(emp.id, []))
            self.hours_worked[emp.id] = 0.0
            self.days_assigned[emp.id] = 0
            self.closing_counts[emp.id] = 0
            self.worked_days[emp.id] = []

    def is_resting(self, emp: Employee, day: str) -> bool:
        return day in self.rest_days[emp.id]

    def can_close(self, emp: Employee) -> bool:
        return self.closing_counts[emp.id] < self.cfg.MAX_CLOSING_SHIFTS

    def fits_weekly_cap(self, emp: Employee) -> bool:
        duration = shift_duration(emp, self.cfg)
        if duration <= 0:
            return False
        cap = weekly_target(self.cfg, emp.contract_type) + self.cfg.HOURS_TOLERANCE
        return self.hours_worked[emp.id] + duration <= cap

    def commit(self, emp: Employee, slot: ShiftSlot, day: str) -> None:
        self.days_assigned[emp.id] += 1
        self.worked_days[emp.id].append(day)
        self.hours_worked[emp.id] += shift_duration(emp, self.cfg)
        if slot.is_closing:
            self.closing_counts[emp.id] += 1
