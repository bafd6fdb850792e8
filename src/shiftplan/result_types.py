# shiftplan/result_types.py
from __future__ import annotations

from dataclasses import dataclass, field

from shiftplan.staff import Role


@dataclass
class Assignment:
    slot_id: str
    employee_ids: list[str] = field(default_factory=list)


@dataclass
class DailySchedule:
    day: str
    assignments: list[Assignment] = field(default_factory=list)

    def assignment_for(self, slot_id: str) -> Assignment | None:
        return next((a for a in self.assignments if a.slot_id == slot_id), None)

    def assigned_ids(self) -> list[str]:
        return [e for a in self.assignments for e in a.employee_ids]


@dataclass(frozen=True)
class Shortfall:
    """One (day, slot, role) requirement that could not be fully staffed."""

    day: str
    slot_id: str
    role: Role
    required: int
    assigned: int

    @property
    def missing(self) -> int:
        return max(self.required - self.assigned, 0)


@dataclass
class ScheduleResult:
    """Structured output of a generation run."""

    schedule: list[DailySchedule]
    shortfalls: list[Shortfall] = field(default_factory=list)
    rest_days: dict[str, list[str]] = field(default_factory=dict)
    hours_worked: dict[str, float] = field(default_factory=dict)
    days_assigned: dict[str, int] = field(default_factory=dict)
    closing_counts: dict[str, int] = field(default_factory=dict)
    worked_days: dict[str, list[str]] = field(default_factory=dict)

    def day(self, name: str) -> DailySchedule:
        for ds in self.schedule:
            if ds.day == name:
                return ds
        raise KeyError(name)

    def assigned_ids(self, day: str) -> list[str]:
        return self.day(day).assigned_ids()

    @property
    def is_fully_staffed(self) -> bool:
        return not self.shortfalls
