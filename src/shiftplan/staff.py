from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import time
from enum import Enum
from typing import Any, Iterable, Mapping

WEEKDAYS: tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

_DAY_ALIASES: dict[str, str] = {
    "lunes": "monday",
    "martes": "tuesday",
    "miercoles": "wednesday",
    "miércoles": "wednesday",
    "jueves": "thursday",
    "viernes": "friday",
    "sabado": "saturday",
    "sábado": "saturday",
    "domingo": "sunday",
}

_HHMM = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")


def normalize_day(value: str) -> str:
    """Map a weekday name (English or store locale, any case) to its canonical name."""
    key = str(value).strip().lower()
    if key in WEEKDAYS:
        return key
    if key in _DAY_ALIASES:
        return _DAY_ALIASES[key]
    raise ValueError(f"Unknown weekday name: {value!r}")


def parse_time(value: Any) -> time:
    if isinstance(value, time):
        return value
    m = _HHMM.match(str(value).strip())
    if m is None:
        raise ValueError(f"Invalid time {value!r}; expected HH:MM.")
    return time(int(m.group(1)), int(m.group(2)))


class Role(str, Enum):
    PRODUCTION = "production"
    STORE_SERVICE = "store-service"
    MODULE_STORE_SERVICE = "module-store-service"
    MODULE_OPEN_SERVICE = "module-open-service"

    @classmethod
    def parse(cls, value: Any) -> "Role":
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        key = _ROLE_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError as exc:
            raise ValueError(f"Unknown role: {value!r}") from exc


_ROLE_ALIASES: dict[str, str] = {
    "produccion": "production",
    "producción": "production",
    "servicio-tienda": "store-service",
    "servicio-modulo-tienda": "module-store-service",
    "servicio-modulo-open": "module-open-service",
}


class ContractType(str, Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"

    @classmethod
    def parse(cls, value: Any) -> "ContractType":
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("_", "-").replace(" ", "-")
        try:
            return cls(key)
        except ValueError as exc:
            raise ValueError(f"Unknown contract type: {value!r}") from exc


@dataclass(frozen=True, slots=True)
class TimeRange:
    """Half-open time-of-day window [start, end)."""

    start: time
    end: time

    @classmethod
    def parse(cls, value: Any) -> "TimeRange":
        if isinstance(value, TimeRange):
            return value
        if isinstance(value, Mapping):
            return cls(parse_time(value["start"]), parse_time(value["end"]))
        if isinstance(value, (tuple, list)) and len(value) == 2:
            return cls(parse_time(value[0]), parse_time(value[1]))
        raise TypeError(
            "Availability ranges must be TimeRange, {'start','end'} or (start, end)."
        )

    def __str__(self) -> str:
        return f"{self.start:%H:%M}-{self.end:%H:%M}"


WHOLE_DAY = TimeRange(time(0, 0), time(23, 59))


def _normalize_availability(value: Any) -> dict[str, TimeRange]:
    if value is None:
        return {}
    if isinstance(value, Mapping):
        return {normalize_day(d): TimeRange.parse(r) for d, r in value.items()}
    if isinstance(value, (str, bytes)):
        raise TypeError("Availability must be a collection of day names or a mapping.")
    return {normalize_day(d): WHOLE_DAY for d in value}


@dataclass(slots=True)
class Employee:
    """
    A member of the store roster.

    `availability` maps canonical weekday -> TimeRange. A day missing from the
    mapping is a hard day off for the week. A plain collection of day names is
    accepted and means whole-day availability on those days.
    """

    id: str
    name: str
    role: Role
    contract_type: ContractType
    availability: dict[str, TimeRange] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.id = str(self.id)
        self.role = Role.parse(self.role)
        self.contract_type = ContractType.parse(self.contract_type)
        self.availability = _normalize_availability(self.availability)

    def __repr__(self) -> str:
        days = ", ".join(
            f"{d[:3]}={self.availability[d]}" for d in WEEKDAYS if d in self.availability
        )
        return (
            f"Employee(id='{self.id}', name='{self.name}', role={self.role.value}, "
            f"contract={self.contract_type.value}, avail=[{days}])"
        )

    @property
    def available_days(self) -> list[str]:
        return [d for d in WEEKDAYS if d in self.availability]

    @property
    def is_fully_available(self) -> bool:
        return all(d in self.availability for d in WEEKDAYS)

    def is_available(self, day: str) -> bool:
        return day in self.availability

    def available_from(self, day: str) -> time | None:
        rng = self.availability.get(day)
        return rng.start if rng is not None else None


def employees_by_role(employees: Iterable[Employee]) -> dict[Role, list[Employee]]:
    """Group employees by role, preserving roster order inside each group."""
    groups: dict[Role, list[Employee]] = {}
    for emp in employees:
        groups.setdefault(emp.role, []).append(emp)
    return groups
