from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional

from shiftplan.catalog import SlotKind
from shiftplan.staff import WEEKDAYS, ContractType, Role, normalize_day

WEEKDAYS_MON_FRI: tuple[str, ...] = WEEKDAYS[:5]
WEEKEND: tuple[str, ...] = ("saturday", "sunday")


@dataclass(frozen=True)
class StaffingOverride:
    """Replace a slot's base headcount for `role` on `days`, for slots of `kind`."""

    role: Role
    days: frozenset[str]
    required: int
    kind: SlotKind = SlotKind.CLOSING

    def matches(self, kind: SlotKind, role: Role, day: str) -> bool:
        return self.kind is kind and self.role is role and day in self.days


def _default_overrides() -> list[StaffingOverride]:
    return [
        StaffingOverride(Role.PRODUCTION, frozenset(WEEKDAYS_MON_FRI), 2),
        StaffingOverride(Role.MODULE_STORE_SERVICE, frozenset(WEEKEND), 2),
        StaffingOverride(Role.MODULE_STORE_SERVICE, frozenset(WEEKDAYS_MON_FRI), 1),
    ]


@dataclass
class Config:

    ### CONTRACTS ###

    # Weekly hour targets (also the weekly cap)
    FULL_TIME_WEEKLY_HOURS: float = 52.5
    PART_TIME_WEEKLY_HOURS: float = 23.0

    # A fully available employee still works at most this many days
    MAX_WORKING_DAYS: int = 6

    # Slack on the weekly cap check, in hours
    HOURS_TOLERANCE: float = 0.01

    ### HARD LIMITS ###

    MAX_CLOSING_SHIFTS: int = 3

    # Forced rest days
    REST_DAY_CANDIDATES: tuple[str, ...] = WEEKDAYS_MON_FRI
    MAX_REST_PER_DAY: int = 2

    ### ORDERING ###

    # Weekend and Friday first, while the candidate pool is fullest
    DAY_PRIORITY: tuple[str, ...] = (
        "sunday",
        "saturday",
        "friday",
        "monday",
        "tuesday",
        "wednesday",
        "thursday",
    )

    # False -> opening, closing, high-traffic, ordinary
    CLOSING_SLOTS_LAST: bool = True

    # Require slot start >= employee's availability start that day
    CHECK_AVAILABILITY_START: bool = True

    ### STAFFING RULES ###

    STAFFING_OVERRIDES: list[StaffingOverride] = field(
        default_factory=_default_overrides
    )

    # RANDOM SEED
    SEED: Optional[int] = None

    def __post_init__(self) -> None:
        self.REST_DAY_CANDIDATES = tuple(
            normalize_day(d) for d in self.REST_DAY_CANDIDATES
        )
        self.DAY_PRIORITY = tuple(normalize_day(d) for d in self.DAY_PRIORITY)

    def validate(self) -> None:
        """
        Validate the Config object has sensible values before generating.
        """
        if self.FULL_TIME_WEEKLY_HOURS <= 0 or self.PART_TIME_WEEKLY_HOURS <= 0:
            raise ValueError("Weekly hour targets must be > 0.")
        if not (1 <= self.MAX_WORKING_DAYS <= len(WEEKDAYS)):
            raise ValueError("MAX_WORKING_DAYS must be within [1, 7].")
        if self.HOURS_TOLERANCE < 0:
            raise ValueError("HOURS_TOLERANCE must be non-negative.")
        if self.MAX_CLOSING_SHIFTS < 0:
            raise ValueError("MAX_CLOSING_SHIFTS must be non-negative.")
        if not self.REST_DAY_CANDIDATES:
            raise ValueError("REST_DAY_CANDIDATES must not be empty.")
        if len(set(self.REST_DAY_CANDIDATES)) != len(self.REST_DAY_CANDIDATES):
            raise ValueError("REST_DAY_CANDIDATES must not repeat days.")
        if self.MAX_REST_PER_DAY <= 0:
            raise ValueError("MAX_REST_PER_DAY must be > 0.")
        if len(set(self.DAY_PRIORITY)) != len(self.DAY_PRIORITY):
            raise ValueError("DAY_PRIORITY must not repeat days.")
        for ov in self.STAFFING_OVERRIDES:
            if ov.required < 0:
                raise ValueError(f"Override for {ov.role.value} has negative headcount.")
        if self.SEED is not None and not isinstance(self.SEED, int):
            raise ValueError("SEED must be an int or None.")


def weekly_target(C: Config, contract_type: ContractType) -> float:
    if contract_type is ContractType.FULL_TIME:
        return float(C.FULL_TIME_WEEKLY_HOURS)
    return float(C.PART_TIME_WEEKLY_HOURS)


def override_staffing(
    C: Config,
    role: Role | str,
    days: Iterable[str],
    required: int,
    kind: SlotKind = SlotKind.CLOSING,
) -> None:
    """Append a staffing override. Later overrides win over earlier ones."""
    if required < 0:
        raise ValueError("required must be non-negative")
    C.STAFFING_OVERRIDES.append(
        StaffingOverride(
            role=Role.parse(role),
            days=frozenset(normalize_day(d) for d in days),
            required=int(required),
            kind=SlotKind(kind),
        )
    )


def clear_staffing_overrides(C: Config) -> None:
    C.STAFFING_OVERRIDES.clear()


cfg = Config(SEED=None)
