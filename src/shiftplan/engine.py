# src/shiftplan/engine.py
from __future__ import annotations

import sys
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import Iterable, Sequence

from shiftplan.catalog import ShiftSlot, SlotKind
from shiftplan.config import Config, cfg
from shiftplan.random_source import NumpyRandomSource, RandomSource, spawn_sources
from shiftplan.result_types import Assignment, DailySchedule, ScheduleResult, Shortfall
from shiftplan.staff import Employee, Role, employees_by_role, normalize_day
from shiftplan.state import SchedulingState


# ---------- Rest days ----------
def preassign_rest_days(
    employees: Sequence[Employee], C: Config, rng: RandomSource
) -> dict[str, list[str]]:
    """
    Give every fully available employee one forced rest day, balanced per role.

    Within a role group the least-used candidate day wins; candidates already at
    MAX_REST_PER_DAY are skipped unless every candidate is at the cap. Employees
    with any unavailable day keep that as their rest and get no forced day.
    """
    rest: dict[str, list[str]] = {emp.id: [] for emp in employees}
    for group in employees_by_role(employees).values():
        counts = {d: 0 for d in C.REST_DAY_CANDIDATES}
        for emp in rng.shuffle(group):
            if not emp.is_fully_available:
                continue
            candidates = rng.shuffle(C.REST_DAY_CANDIDATES)
            open_days = [d for d in candidates if counts[d] < C.MAX_REST_PER_DAY]
            pool = open_days or candidates
            best = sorted(pool, key=lambda d: counts[d])[0]
            rest[emp.id].append(best)
            counts[best] += 1
    return rest


# ---------- Slot order ----------
def slot_priority(slot: ShiftSlot, C: Config) -> int:
    if slot.kind is SlotKind.OPENING:
        return 0
    if slot.kind is SlotKind.CLOSING:
        return 2 if C.CLOSING_SLOTS_LAST else 1
    return 1 if C.CLOSING_SLOTS_LAST else 2


def order_slots(slots: Iterable[ShiftSlot], C: Config) -> list[ShiftSlot]:
    """
    Opening slots first and closing slots last; high-traffic before ordinary in
    between. With CLOSING_SLOTS_LAST=False closing slots follow the opening ones.
    Ties keep catalog order.
    """
    return sorted(slots, key=lambda s: (slot_priority(s, C), not s.is_high_traffic))


# ---------- Staffing rules ----------
def required_staff(slot: ShiftSlot, role: Role, day: str, C: Config) -> int:
    """Effective headcount for (slot, role, day): base value, then the last matching override."""
    required = int(slot.required_staff_by_role.get(role, 0))
    if required <= 0:
        return 0
    for ov in C.STAFFING_OVERRIDES:
        if ov.matches(slot.kind, role, day):  # type: ignore[arg-type]
            required = ov.required
    return required


# ---------- Candidates ----------
def eligible_candidates(
    employees: Iterable[Employee],
    slot: ShiftSlot,
    role: Role,
    day: str,
    state: SchedulingState,
    assigned_today: set[str],
    assigned_to_slot: list[str],
) -> list[Employee]:
    C = state.cfg
    out: list[Employee] = []
    for emp in employees:
        if emp.role is not role:
            continue
        start = emp.available_from(day)
        if start is None:
            continue
        if C.CHECK_AVAILABILITY_START and slot.start_time < start:
            continue
        if state.is_resting(emp, day):
            continue
        if emp.id in assigned_today or emp.id in assigned_to_slot:
            continue
        if slot.is_closing and not state.can_close(emp):
            continue
        if not state.fits_weekly_cap(emp):
            continue
        out.append(emp)
    return out


def rank_candidates(
    candidates: Sequence[Employee],
    slot: ShiftSlot,
    state: SchedulingState,
    rng: RandomSource,
) -> list[Employee]:
    """Shuffle, then stable-sort: fewest days assigned first; closing ties by fewest closings."""
    shuffled = rng.shuffle(candidates)

    def _key(emp: Employee) -> tuple[int, int]:
        closings = state.closing_counts[emp.id] if slot.is_closing else 0
        return state.days_assigned[emp.id], closings

    return sorted(shuffled, key=_key)


# ---------- Generation ----------
def _day_order(days: Sequence[str], C: Config) -> list[str]:
    first = [d for d in C.DAY_PRIORITY if d in days]
    return first + [d for d in days if d not in first]


def _check_unique_ids(employees: Sequence[Employee]) -> None:
    seen: set[str] = set()
    for emp in employees:
        if emp.id in seen:
            raise ValueError(f"Duplicate employee id {emp.id!r} in roster.")
        seen.add(emp.id)


def generate_schedule(
    days: Sequence[str],
    slots: Sequence[ShiftSlot],
    employees: Sequence[Employee],
    config: Config | None = None,
    random_source: RandomSource | None = None,
    *,
    verbose: bool = False,
    stream=None,
) -> ScheduleResult:
    """
    Build one week of assignments with a single greedy pass.

    Days are visited in DAY_PRIORITY order and slots in `order_slots` order;
    for every (day, slot, role) the ranked eligible candidates are committed
    up to the required headcount. Commitments are never revisited. Missing
    headcount is reported in `ScheduleResult.shortfalls`, never raised.

    Parameters
    ----------
    days:
        Weekday names to schedule; the output keeps this order.
    random_source:
        Shuffle provider for rest days and tie-breaks. Defaults to a
        `NumpyRandomSource` seeded with `Config.SEED`.
    """
    C = config or cfg
    rng = random_source or NumpyRandomSource(C.SEED)
    stream = stream or sys.stdout

    day_names: list[str] = []
    for d in days:
        name = normalize_day(d)
        if name not in day_names:
            day_names.append(name)
    employees = list(employees)
    _check_unique_ids(employees)

    rest_days = preassign_rest_days(employees, C, rng)
    state = SchedulingState(C, employees, rest_days)
    ordered = order_slots(slots, C)

    if verbose:
        print_rest_days(employees, rest_days, stream=stream)

    by_day = {d: DailySchedule(day=d) for d in day_names}
    shortfalls: list[Shortfall] = []

    for day in _day_order(day_names, C):
        assigned_today: set[str] = set()
        for slot in ordered:
            assigned_to_slot: list[str] = []
            for role in slot.required_staff_by_role:
                required = required_staff(slot, role, day, C)
                if required == 0:
                    continue
                pool = eligible_candidates(
                    employees, slot, role, day, state, assigned_today, assigned_to_slot
                )
                taken = rank_candidates(pool, slot, state, rng)[:required]
                for emp in taken:
                    assigned_to_slot.append(emp.id)
                    assigned_today.add(emp.id)
                    state.commit(emp, slot, day)
                if len(taken) < required:
                    shortfalls.append(
                        Shortfall(day, slot.id, role, required, len(taken))
                    )
            by_day[day].assignments.append(
                Assignment(slot_id=slot.id, employee_ids=assigned_to_slot)
            )

    result = ScheduleResult(
        schedule=[by_day[d] for d in day_names],
        shortfalls=_sorted_shortfalls(shortfalls, day_names, ordered),
        rest_days=state.rest_days,
        hours_worked=state.hours_worked,
        days_assigned=state.days_assigned,
        closing_counts=state.closing_counts,
        worked_days=state.worked_days,
    )
    if verbose:
        print_shortfall_summary(result, stream=stream)
    return result


def _sorted_shortfalls(
    shortfalls: list[Shortfall], days: Sequence[str], slots: Sequence[ShiftSlot]
) -> list[Shortfall]:
    day_idx = {d: i for i, d in enumerate(days)}
    slot_idx = {s.id: i for i, s in enumerate(slots)}
    role_idx = {r: i for i, r in enumerate(Role)}
    return sorted(
        shortfalls,
        key=lambda s: (day_idx[s.day], slot_idx[s.slot_id], role_idx[s.role]),
    )


def _slots_for_role(slots: Sequence[ShiftSlot], role: Role) -> list[ShiftSlot]:
    return [
        replace(s, required_staff_by_role={role: s.required_staff_by_role[role]})
        for s in slots
        if s.uses_role(role)
    ]


def generate_by_role(
    days: Sequence[str],
    slots: Sequence[ShiftSlot],
    employees: Sequence[Employee],
    config: Config | None = None,
    *,
    max_workers: int = 1,
) -> ScheduleResult:
    """
    Run `generate_schedule` independently per role and merge the results.

    Each role-scoped call sees only that role's employees and the slots that
    need the role, and owns its state and random source (spawned from
    Config.SEED), so the calls may run on a thread pool.
    """
    C = config or cfg
    employees = list(employees)
    _check_unique_ids(employees)
    groups = employees_by_role(employees)
    roles = [
        r for r in Role if r in groups or any(s.uses_role(r) for s in slots)
    ]
    sources = spawn_sources(C.SEED, len(roles))

    def _run(i: int) -> ScheduleResult:
        role = roles[i]
        return generate_schedule(
            days,
            _slots_for_role(slots, role),
            groups.get(role, []),
            C,
            sources[i],
        )

    if max_workers > 1 and len(roles) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            parts = list(pool.map(_run, range(len(roles))))
    else:
        parts = [_run(i) for i in range(len(roles))]

    return merge_results(parts, days, slots, C)


def merge_results(
    parts: Sequence[ScheduleResult],
    days: Sequence[str],
    slots: Sequence[ShiftSlot],
    C: Config,
) -> ScheduleResult:
    """Combine role-scoped results into one weekly schedule (slot-priority order)."""
    day_names: list[str] = []
    for d in days:
        name = normalize_day(d)
        if name not in day_names:
            day_names.append(name)
    ordered = order_slots(slots, C)

    merged = ScheduleResult(schedule=[])
    for day in day_names:
        ds = DailySchedule(day=day)
        for slot in ordered:
            ids: list[str] = []
            for part in parts:
                a = part.day(day).assignment_for(slot.id)
                if a is not None:
                    ids.extend(a.employee_ids)
            ds.assignments.append(Assignment(slot_id=slot.id, employee_ids=ids))
        merged.schedule.append(ds)

    shortfalls: list[Shortfall] = []
    for part in parts:
        shortfalls.extend(part.shortfalls)
        merged.rest_days.update(part.rest_days)
        merged.hours_worked.update(part.hours_worked)
        merged.days_assigned.update(part.days_assigned)
        merged.closing_counts.update(part.closing_counts)
        merged.worked_days.update(part.worked_days)
    merged.shortfalls = _sorted_shortfalls(shortfalls, day_names, ordered)
    return merged


# ---------- Console output ----------
def print_rest_days(
    employees: Sequence[Employee], rest_days: dict[str, list[str]], *, stream=sys.stdout
) -> None:
    print("\nForced rest days:", file=stream)
    for role, group in employees_by_role(employees).items():
        parts = [
            f"{emp.name}={rest_days[emp.id][0]}" for emp in group if rest_days.get(emp.id)
        ]
        print(f"  {role.value}: {', '.join(parts) if parts else '(none)'}", file=stream)


def print_shortfall_summary(result: ScheduleResult, *, stream=sys.stdout) -> None:
    if result.is_fully_staffed:
        print("✅ Every slot staffed to its requirement.", file=stream)
        return
    missing = sum(s.missing for s in result.shortfalls)
    print(
        f"❌ {len(result.shortfalls)} under-staffed (day, slot, role) requirement(s), "
        f"{missing} position(s) unfilled.",
        file=stream,
    )
