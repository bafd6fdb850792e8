from __future__ import annotations

from shiftplan.catalog import ShiftSlot
from shiftplan.config import Config
from shiftplan.engine import generate_schedule
from shiftplan.input_data import InputData
from shiftplan.random_source import IdentityRandomSource
from shiftplan.reporting.metrics import (
    compute_coverage_metrics,
    coverage_by_day_and_role,
    days_spread_by_role,
    slot_requirements,
)
from shiftplan.staff import WEEKDAYS, ContractType, Employee, Role


def make_data() -> InputData:
    employees = [
        Employee("a", "A", Role.PRODUCTION, ContractType.FULL_TIME, list(WEEKDAYS)),
        Employee("b", "B", Role.PRODUCTION, ContractType.FULL_TIME, list(WEEKDAYS)),
        Employee("s", "S", Role.STORE_SERVICE, ContractType.PART_TIME, ["monday"]),
    ]
    slots = [
        ShiftSlot(
            "c",
            "Cierre",
            "19:00",
            "23:30",
            required_staff_by_role={Role.PRODUCTION: 3, Role.STORE_SERVICE: 1},
        )
    ]
    return InputData(employees=employees, slots=slots, days=["saturday"])


def make_result(data, cfg):
    return generate_schedule(data.days, data.slots, data.employees, cfg, IdentityRandomSource())


def test_slot_requirements_resolve_overrides():
    cfg = Config()
    data = make_data()
    data.days = ["monday", "saturday"]
    reqs = {(r.day, r.role): r.required for r in slot_requirements(data, cfg)}
    assert reqs[("monday", "production")] == 2
    assert reqs[("saturday", "production")] == 3
    assert reqs[("saturday", "store-service")] == 1


def test_coverage_by_day_and_role():
    cfg = Config()
    data = make_data()
    res = make_result(data, cfg)
    df = coverage_by_day_and_role(res, data, cfg)
    rows = {r.role: (r.required, r.assigned, r.missing) for r in df.itertuples()}
    assert rows == {"production": (3, 2, 1), "store-service": (1, 0, 1)}


def test_compute_coverage_metrics():
    cfg = Config()
    data = make_data()
    res = make_result(data, cfg)
    m = compute_coverage_metrics(res, data, cfg)
    assert m.required_positions == 4
    assert m.filled_positions == 2
    assert m.unfilled_positions == 2
    assert m.shortfall_records == 2
    assert m.employees_unassigned == 1
    assert m.employees_over_target == 0
    assert m.fill_rate == 0.5


def test_metrics_for_empty_catalog():
    cfg = Config()
    data = InputData(employees=[], slots=[], days=["monday"])
    res = generate_schedule(data.days, data.slots, data.employees, cfg)
    m = compute_coverage_metrics(res, data, cfg)
    assert m.required_positions == 0
    assert m.fill_rate == 1.0
    assert coverage_by_day_and_role(res, data, cfg).empty


def test_days_spread_groups_by_availability():
    cfg = Config()
    data = make_data()
    res = make_result(data, cfg)
    res.days_assigned["a"] = 4
    res.days_assigned["b"] = 6
    assert days_spread_by_role(res, data) == {"production": 2, "store-service": 0}
