from __future__ import annotations

import pandas as pd
import pytest

from shiftplan.catalog import ShiftSlot
from shiftplan.config import Config
from shiftplan.engine import generate_schedule
from shiftplan.extract import (
    ASSIGNMENT_COLUMNS,
    extract_assignments,
    extract_employee_totals,
    extract_shortfalls,
    shift_window,
)
from shiftplan.input_data import InputData
from shiftplan.output import produce_outputs, weekly_grid
from shiftplan.random_source import IdentityRandomSource
from shiftplan.staff import WEEKDAYS, ContractType, Employee, Role


def make_data() -> InputData:
    employees = [
        Employee("a", "Ana", Role.PRODUCTION, ContractType.FULL_TIME, list(WEEKDAYS)),
        Employee("b", "Beto", Role.PRODUCTION, ContractType.PART_TIME, ["saturday", "sunday"]),
    ]
    slots = [
        ShiftSlot("o", "Apertura", "09:00", "12:00", required_staff_by_role={"production": 1}),
        ShiftSlot("c", "Cierre", "19:00", "23:30", required_staff_by_role={"production": 2}),
    ]
    return InputData(employees=employees, slots=slots, days=["saturday", "sunday"])


def make_result(data: InputData, cfg: Config):
    return generate_schedule(data.days, data.slots, data.employees, cfg, IdentityRandomSource())


def test_shift_window_anchors():
    opening = ShiftSlot("o", "Apertura", "09:00", "12:00")
    closing = ShiftSlot("c", "Cierre", "19:00", "23:30")
    late = ShiftSlot("l", "Noche", "20:00", "23:00")
    assert shift_window(opening, 8.75) == ("09:00", "17:45")
    assert shift_window(closing, 8.75) == ("14:45", "23:30")
    assert shift_window(late, 5) == ("20:00", "01:00")
    assert shift_window(closing, 23 / 3) == ("15:50", "23:30")


def test_extract_assignments_rows():
    cfg = Config()
    data = make_data()
    res = make_result(data, cfg)
    df = extract_assignments(res, data, cfg)

    assert list(df.columns) == ASSIGNMENT_COLUMNS
    sat = df[df["day"] == "saturday"]
    assert sorted(sat["employee_id"]) == ["a", "b"]
    ana = df[(df["employee_id"] == "a")].iloc[0]
    assert ana["duration_h"] == pytest.approx(8.75)
    assert ana["slot_kind"] in {"opening", "closing"}
    assert df["day_index"].is_monotonic_increasing


def test_extract_empty_frames_keep_columns():
    cfg = Config()
    data = InputData(employees=[], slots=[], days=["monday"])
    res = generate_schedule(data.days, data.slots, data.employees, cfg)
    assert extract_assignments(res, data, cfg).empty
    assert list(extract_shortfalls(res).columns) == [
        "day",
        "slot_id",
        "role",
        "required",
        "assigned",
        "missing",
    ]
    assert extract_employee_totals(res, data, cfg).empty


def test_employee_totals_sorted_by_hours():
    cfg = Config()
    data = make_data()
    res = make_result(data, cfg)
    df = extract_employee_totals(res, data, cfg)
    # b works two 11.5 h closings, a two 8.75 h openings
    assert list(df["id"]) == ["b", "a"]
    assert df.iloc[0]["weekly_target"] == 23.0
    assert df.iloc[0]["rest_days"] == ""
    assert df.iloc[1]["rest_days"] == "monday"
    assert df.iloc[1]["hours"] == pytest.approx(17.5)
    assert df.iloc[1]["worked_days"] == "saturday,sunday"


def test_weekly_grid_marks_days_off():
    cfg = Config()
    data = make_data()
    res = make_result(data, cfg)
    grid = weekly_grid(extract_assignments(res, data, cfg), data)
    assert list(grid.columns) == ["name", "role", "saturday", "sunday"]
    for day in ("saturday", "sunday"):
        assert grid.loc["a", day] != "off"
        assert "-" in grid.loc["b", day]


def test_produce_outputs_writes_csvs(tmp_path):
    cfg = Config()
    data = make_data()
    res = make_result(data, cfg)
    paths = produce_outputs(res, data, cfg, tmp_path / "out")
    assert set(paths) == {"assignments", "grid", "employees", "shortfalls"}
    for p in paths.values():
        assert p.exists()
    shortfalls = pd.read_csv(paths["shortfalls"])
    assert list(shortfalls.columns) == ["day", "slot_id", "role", "required", "assigned", "missing"]
