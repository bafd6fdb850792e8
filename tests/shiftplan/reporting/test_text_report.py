from __future__ import annotations

from pathlib import Path

from shiftplan.catalog import ShiftSlot
from shiftplan.config import Config
from shiftplan.engine import generate_schedule
from shiftplan.input_data import InputData
from shiftplan.random_source import IdentityRandomSource
from shiftplan.reporting.text_report import (
    ReportDocument,
    _log_print,
    get_active_report,
    render_text_report,
    set_active_report,
)
from shiftplan.staff import WEEKDAYS, ContractType, Employee, Role


def make_data(required: int) -> InputData:
    employees = [
        Employee("a", "Ana", Role.PRODUCTION, ContractType.FULL_TIME, list(WEEKDAYS)),
        Employee("b", "Beto", Role.PRODUCTION, ContractType.FULL_TIME, list(WEEKDAYS)),
    ]
    slots = [
        ShiftSlot("t", "Tarde", "15:30", "19:00", required_staff_by_role={"production": required})
    ]
    return InputData(employees=employees, slots=slots, days=["sunday"])


def run(data: InputData, cfg: Config):
    return generate_schedule(data.days, data.slots, data.employees, cfg, IdentityRandomSource())


def test_render_text_report_fully_staffed(capsys):
    cfg = Config()
    data = make_data(2)
    render_text_report(cfg, run(data, cfg), data)
    out = capsys.readouterr().out
    assert "Schedule: 1 day(s) | 1 slot(s) | 2 employee(s)" in out
    assert "Coverage: filled 2 / required 2 positions (100.0%)" in out
    assert "Shortfalls: none" in out
    assert "Days-worked distribution" in out


def test_render_text_report_with_shortfalls(capsys):
    cfg = Config()
    data = make_data(3)
    render_text_report(cfg, run(data, cfg), data, num_print_examples=1)
    out = capsys.readouterr().out
    assert "Shortfalls: 1 requirement(s), 1 position(s) unfilled." in out
    assert "Unfilled positions by day and role" in out
    assert "Per-employee totals (top 1)" in out


def test_log_print_mirrors_into_active_report(capsys):
    doc = ReportDocument(Path("unused.pdf"))
    set_active_report(doc)
    try:
        _log_print("hello", "world")
    finally:
        set_active_report(None)
    assert capsys.readouterr().out == "hello world\n"
    assert doc.lines == ["hello world"]
    assert get_active_report() is None


def test_report_document_writes_pdf(tmp_path):
    doc = ReportDocument(tmp_path / "nested" / "report.pdf")
    doc.add_text("line")
    doc.write()
    assert (tmp_path / "nested" / "report.pdf").stat().st_size > 0

    empty = ReportDocument(tmp_path / "empty.pdf")
    empty.write()
    assert (tmp_path / "empty.pdf").exists()
