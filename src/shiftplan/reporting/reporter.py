from __future__ import annotations

from pathlib import Path

from shiftplan.config import Config
from shiftplan.generate.roster import roster_summary, roster_to_dataframe
from shiftplan.input_data import InputData
from shiftplan.reporting.plots import show_coverage_by_day, show_days_worked_histogram
from shiftplan.reporting.text_report import (
    ReportDocument,
    render_text_report,
    set_active_report,
)
from shiftplan.result_types import ScheduleResult


class Reporter:
    """High-level orchestrator: prints input summaries and renders reports."""

    def __init__(
        self,
        cfg: Config,
        num_print_examples: int = 6,
        enable_plots: bool = True,
        report_path: Path = Path("outputs/report.pdf"),
    ) -> None:
        self.cfg = cfg
        self.num_print_examples = num_print_examples
        self.enable_plots = enable_plots
        self.report_path = report_path

    def pre_generate(self, data: InputData) -> None:
        """Print a roster/catalog summary before generating."""
        summary = roster_summary(data.employees)
        roles = ", ".join(f"{r}={n}" for r, n in sorted(summary["roles"].items()))
        print(
            f"\nRoster: {summary['N']} employee(s) [{roles or 'none'}] | "
            f"full-time {summary['full_time_pct']:.0%} | "
            f"available all week {summary['fully_available_pct']:.0%}"
        )
        print(f"Slots: {', '.join(s.name for s in data.slots) or '(none)'}")
        print(f"Days: {', '.join(data.days)}")
        if data.employees and self.num_print_examples:
            sample = roster_to_dataframe(data.employees).head(self.num_print_examples)
            print(sample.to_string(index=False, na_rep="-"))

    def render_text_report(self, res: ScheduleResult, data: InputData) -> None:
        """Public entry point for callers that want text reporting only."""
        render_text_report(
            self.cfg,
            res,
            data,
            num_print_examples=self.num_print_examples,
        )

    def post_generate(self, res: ScheduleResult, data: InputData) -> None:
        """Render textual report (and optional plots) after generating."""
        report_doc = ReportDocument(self.report_path)
        set_active_report(report_doc)
        try:
            self.render_text_report(res, data)
            if not self.enable_plots:
                return
            show_coverage_by_day(self.cfg, res, data, enable_plot=self.enable_plots)
            show_days_worked_histogram(res, data, enable_plot=self.enable_plots)
        finally:
            set_active_report(None)
            report_doc.write()
