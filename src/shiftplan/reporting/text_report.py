from __future__ import annotations

from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from matplotlib.backends.backend_pdf import PdfPages

from shiftplan.config import Config
from shiftplan.extract import extract_employee_totals, extract_shortfalls
from shiftplan.input_data import InputData
from shiftplan.result_types import ScheduleResult

from .metrics import compute_coverage_metrics, coverage_by_day_and_role


class ReportDocument:
    def __init__(self, path: Path) -> None:
        self.path = path
        self.lines: list[str] = []
        self.figures: list[plt.Figure] = []

    def add_text(self, text: str) -> None:
        self.lines.append(text)

    def add_figure(self, fig: plt.Figure) -> None:
        self.figures.append(fig)

    def write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with PdfPages(self.path) as pdf:
            if self.lines:
                fig, ax = plt.subplots(figsize=(8.27, 11.69))
                ax.axis("off")
                ax.text(
                    0.01,
                    0.99,
                    "\n".join(self.lines),
                    ha="left",
                    va="top",
                    fontsize=8,
                    family="monospace",
                )
                pdf.savefig(fig, bbox_inches="tight")
                plt.close(fig)
            elif not self.figures:
                fig, ax = plt.subplots(figsize=(8.27, 11.69))
                ax.axis("off")
                ax.text(
                    0.5,
                    0.5,
                    "Report contains no data.",
                    ha="center",
                    va="center",
                    fontsize=12,
                )
                pdf.savefig(fig, bbox_inches="tight")
                plt.close(fig)
            for fig in self.figures:
                pdf.savefig(fig, bbox_inches="tight")
                plt.close(fig)


_ACTIVE_REPORT: Optional[ReportDocument] = None


def set_active_report(doc: Optional[ReportDocument]) -> None:
    global _ACTIVE_REPORT
    _ACTIVE_REPORT = doc


def get_active_report() -> Optional[ReportDocument]:
    return _ACTIVE_REPORT


def _log_print(*args, **kwargs) -> None:
    from io import StringIO

    buf = StringIO()
    kwargs_copy = kwargs.copy()
    kwargs_copy["file"] = buf
    print(*args, **kwargs_copy)
    print(*args, **kwargs)
    if _ACTIVE_REPORT is not None:
        _ACTIVE_REPORT.add_text(buf.getvalue().rstrip("\n"))


def _fmt_float(x: float | None, nd: int = 2, as_pct: bool = False) -> str:
    if x is None or pd.isna(x):
        return "nan"
    return f"{float(100 * x):.{nd}f}%" if as_pct else f"{float(x):.{nd}f}"


def _print_days_histogram(df_emp: pd.DataFrame) -> None:
    if df_emp.empty or "days_assigned" not in df_emp.columns:
        _log_print("\nDays-worked distribution: (no data)")
        return
    counts = df_emp["days_assigned"].astype(int).value_counts().sort_index()
    _log_print("\nDays-worked distribution (staff per day count):")
    for d, n in counts.items():
        bar = "█" * min(int(n), 50)
        _log_print(f"  {d:>2}d : {n:>4} staff  {bar}")


def render_text_report(
    cfg: Config,
    res: ScheduleResult,
    data: InputData,
    *,
    num_print_examples: int = 6,
) -> None:
    _log_print(
        f"Schedule: {len(res.schedule)} day(s) | {len(data.slots)} slot(s) | "
        f"{len(data.employees)} employee(s)"
    )

    cov = compute_coverage_metrics(res, data, cfg)
    _log_print(
        f"\nCoverage: filled {cov.filled_positions:,} / required "
        f"{cov.required_positions:,} positions "
        f"({_fmt_float(cov.fill_rate, nd=1, as_pct=True)})"
    )
    if cov.employees_over_target:
        _log_print(f"⚠️ {cov.employees_over_target} employee(s) over weekly target.")
    else:
        _log_print("All employees within their weekly target.")
    if cov.employees_unassigned:
        _log_print(f"{cov.employees_unassigned} employee(s) received no shifts.")

    if cov.days_spread_by_role:
        spread = ", ".join(
            f"{role}={gap}" for role, gap in sorted(cov.days_spread_by_role.items())
        )
        _log_print(f"Days-assigned spread by role (max - min): {spread}")

    df_emp = extract_employee_totals(res, data, cfg)
    if not df_emp.empty:
        _log_print(f"\nPer-employee totals (top {num_print_examples}):")
        _log_print(df_emp.head(num_print_examples).to_string(index=False))

        hrs = df_emp["hours"].to_numpy(dtype=float)
        _log_print(
            "\nHours distribution across employees: "
            f"mean={_fmt_float(float(np.mean(hrs)))} | "
            f"min={_fmt_float(float(np.min(hrs)))} | "
            f"max={_fmt_float(float(np.max(hrs)))}"
        )

    if res.is_fully_staffed:
        _log_print("\nShortfalls: none, every requirement met.")
    else:
        df_short = extract_shortfalls(res)
        _log_print(
            f"\nShortfalls: {len(df_short)} requirement(s), "
            f"{int(df_short['missing'].sum())} position(s) unfilled."
        )
        _log_print(
            df_short.sort_values("missing", ascending=False, kind="stable")
            .head(num_print_examples)
            .to_string(index=False)
        )
        by_role = coverage_by_day_and_role(res, data, cfg)
        worst = by_role[by_role["missing"] > 0]
        if not worst.empty:
            _log_print("\nUnfilled positions by day and role:")
            _log_print(worst.to_string(index=False))

    _print_days_histogram(df_emp)
