from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt

from shiftplan.config import Config
from shiftplan.input_data import InputData
from shiftplan.result_types import ScheduleResult
from shiftplan.staff import WEEKDAYS

from .metrics import coverage_by_day_and_role
from .text_report import get_active_report


def _save_and_show(fig: plt.Figure, filename: str) -> None:
    """Persist the plot under outputs/ and show it."""
    out_dir = Path("outputs")
    out_dir.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_dir / filename, dpi=fig.dpi, bbox_inches="tight")
    plt.show()


def show_coverage_by_day(
    cfg: Config,
    res: ScheduleResult,
    data: InputData,
    enable_plot: bool = True,
) -> None:
    """Grouped bars of assigned headcount per role and day, with required as outline."""
    if not enable_plot:
        return

    df = coverage_by_day_and_role(res, data, cfg)
    if df.empty:
        return

    days = [d for d in WEEKDAYS if d in set(df["day"])]
    roles = list(dict.fromkeys(df["role"]))
    width = 0.8 / max(len(roles), 1)
    cmap = plt.get_cmap("Pastel1")

    fig, ax = plt.subplots(figsize=(8, 4), dpi=150)
    ax.set_title("Assigned vs required positions by day", pad=30)
    for i, role in enumerate(roles):
        sub = df[df["role"] == role].set_index("day").reindex(days, fill_value=0)
        xs = [j + i * width for j in range(len(days))]
        ax.bar(
            xs,
            sub["assigned"],
            width=width,
            color=cmap(i % cmap.N),
            label=role,
            edgecolor="none",
        )
        ax.bar(
            xs,
            sub["required"],
            width=width,
            fill=False,
            edgecolor="black",
            linewidth=0.6,
        )
    ax.set_xticks([j + 0.4 - width / 2 for j in range(len(days))], [d[:3] for d in days])
    ax.set_ylabel("Positions")
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.legend(
        ncol=len(roles),
        loc="upper center",
        bbox_to_anchor=(0.5, 1.12),
        frameon=False,
        fontsize=7,
    )
    fig.tight_layout()
    _save_and_show(fig, "coverage_by_day.png")
    report = get_active_report()
    if report is not None:
        report.add_figure(fig)


def show_days_worked_histogram(
    res: ScheduleResult, data: InputData, enable_plot: bool = True
) -> None:
    """Histogram of days assigned per employee."""
    if not enable_plot or not data.employees:
        return

    values = [int(res.days_assigned.get(e.id, 0)) for e in data.employees]
    fig, ax = plt.subplots(figsize=(6, 3.5), dpi=150)
    ax.hist(values, bins=range(0, len(WEEKDAYS) + 2), align="left", rwidth=0.85)
    ax.set_xticks(range(0, len(WEEKDAYS) + 1))
    ax.set_xlabel("Days assigned")
    ax.set_ylabel("Employees")
    ax.set_title("Days worked per employee")
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    fig.tight_layout()
    _save_and_show(fig, "days_worked_histogram.png")
    report = get_active_report()
    if report is not None:
        report.add_figure(fig)
