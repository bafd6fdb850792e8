from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Callable, Sequence

from shiftplan.catalog import default_slots, slots_from_json
from shiftplan.config import Config, cfg
from shiftplan.engine import generate_by_role, generate_schedule
from shiftplan.generate.roster import roster_from_json
from shiftplan.input_data import InputData, build_input
from shiftplan.output import produce_outputs
from shiftplan.random_source import RandomSource
from shiftplan.reporting import Reporter
from shiftplan.result_types import ScheduleResult
from shiftplan.staff import Role

InputBuilder = Callable[[Config], InputData]


def default_input_builder(config: Config) -> InputData:
    """Build synthetic input data using the project's helper."""
    seed = config.SEED if config.SEED is not None else 7
    return build_input(config, seed=seed)


def run_scheduler(
    config: Config | None = None,
    data: InputData | None = None,
    input_builder: InputBuilder | None = None,
    reporter: Reporter | None = None,
    enable_reporting: bool = True,
    random_source: RandomSource | None = None,
    by_role: bool = False,
    validate_config: bool = True,
    out_dir: str | Path | None = "outputs",
) -> ScheduleResult:
    """
    Build inputs, generate the weekly schedule, and optionally report on it.

    Parameters
    ----------
    config:
        The configuration for the run. Defaults to `shiftplan.config.cfg` when omitted.
    data:
        Pre-built `InputData`. When omitted then `input_builder` (or the default synthetic
        builder) is used to construct data from the given config.
    input_builder:
        Optional callable that accepts a `Config` and returns `InputData`. Ignored when
        `data` is supplied.
    reporter:
        Custom reporter instance. When `enable_reporting` is True and no reporter is
        provided, the default `Reporter` is used.
    enable_reporting:
        When False, skips reporter pre/post hooks even if a reporter is provided.
    random_source:
        Shuffle provider handed to `generate_schedule`. Ignored when `by_role` is True,
        where every role draws from its own source spawned from `Config.SEED`.
    by_role:
        Generate each role independently and merge the results.
    validate_config:
        Toggle to run `Config.validate()` before building inputs.
    out_dir:
        Directory for the CSV exports. `None` skips writing them.

    Returns
    -------
    ScheduleResult
        Assignments, shortfalls and the per-employee counters of the run.
    """
    cfg_obj = config or cfg

    if validate_config:
        cfg_obj.validate()

    input_data = data
    if input_data is None:
        builder = input_builder or default_input_builder
        input_data = builder(cfg_obj)

    active_reporter = reporter if enable_reporting else None
    if active_reporter is None and enable_reporting:
        active_reporter = Reporter(cfg_obj)

    if active_reporter is not None:
        active_reporter.pre_generate(input_data)

    if by_role:
        result = generate_by_role(
            input_data.days, input_data.slots, input_data.employees, cfg_obj
        )
    else:
        result = generate_schedule(
            input_data.days,
            input_data.slots,
            input_data.employees,
            cfg_obj,
            random_source,
            verbose=enable_reporting,
        )

    if active_reporter is not None:
        active_reporter.post_generate(result, input_data)

    if out_dir is not None:
        produce_outputs(result, input_data, cfg_obj, out_dir)

    return result


def _parse_per_role(text: str) -> dict[Role, int]:
    """Parse "production=7,store-service=6" into a per-role count mapping."""
    out: dict[Role, int] = {}
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        key, sep, value = part.partition("=")
        if not sep:
            raise argparse.ArgumentTypeError(
                f"Expected ROLE=COUNT, got {part!r}."
            )
        try:
            out[Role.parse(key)] = int(value)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(str(exc)) from exc
    return out


def cli_config(seed: int | None) -> Config:
    """Default config for a CLI run, with its own overrides list."""
    if seed is None:
        return cfg
    return replace(cfg, SEED=seed, STAFFING_OVERRIDES=list(cfg.STAFFING_OVERRIDES))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shiftplan",
        description="Generate a weekly shift schedule for a retail store.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed.")
    parser.add_argument(
        "--per-role",
        type=_parse_per_role,
        default=None,
        metavar="ROLE=N[,ROLE=N...]",
        help="Synthetic roster size per role.",
    )
    parser.add_argument("--roster", type=Path, default=None, help="Roster JSON file.")
    parser.add_argument("--slots", type=Path, default=None, help="Slot catalog JSON file.")
    parser.add_argument(
        "--by-role",
        action="store_true",
        help="Generate each role independently and merge.",
    )
    parser.add_argument(
        "--no-report", action="store_true", help="Skip printed and PDF reports."
    )
    parser.add_argument(
        "--out-dir", type=Path, default=Path("outputs"), help="CSV output directory."
    )
    return parser


def main(argv: Sequence[str] | None = None) -> ScheduleResult:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    config = cli_config(args.seed)

    if args.roster is not None:
        employees = roster_from_json(args.roster)
    else:
        employees = build_input(
            config, per_role=args.per_role, seed=args.seed
        ).employees
    slots = slots_from_json(args.slots) if args.slots is not None else default_slots()

    enable_reporting = not args.no_report
    return run_scheduler(
        config=config,
        data=InputData(employees=employees, slots=slots),
        reporter=Reporter(config) if enable_reporting else None,
        enable_reporting=enable_reporting,
        by_role=args.by_role,
        out_dir=args.out_dir,
    )


if __name__ == "__main__":
    main()
