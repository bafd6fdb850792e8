"""
Module with example code for running the shift generator.

There are three ways to run the code:

1. Run the code with default options. This will generate
    a synthetic roster and schedule it against the default slot catalog.
2. Run the code with a custom roster defined via code.
3. Run the code with a roster pre-defined in a JSON file.

Usage via cli:
    python3 -m src.example --option 1
"""

from __future__ import annotations

import argparse
from pathlib import Path

from shiftplan import Config, InputData, run_scheduler
from shiftplan.catalog import ShiftSlot
from shiftplan.config import WEEKEND, override_staffing
from shiftplan.generate.roster import roster_from_json
from shiftplan.main import Reporter, default_input_builder
from shiftplan.staff import WEEKDAYS, ContractType, Employee, Role

cfg = Config(
    FULL_TIME_WEEKLY_HOURS=52.5,
    PART_TIME_WEEKLY_HOURS=23.0,
    MAX_CLOSING_SHIFTS=3,
    MAX_REST_PER_DAY=2,
    SEED=7,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run shift generation examples.")
    parser.add_argument(
        "--option",
        type=int,
        default=3,
        choices=(1, 2, 3),
        help="Example scenario to run (default: 3).",
    )
    return parser.parse_args()


def run_option(option: int) -> None:
    print(f"Running example code with option {option}")

    # Run the code with default options. This will generate
    # a synthetic roster and use the default slot catalog.
    if option == 1:

        # The parameters below are defaults, with the exception of config,
        # they can be omitted i.e. the below is equivalent to:
        # run_scheduler(cfg)
        run_scheduler(
            config=cfg,
            validate_config=True,
            input_builder=default_input_builder,
            reporter=Reporter(cfg),
            enable_reporting=True,
        )

    # Run the code with a small custom roster and catalog defined via code.
    elif option == 2:

        employees = [
            Employee(
                id="a",
                name="Ana",
                role=Role.PRODUCTION,
                contract_type=ContractType.FULL_TIME,
                availability=list(WEEKDAYS),
            ),
            Employee(
                id="b",
                name="Bruno",
                role=Role.PRODUCTION,
                contract_type=ContractType.PART_TIME,
                availability={"friday": ("12:00", "23:59"), "saturday": ("12:00", "23:59")},
            ),
        ]
        slots = [
            ShiftSlot(
                id="open",
                name="Opening",
                start_time="09:00",
                end_time="12:00",
                required_staff_by_role={Role.PRODUCTION: 1},
            ),
            ShiftSlot(
                id="close",
                name="Closing",
                start_time="19:00",
                end_time="23:30",
                required_staff_by_role={Role.PRODUCTION: 1},
            ),
        ]

        run_scheduler(
            cfg,
            data=InputData(employees=employees, slots=slots),
        )

    # Run the code with a roster defined via JSON. Typical production use.
    elif option == 3:

        employees = roster_from_json(Path("src/example_roster.json"))
        override_staffing(cfg, Role.STORE_SERVICE, WEEKEND, 3)
        run_scheduler(cfg, data=InputData(employees=employees), by_role=True)
    else:
        raise SystemExit(f"Unknown option {option}")


def main() -> None:
    args = parse_args()
    run_option(args.option)


if __name__ == "__main__":
    main()
