from __future__ import annotations

import pytest

from shiftplan.catalog import SlotKind
from shiftplan.config import (
    Config,
    clear_staffing_overrides,
    override_staffing,
    weekly_target,
)
from shiftplan.staff import ContractType, Role


def test_defaults_are_valid():
    cfg = Config()
    cfg.validate()
    assert cfg.REST_DAY_CANDIDATES == ("monday", "tuesday", "wednesday", "thursday", "friday")
    assert cfg.DAY_PRIORITY[:3] == ("sunday", "saturday", "friday")
    assert len(cfg.STAFFING_OVERRIDES) == 3


def test_day_names_are_normalized():
    cfg = Config(REST_DAY_CANDIDATES=("Lunes", "Martes"), DAY_PRIORITY=("Domingo",))
    assert cfg.REST_DAY_CANDIDATES == ("monday", "tuesday")
    assert cfg.DAY_PRIORITY == ("sunday",)


@pytest.mark.parametrize(
    "kwargs, msg",
    [
        ({"FULL_TIME_WEEKLY_HOURS": 0}, "Weekly hour targets"),
        ({"MAX_WORKING_DAYS": 8}, "MAX_WORKING_DAYS"),
        ({"HOURS_TOLERANCE": -1}, "HOURS_TOLERANCE"),
        ({"MAX_CLOSING_SHIFTS": -1}, "MAX_CLOSING_SHIFTS"),
        ({"REST_DAY_CANDIDATES": ()}, "REST_DAY_CANDIDATES must not be empty"),
        ({"REST_DAY_CANDIDATES": ("monday", "lunes")}, "must not repeat"),
        ({"MAX_REST_PER_DAY": 0}, "MAX_REST_PER_DAY"),
        ({"SEED": "7"}, "SEED"),
    ],
)
def test_validate_rejects_bad_values(kwargs, msg):
    with pytest.raises(ValueError, match=msg):
        Config(**kwargs).validate()


def test_weekly_target_by_contract():
    cfg = Config(FULL_TIME_WEEKLY_HOURS=40, PART_TIME_WEEKLY_HOURS=20)
    assert weekly_target(cfg, ContractType.FULL_TIME) == 40.0
    assert weekly_target(cfg, ContractType.PART_TIME) == 20.0


def test_override_staffing_appends_and_matches():
    cfg = Config()
    clear_staffing_overrides(cfg)
    assert cfg.STAFFING_OVERRIDES == []

    override_staffing(cfg, "store-service", ["Sábado"], 4)
    ov = cfg.STAFFING_OVERRIDES[-1]
    assert ov.role is Role.STORE_SERVICE
    assert ov.days == frozenset({"saturday"})
    assert ov.matches(SlotKind.CLOSING, Role.STORE_SERVICE, "saturday")
    assert not ov.matches(SlotKind.ORDINARY, Role.STORE_SERVICE, "saturday")
    assert not ov.matches(SlotKind.CLOSING, Role.STORE_SERVICE, "friday")

    with pytest.raises(ValueError):
        override_staffing(cfg, Role.PRODUCTION, ["monday"], -1)


def test_overrides_are_not_shared_between_configs():
    a, b = Config(), Config()
    clear_staffing_overrides(a)
    assert len(b.STAFFING_OVERRIDES) == 3
