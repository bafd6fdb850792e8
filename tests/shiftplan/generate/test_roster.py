from __future__ import annotations

import json
from datetime import time

import numpy as np
import pytest

from shiftplan.generate.roster import (
    DEFAULT_ROSTER_JSON,
    RosterGenConfig,
    _deterministic_counts,
    create_roster,
    roster_from_json,
    roster_summary,
    roster_to_dataframe,
)
from shiftplan.staff import WEEKDAYS, ContractType, Role


def test_deterministic_counts_respects_total():
    probs = np.array([0.7, 0.3])
    counts = _deterministic_counts(7, probs)
    assert counts.sum() == 7
    assert list(counts) == [5, 2]


def test_config_validation_detects_bad_values():
    with pytest.raises(ValueError, match="full_time_pct"):
        RosterGenConfig(full_time_pct=1.5).validate()
    with pytest.raises(ValueError, match="reduced_day_weights must sum"):
        RosterGenConfig(reduced_day_weights=(0.5, 0.5, 0.5)).validate()
    with pytest.raises(ValueError, match="non-negative"):
        RosterGenConfig(per_role={Role.PRODUCTION: -1}).validate()


def test_create_roster_default_mix():
    roster = create_roster(RosterGenConfig(seed=3))
    assert len(roster) == 22
    ids = [e.id for e in roster]
    assert ids == [f"e{i:03d}" for i in range(22)]
    assert len({e.name for e in roster}) == 22

    by_role = {r: [e for e in roster if e.role is r] for r in Role}
    assert len(by_role[Role.PRODUCTION]) == 7
    ft = [e for e in by_role[Role.PRODUCTION] if e.contract_type is ContractType.FULL_TIME]
    assert len(ft) == 5
    ft = [e for e in by_role[Role.STORE_SERVICE] if e.contract_type is ContractType.FULL_TIME]
    assert len(ft) == 4


def test_create_roster_is_reproducible():
    a = create_roster(RosterGenConfig(seed=11))
    b = create_roster(RosterGenConfig(seed=11))
    assert a == b


def test_availability_switches():
    cfg = RosterGenConfig(
        per_role={Role.STORE_SERVICE: 5},
        reduced_availability_pct=0.0,
        late_start_pct=1.0,
        seed=1,
    )
    roster = create_roster(cfg)
    for e in roster:
        assert e.is_fully_available
        assert all(e.available_from(d) == time(12, 0) for d in WEEKDAYS)

    cfg = RosterGenConfig(per_role={Role.PRODUCTION: 6}, reduced_availability_pct=1.0, seed=1)
    for e in create_roster(cfg):
        assert 3 <= len(e.availability) <= 5


def test_roster_summary_and_dataframe():
    roster = create_roster(RosterGenConfig(per_role={Role.PRODUCTION: 4}, seed=2))
    summary = roster_summary(roster)
    assert summary["N"] == 4
    assert summary["roles"] == {"production": 4}
    df = roster_to_dataframe(roster)
    assert list(df.columns[:5]) == ["id", "name", "role", "contract_type", "available_days"]
    assert set(WEEKDAYS) <= set(df.columns)
    assert roster_summary([])["full_time_pct"] == 0.0


def test_roster_from_json_default_file():
    assert DEFAULT_ROSTER_JSON.exists()
    roster = roster_from_json()
    assert len(roster) == 19
    martina = next(e for e in roster if e.id == "p07")
    assert martina.role is Role.PRODUCTION
    assert martina.is_fully_available
    late = next(e for e in roster if e.id == "p06")
    assert late.available_days == ["monday", "wednesday", "saturday", "sunday"]
    assert late.available_from("monday") == time(12, 0)


def test_roster_from_json_accepts_list_and_camel_case(tmp_path):
    path = tmp_path / "roster.json"
    path.write_text(
        json.dumps(
            [
                {
                    "id": 1,
                    "name": "Ana",
                    "role": "store-service",
                    "contractType": "part-time",
                    "availableDays": ["lunes", "martes"],
                }
            ]
        )
    )
    (emp,) = roster_from_json(path)
    assert emp.id == "1"
    assert emp.contract_type is ContractType.PART_TIME
    assert emp.available_days == ["monday", "tuesday"]


def test_roster_from_json_errors(tmp_path):
    with pytest.raises(ValueError, match=".json"):
        roster_from_json(tmp_path / "roster.csv")
    with pytest.raises(FileNotFoundError):
        roster_from_json(tmp_path / "missing.json")

    bad = tmp_path / "bad.json"
    bad.write_text("[")
    with pytest.raises(ValueError, match="Invalid JSON"):
        roster_from_json(bad)

    no_key = tmp_path / "no_key.json"
    no_key.write_text(json.dumps({"people": []}))
    with pytest.raises(ValueError, match="employees"):
        roster_from_json(no_key)

    missing_role = tmp_path / "missing_role.json"
    missing_role.write_text(json.dumps([{"id": "a", "contract_type": "full-time"}]))
    with pytest.raises(ValueError, match="missing 'role'"):
        roster_from_json(missing_role)

    not_obj = tmp_path / "not_obj.json"
    not_obj.write_text(json.dumps(["a"]))
    with pytest.raises(TypeError):
        roster_from_json(not_obj)

    bad_day = tmp_path / "bad_day.json"
    bad_day.write_text(
        json.dumps([{"id": "a", "role": "production", "contract_type": "full-time", "availability": ["funday"]}])
    )
    with pytest.raises(ValueError, match="Unknown weekday"):
        roster_from_json(bad_day)


def test_roster_from_json_empty_employees_list(tmp_path):
    path = tmp_path / "roster.json"
    path.write_text(json.dumps({"employees": []}))
    assert roster_from_json(path) == []

    staff = tmp_path / "staff.json"
    staff.write_text(json.dumps({"staff": []}))
    assert roster_from_json(staff) == []
