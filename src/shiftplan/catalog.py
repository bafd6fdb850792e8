from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import time
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from shiftplan.staff import Role, parse_time

_OPENING_MARKERS = ("apertura", "opening")
_CLOSING_MARKERS = ("cierre", "closing")


class SlotKind(str, Enum):
    OPENING = "opening"
    CLOSING = "closing"
    ORDINARY = "ordinary"

    @classmethod
    def from_name(cls, name: str) -> "SlotKind":
        """Classify a slot by its display name (case-insensitive substring match)."""
        lowered = name.lower()
        if any(m in lowered for m in _OPENING_MARKERS):
            return cls.OPENING
        if any(m in lowered for m in _CLOSING_MARKERS):
            return cls.CLOSING
        return cls.ORDINARY


@dataclass(slots=True)
class ShiftSlot:
    """
    A recurring daily time block with a base headcount per role.

    Opening slots anchor on `start_time`, closing slots on `end_time`.
    `kind` is derived from the name once, when not given explicitly.
    """

    id: str
    name: str
    start_time: time
    end_time: time
    is_high_traffic: bool = False
    required_staff_by_role: dict[Role, int] = field(default_factory=dict)
    kind: Optional[SlotKind] = None

    def __post_init__(self) -> None:
        self.id = str(self.id)
        self.start_time = parse_time(self.start_time)
        self.end_time = parse_time(self.end_time)
        required: dict[Role, int] = {}
        for role, k in dict(self.required_staff_by_role).items():
            k = int(k)
            if k < 0:
                raise ValueError(f"Slot {self.id}: negative headcount for {role}.")
            required[Role.parse(role)] = k
        self.required_staff_by_role = required
        if self.kind is None:
            self.kind = SlotKind.from_name(self.name)
        else:
            self.kind = SlotKind(self.kind)

    @property
    def is_opening(self) -> bool:
        return self.kind is SlotKind.OPENING

    @property
    def is_closing(self) -> bool:
        return self.kind is SlotKind.CLOSING

    @property
    def roles(self) -> list[Role]:
        return [r for r, k in self.required_staff_by_role.items() if k > 0]

    def uses_role(self, role: Role) -> bool:
        return self.required_staff_by_role.get(role, 0) > 0


def default_slots() -> list[ShiftSlot]:
    """The store's standard daily slot catalog."""
    P, ST = Role.PRODUCTION, Role.STORE_SERVICE
    MST, MOS = Role.MODULE_STORE_SERVICE, Role.MODULE_OPEN_SERVICE
    return [
        ShiftSlot(
            id="s1-prod",
            name="Apertura Prod",
            start_time="09:30",
            end_time="12:00",
            required_staff_by_role={P: 1},
        ),
        ShiftSlot(
            id="s1-serv",
            name="Apertura Serv",
            start_time="09:00",
            end_time="12:00",
            required_staff_by_role={ST: 1, MST: 1, MOS: 1},
        ),
        ShiftSlot(
            id="s2-punta",
            name="Almuerzo (PUNTA)",
            start_time="12:00",
            end_time="15:30",
            is_high_traffic=True,
            required_staff_by_role={P: 3, ST: 3, MST: 2, MOS: 2},
        ),
        ShiftSlot(
            id="s3-tarde",
            name="Tarde",
            start_time="15:30",
            end_time="19:00",
            required_staff_by_role={P: 2, ST: 2, MST: 1, MOS: 1},
        ),
        # production and module-store-service are adjusted per day by the
        # staffing overrides in Config
        ShiftSlot(
            id="s4-cierre",
            name="Cierre",
            start_time="19:00",
            end_time="23:30",
            required_staff_by_role={P: 3, ST: 2, MST: 2, MOS: 3},
        ),
    ]


def slot_from_dict(raw: Mapping[str, Any]) -> ShiftSlot:
    for key in ("id", "name"):
        if raw.get(key) in (None, ""):
            raise ValueError(f"Slot entry missing '{key}'.")
    required = raw.get("required_staff_by_role", raw.get("requiredStaffByRole", {}))
    if not isinstance(required, Mapping):
        raise TypeError("required_staff_by_role must be an object/dict.")
    kind = raw.get("kind")
    return ShiftSlot(
        id=str(raw["id"]),
        name=str(raw["name"]),
        start_time=raw.get("start_time", raw.get("startTime")),
        end_time=raw.get("end_time", raw.get("endTime")),
        is_high_traffic=bool(raw.get("is_high_traffic", raw.get("isHighTraffic", False))),
        required_staff_by_role=dict(required),
        kind=SlotKind(kind) if kind else None,
    )


def slots_from_json(path: str | Path) -> list[ShiftSlot]:
    """
    Load a slot catalog from a JSON file.

    The file may hold a list of slot objects or an object with a top-level
    `slots` array. Both snake_case and camelCase keys are accepted.
    """
    file_path = Path(path).expanduser()
    if file_path.suffix.lower() != ".json":
        raise ValueError("slots_from_json expects a path to a .json file.")
    if not file_path.exists():
        raise FileNotFoundError(f"Slot catalog JSON file not found: {file_path}")

    try:
        data = json.loads(file_path.read_text())
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {file_path}") from exc

    if isinstance(data, Mapping):
        entries = data.get("slots")
        if entries is None:
            raise ValueError("JSON file must contain a list or a 'slots' key.")
    elif isinstance(data, Sequence) and not isinstance(data, (str, bytes)):
        entries = data
    else:
        raise TypeError("JSON file must contain a list of slot objects.")

    slots: list[ShiftSlot] = []
    for raw in entries:
        if not isinstance(raw, Mapping):
            raise TypeError("Each slot entry must be an object/dict.")
        slots.append(slot_from_dict(raw))

    ids = [s.id for s in slots]
    if len(ids) != len(set(ids)):
        raise ValueError(f"Duplicate slot ids in {file_path}")
    return slots
