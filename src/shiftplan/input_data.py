from dataclasses import dataclass, field
from typing import Optional

from shiftplan.catalog import ShiftSlot, default_slots
from shiftplan.config import Config
from shiftplan.generate.roster import RosterGenConfig, create_roster
from shiftplan.staff import WEEKDAYS, Employee, Role, normalize_day


@dataclass
class InputData:
    employees: list[Employee]
    slots: list[ShiftSlot] = field(default_factory=default_slots)
    days: list[str] = field(default_factory=lambda: list(WEEKDAYS))

    def __post_init__(self) -> None:
        self.days = [normalize_day(d) for d in self.days]

    def employee(self, employee_id: str) -> Employee:
        for emp in self.employees:
            if emp.id == employee_id:
                return emp
        raise KeyError(employee_id)

    def slot(self, slot_id: str) -> ShiftSlot:
        for s in self.slots:
            if s.id == slot_id:
                return s
        raise KeyError(slot_id)


def build_input(
    cfg: Config,
    per_role: Optional[dict[Role, int]] = None,
    seed: Optional[int] = None,
) -> InputData:
    """
    Build an InputData object with a synthetic roster and the default slot catalog.

    Parameters:
    cfg (Config): the configuration to use
    per_role (dict, optional): employees to generate per role. Defaults to the
        generator's store-sized mix.
    seed (int, optional): the random seed to use. Defaults to cfg.SEED, or 7
        when the config has no seed.

    Returns:
    InputData: the generated input data
    """
    if seed is None:
        seed = cfg.SEED if cfg.SEED is not None else 7
    gen_cfg = RosterGenConfig(seed=seed)
    if per_role is not None:
        gen_cfg.per_role = dict(per_role)
    gen_cfg.validate()

    return InputData(employees=create_roster(gen_cfg), slots=default_slots())
