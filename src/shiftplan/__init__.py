from .catalog import ShiftSlot, default_slots
from .config import Config, cfg
from .engine import generate_by_role, generate_schedule
from .input_data import InputData, build_input
from .main import run_scheduler
from .result_types import ScheduleResult
from .staff import ContractType, Employee, Role

__all__ = [
    "Config",
    "cfg",
    "ContractType",
    "Employee",
    "Role",
    "ShiftSlot",
    "default_slots",
    "InputData",
    "build_input",
    "ScheduleResult",
    "generate_schedule",
    "generate_by_role",
    "run_scheduler",
]
