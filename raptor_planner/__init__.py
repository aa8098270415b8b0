"""Raptor Planner - Earliest-arrival journey planning over transit timetables."""

from raptor_planner.api import load_timetable, plan_journey, validate
from raptor_planner.engine.raptor import MAX_ROUNDS, RaptorEngine
from raptor_planner.engine.reconstruct import reconstruct_path
from raptor_planner.errors import FormatError, InvalidStop, PlannerError, Unreachable
from raptor_planner.transform.timetable import TimetableBuilder
from raptor_planner.version import SCHEMA_VERSION, VERSION

__version__ = VERSION
__all__ = [
    "MAX_ROUNDS",
    "SCHEMA_VERSION",
    "VERSION",
    "FormatError",
    "InvalidStop",
    "PlannerError",
    "RaptorEngine",
    "TimetableBuilder",
    "Unreachable",
    "load_timetable",
    "plan_journey",
    "reconstruct_path",
    "validate",
]
