"""Public API for raptor-planner."""

import logging
import time

from raptor_planner.engine.raptor import MAX_ROUNDS, RaptorEngine
from raptor_planner.engine.reconstruct import reconstruct_path
from raptor_planner.errors import InvalidStop
from raptor_planner.schedule.models import Journey, Timetable, ValidationReport
from raptor_planner.schedule.reader import ScheduleReader
from raptor_planner.schedule.timecodec import to_clock, to_minutes
from raptor_planner.schedule.validator import TimetableValidator
from raptor_planner.transform.timetable import TimetableBuilder
from raptor_planner.transform.trips import build_trips

logger = logging.getLogger(__name__)


def load_timetable(input_path: str, day_type: str | None = None) -> Timetable:
    """
    Load a wide-format timetable CSV.

    Args:
        input_path: Path to the timetable CSV
        day_type: Optional day type to keep (e.g. "weekday", "Saturdays")

    Returns:
        Immutable Timetable ready for planning
    """
    logger.info(f"Loading timetable: {input_path}")
    start = time.perf_counter()

    reader = ScheduleReader(input_path)
    rows = reader.read_all()

    builder = TimetableBuilder()
    build_trips(rows, builder, day_type=day_type)
    timetable = builder.build()

    elapsed = time.perf_counter() - start
    logger.info(f"Timetable loaded in {elapsed:.2f}s")
    return timetable


def validate(input_path: str, day_type: str | None = None) -> ValidationReport:
    """Load a timetable and report consistency problems."""
    timetable = load_timetable(input_path, day_type=day_type)
    return TimetableValidator(timetable).validate()


def resolve_stop(timetable: Timetable, stop: int | str) -> int:
    """Resolve a stop id or (case-insensitive) stop name to a stop id."""
    if isinstance(stop, int):
        if not timetable.has_stop(stop):
            raise InvalidStop(stop)
        return stop
    return timetable.stop_id(stop)


def plan_journey(
    timetable: Timetable,
    origin: int | str,
    destination: int | str,
    departure: str,
    max_rounds: int = MAX_ROUNDS,
) -> Journey:
    """
    Plan the earliest-arrival journey between two stops.

    Args:
        timetable: Timetable to plan over
        origin: Origin stop id or name
        destination: Destination stop id or name
        departure: Earliest departure as HH:MM
        max_rounds: Maximum number of vehicle boardings

    Returns:
        Journey; ``reachable`` is False when no journey exists
    """
    source = resolve_stop(timetable, origin)
    target = resolve_stop(timetable, destination)
    departure_minute = to_minutes(departure)

    engine = RaptorEngine(timetable, max_rounds=max_rounds)
    result = engine.plan(source, target, departure_minute)

    journey = Journey(
        origin=timetable.stop_name(source),
        destination=timetable.stop_name(target),
        departure=to_clock(departure_minute),
        arrival=None,
        reachable=result.target_reached,
    )

    if not journey.reachable:
        logger.info(f"No journey from {journey.origin} to {journey.destination}")
        return journey

    journey.arrival = result.arrival_clock(target)
    journey.steps = reconstruct_path(result, source, target, timetable)
    journey.transfers = max(result.boardings(target) - 1, 0)

    logger.info(
        f"Journey {journey.origin} -> {journey.destination}: "
        f"arrive {journey.arrival} with {journey.transfers} transfers"
    )
    return journey
