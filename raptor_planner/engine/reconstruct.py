"""Itinerary reconstruction from predecessor labels."""

import logging
from collections.abc import Sequence

from raptor_planner.errors import InvalidStop, Unreachable
from raptor_planner.schedule.models import (
    ItineraryStep,
    PlanResult,
    Predecessor,
    StopTime,
    Timetable,
    TripData,
)
from raptor_planner.schedule.timecodec import NO_TIME, to_clock

logger = logging.getLogger(__name__)


def reconstruct_path(
    predecessor: PlanResult | Sequence[Predecessor | None],
    source: int,
    target: int,
    timetable: Timetable,
    departure_minute: int | None = None,
) -> list[ItineraryStep]:
    """
    Walk the predecessor chain from target back to source.

    Every ride is expanded into all stops the trip records between the
    boarding and alighting stop, both included, so a transfer stop shows
    up once per trip. Stops whose recorded time is not after the previous
    visit on the ride are left out, as the engine never relaxes them.
    When source equals target the itinerary is the single source visit at
    the departure time (taken from a PlanResult or departure_minute).

    Raises:
        InvalidStop: if source or target is not a stop of the timetable
        Unreachable: if target has no predecessor and is not the source
    """
    labels = predecessor.predecessor if isinstance(predecessor, PlanResult) else predecessor

    for stop_id in (source, target):
        if not timetable.has_stop(stop_id):
            raise InvalidStop(stop_id)

    if source == target:
        if isinstance(predecessor, PlanResult):
            departure_minute = predecessor.departure_minute
        clock = to_clock(departure_minute) if departure_minute is not None else NO_TIME
        return [ItineraryStep(None, source, timetable.stop_name(source), clock)]

    if labels[target] is None:
        raise Unreachable(source, target)

    legs: list[list[ItineraryStep]] = []
    current = target
    seen: set[int] = set()

    while current != source:
        step = labels[current]
        if step is None:
            # Chain broke before reaching the source
            raise Unreachable(source, target)
        if current in seen:
            raise ValueError(f"Predecessor chain loops at stop {current}")
        seen.add(current)

        trip = timetable.trip(step.trip_id)
        from_position = trip.position_of(step.from_stop)
        if from_position is None:
            raise ValueError(f"Trip {step.trip_id} does not call at stop {step.from_stop}")
        to_position = _alight_position(trip, current, from_position, step.arrival_minute)
        if to_position is None:
            raise ValueError(f"Trip {step.trip_id} does not reach stop {current}")

        legs.append(
            [
                ItineraryStep(
                    trip_id=step.trip_id,
                    stop_id=visit.stop_id,
                    stop_name=timetable.stop_name(visit.stop_id),
                    clock=to_clock(visit.minute),
                )
                for visit in _ride_visits(trip, from_position, to_position)
            ]
        )
        current = step.from_stop

    legs.reverse()
    path = [visit for leg in legs for visit in leg]
    logger.debug(f"Reconstructed {len(legs)} legs, {len(path)} stop visits")
    return path


def _alight_position(
    trip: TripData, stop_id: int, from_position: int, arrival_minute: int
) -> int | None:
    """Position after boarding where the trip reaches stop_id at arrival_minute."""
    for position in range(from_position + 1, len(trip)):
        if trip.stop_ids[position] == stop_id and trip.times[position] == arrival_minute:
            return position
    return trip.next_position_of(stop_id, from_position)


def _ride_visits(trip: TripData, from_position: int, to_position: int) -> list[StopTime]:
    """Visits from boarding to alighting, dropping stops not later than the ones before."""
    visits = trip.stop_times()[from_position : to_position + 1]
    ridden = visits[:1]
    for visit in visits[1:]:
        if visit.minute > ridden[-1].minute:
            ridden.append(visit)
    return ridden
