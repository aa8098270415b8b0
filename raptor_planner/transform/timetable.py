"""Timetable assembly."""

import logging
from collections.abc import Iterable

from raptor_planner.optimization.indexing import build_network_index
from raptor_planner.schedule.models import Timetable, TripData
from raptor_planner.schedule.timecodec import to_minutes
from raptor_planner.transform.routes import build_routes
from raptor_planner.transform.stops import StopRegistry, normalize_stop_name

logger = logging.getLogger(__name__)


class TimetableBuilder:
    """
    Collect stops and trips, then freeze them into a Timetable.

    Stop ids are assigned by the builder's own registry in first-seen
    order, so two builders never share id state.
    """

    def __init__(self) -> None:
        self.stops = StopRegistry()
        self._trips: list[TripData] = []
        self._trip_ids: set[str] = set()

    def add_stop(self, name: str) -> int:
        return self.stops.add(name)

    def has_trip(self, trip_id: str) -> bool:
        return trip_id in self._trip_ids

    def add_trip(
        self,
        trip_id: str,
        route_id: str,
        visits: Iterable[tuple[str, str | int]],
        *,
        base_trip_id: str | None = None,
        day_type: str = "",
    ) -> TripData:
        """
        Add a trip given its (stop name, time) visits in forward order.

        Times may be ``HH:MM`` text or minutes since midnight.
        """
        if trip_id in self._trip_ids:
            raise ValueError(f"Duplicate trip id: {trip_id}")

        parsed: list[tuple[str, int]] = []
        for stop_name, when in visits:
            minute = to_minutes(when) if isinstance(when, str) else int(when)
            if minute < 0:
                raise ValueError(f"Trip {trip_id} has negative time {minute} at {stop_name}")
            if not normalize_stop_name(stop_name):
                raise ValueError(f"Trip {trip_id} has a visit with no stop name")
            parsed.append((stop_name, minute))

        # Stops are registered only once every visit has parsed
        stop_ids = [self.stops.add(stop_name) for stop_name, _ in parsed]
        times = [minute for _, minute in parsed]

        trip = TripData(
            trip_index=len(self._trips),
            trip_id=trip_id,
            route_id=route_id,
            stop_ids=tuple(stop_ids),
            times=tuple(times),
            base_trip_id=base_trip_id if base_trip_id is not None else trip_id,
            day_type=day_type,
        )
        self._trips.append(trip)
        self._trip_ids.add(trip_id)
        return trip

    def build(self) -> Timetable:
        """Freeze collected data and build lookup indices."""
        stop_names = self.stops.freeze()
        trips = tuple(self._trips)
        routes = build_routes(trips)
        index = build_network_index(routes, len(stop_names))

        timetable = Timetable(stop_names=stop_names, routes=routes, trips=trips, index=index)
        logger.info(
            f"Built timetable with {timetable.num_stops} stops, "
            f"{timetable.num_routes} routes, {timetable.num_trips} trips"
        )
        return timetable
