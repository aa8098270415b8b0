"""Round-based earliest-arrival journey planning."""

import logging
import math
from collections.abc import Iterator

from raptor_planner.errors import InvalidStop
from raptor_planner.schedule.models import (
    PlanResult,
    Predecessor,
    RoundSnapshot,
    Timetable,
    TripData,
)

logger = logging.getLogger(__name__)

MAX_ROUNDS = 5
INF = math.inf


class RaptorEngine:
    """
    Earliest-arrival planner over a read-only timetable.

    Each round allows one more vehicle boarding: routes serving the stops
    improved in the previous round are scanned, and every trip that can
    be boarded there is ridden forward, relaxing the stops after the
    boarding point. Labels only ever improve, and a tie is not an
    improvement, so the first trip to reach a stop at a given time keeps it.

    The engine holds no per-query state; concurrent plan() calls against
    the same timetable are safe.
    """

    def __init__(self, timetable: Timetable, max_rounds: int = MAX_ROUNDS) -> None:
        if max_rounds < 1:
            raise ValueError(f"max_rounds must be at least 1, got {max_rounds}")
        self.timetable = timetable
        self.max_rounds = max_rounds

    def plan(self, source: int, target: int, departure_minute: int) -> PlanResult:
        """
        Compute earliest arrivals at every stop reachable from source.

        Args:
            source: Source stop id
            target: Target stop id (checked for validity; not used to prune)
            departure_minute: Earliest departure, minutes since midnight

        Returns:
            PlanResult; ``earliest_arrival[target]`` is ``math.inf`` when no
            journey exists within the round bound
        """
        earliest_arrival: list[float] = []
        predecessor: list[Predecessor | None] = []
        rounds = 0
        for snapshot in self._run(source, target, departure_minute, earliest_arrival, predecessor):
            rounds = snapshot.round + 1

        result = PlanResult(
            source=source,
            target=target,
            departure_minute=departure_minute,
            earliest_arrival=earliest_arrival,
            predecessor=predecessor,
            rounds=rounds,
        )
        logger.info(
            f"Planned {source} -> {target} from minute {departure_minute}: "
            f"arrival {result.arrival_clock(target)} after {rounds} rounds"
        )
        return result

    def iter_rounds(
        self, source: int, target: int, departure_minute: int
    ) -> Iterator[RoundSnapshot]:
        """Run the planner, yielding the label state after each round."""
        yield from self._run(source, target, departure_minute, [], [])

    def _run(
        self,
        source: int,
        target: int,
        departure_minute: int,
        earliest_arrival: list[float],
        predecessor: list[Predecessor | None],
    ) -> Iterator[RoundSnapshot]:
        self._check_query(source, target, departure_minute)

        num_stops = self.timetable.num_stops
        earliest_arrival[:] = [INF] * num_stops
        predecessor[:] = [None] * num_stops
        earliest_arrival[source] = departure_minute

        marked: list[int] = [source]

        for round_no in range(self.max_rounds):
            next_marked: dict[int, None] = {}

            for stop_id in marked:
                # The traveler cannot board before being at the stop
                ready = departure_minute if stop_id == source else earliest_arrival[stop_id]

                for route_index in self.timetable.routes_at(stop_id):
                    for trip, position in self._boardable_trips(route_index, stop_id, ready):
                        self._ride(
                            trip, position, stop_id, earliest_arrival, predecessor, next_marked
                        )

            logger.debug(f"Round {round_no}: {len(next_marked)} stops improved")
            yield RoundSnapshot(
                round=round_no,
                frontier=tuple(next_marked),
                earliest_arrival=tuple(earliest_arrival),
            )

            if not next_marked:
                break
            marked = list(next_marked)

    def _check_query(self, source: int, target: int, departure_minute: int) -> None:
        for stop_id in (source, target):
            if not self.timetable.has_stop(stop_id):
                raise InvalidStop(stop_id)
        if departure_minute < 0:
            raise ValueError(f"Departure minute must not be negative, got {departure_minute}")

    def _boardable_trips(
        self, route_index: int, stop_id: int, ready: float
    ) -> list[tuple[TripData, int]]:
        """Trips of a route that call at stop_id no earlier than ready, by board time."""
        candidates: list[tuple[int, TripData, int]] = []
        for trip in self.timetable.trips_of(route_index):
            position = trip.position_of(stop_id)
            if position is None:
                continue
            board_time = trip.times[position]
            if board_time < ready:
                continue
            candidates.append((board_time, trip, position))

        # Stable sort keeps the route's departure order for equal board times
        candidates.sort(key=lambda c: c[0])
        return [(trip, position) for _, trip, position in candidates]

    @staticmethod
    def _ride(
        trip: TripData,
        position: int,
        board_stop: int,
        earliest_arrival: list[float],
        predecessor: list[Predecessor | None],
        next_marked: dict[int, None],
    ) -> None:
        """Relax every stop after the boarding position of a trip."""
        board_time = trip.times[position]

        # Schedule must move forward from the boarding stop
        if position + 1 < len(trip) and trip.times[position + 1] <= board_time:
            logger.debug(
                f"Trip {trip.trip_id} does not move forward after stop {board_stop}, skipping"
            )
            return

        # Latest consistent time on this ride; stops not after it are malformed
        last_time = board_time
        for i in range(position + 1, len(trip)):
            stop_id = trip.stop_ids[i]
            arrival = trip.times[i]

            if arrival <= last_time:
                continue
            last_time = arrival

            if arrival < earliest_arrival[stop_id]:
                earliest_arrival[stop_id] = arrival
                predecessor[stop_id] = Predecessor(
                    trip_id=trip.trip_id,
                    from_stop=board_stop,
                    board_minute=board_time,
                    arrival_minute=arrival,
                )
                next_marked[stop_id] = None
