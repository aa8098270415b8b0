"""Data models for timetable input and internal representations."""

import math
from dataclasses import dataclass, field

from raptor_planner.errors import InvalidStop
from raptor_planner.schedule.timecodec import format_arrival


@dataclass(frozen=True)
class ScheduleRow:
    """One timetable row as read from disk: a single trip in column order."""

    trip_id: str
    day_type: str
    direction: str
    route_id: str
    cells: tuple[tuple[str, str], ...]  # (stop_name, raw cell text)


@dataclass(frozen=True)
class StopTime:
    """A recorded visit of a trip at a stop."""

    stop_id: int
    minute: int  # minutes since midnight


@dataclass(frozen=True)
class TripData:
    """Internal trip representation in canonical forward order."""

    trip_index: int
    trip_id: str  # unique across the dataset
    route_id: str
    stop_ids: tuple[int, ...]
    times: tuple[int, ...]  # minutes since midnight, aligned to stop_ids
    base_trip_id: str = ""
    day_type: str = ""
    _positions: dict[int, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if len(self.stop_ids) != len(self.times):
            raise ValueError(
                f"Trip {self.trip_id} has {len(self.stop_ids)} stops "
                f"but {len(self.times)} times"
            )
        positions: dict[int, int] = {}
        for position, stop_id in enumerate(self.stop_ids):
            positions.setdefault(stop_id, position)
        object.__setattr__(self, "_positions", positions)

    def __len__(self) -> int:
        return len(self.stop_ids)

    def position_of(self, stop_id: int) -> int | None:
        """First recorded position of stop_id on this trip, or None."""
        return self._positions.get(stop_id)

    def next_position_of(self, stop_id: int, after: int) -> int | None:
        """First recorded position of stop_id strictly after position ``after``."""
        for position in range(after + 1, len(self.stop_ids)):
            if self.stop_ids[position] == stop_id:
                return position
        return None

    def stop_times(self) -> list[StopTime]:
        return [StopTime(s, t) for s, t in zip(self.stop_ids, self.times)]

    @property
    def first_departure(self) -> float:
        return self.times[0] if self.times else math.inf


@dataclass(frozen=True)
class RouteData:
    """Route with its canonical stop sequence and trips."""

    route_index: int
    route_id: str
    stop_ids: tuple[int, ...]  # canonical forward stop sequence
    trip_indices: tuple[int, ...] = ()


@dataclass(frozen=True)
class NetworkIndex:
    """Arena-style lookup tables indexed by dense stop and route ids."""

    stop_to_routes: tuple[tuple[int, ...], ...] = ()  # stop -> sorted route indices
    route_trips: tuple[tuple[int, ...], ...] = ()  # route -> trip indices by departure


@dataclass(frozen=True)
class Timetable:
    """Immutable timetable consumed by the engine."""

    stop_names: tuple[str, ...]
    routes: tuple[RouteData, ...]
    trips: tuple[TripData, ...]
    index: NetworkIndex
    _stop_lookup: dict[str, int] = field(init=False, repr=False, compare=False)
    _trip_lookup: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "_stop_lookup", {name: i for i, name in enumerate(self.stop_names)}
        )
        object.__setattr__(
            self, "_trip_lookup", {trip.trip_id: trip.trip_index for trip in self.trips}
        )

    @property
    def num_stops(self) -> int:
        return len(self.stop_names)

    @property
    def num_routes(self) -> int:
        return len(self.routes)

    @property
    def num_trips(self) -> int:
        return len(self.trips)

    def has_stop(self, stop_id: int) -> bool:
        return isinstance(stop_id, int) and 0 <= stop_id < len(self.stop_names)

    def routes_at(self, stop_id: int) -> tuple[int, ...]:
        """Route indices with at least one trip visiting stop_id."""
        if not self.has_stop(stop_id):
            raise InvalidStop(stop_id)
        if stop_id >= len(self.index.stop_to_routes):
            return ()
        return self.index.stop_to_routes[stop_id]

    def trips_of(self, route_index: int) -> list[TripData]:
        """Trips of a route, ordered by first departure."""
        return [self.trips[i] for i in self.index.route_trips[route_index]]

    def trip(self, trip_id: str) -> TripData:
        try:
            return self.trips[self._trip_lookup[trip_id]]
        except KeyError:
            raise KeyError(f"Unknown trip: {trip_id}") from None

    def stop_name(self, stop_id: int) -> str:
        if not self.has_stop(stop_id):
            raise InvalidStop(stop_id)
        return self.stop_names[stop_id]

    def stop_id(self, name: str) -> int:
        """Resolve a stop name (case-insensitive) to its id."""
        key = name.strip().upper()
        if key not in self._stop_lookup:
            raise InvalidStop(name)
        return self._stop_lookup[key]


@dataclass(frozen=True)
class Predecessor:
    """Boarding that produced a stop's earliest-arrival label."""

    trip_id: str
    from_stop: int
    board_minute: int
    arrival_minute: int


@dataclass(frozen=True)
class RoundSnapshot:
    """Label state after one round of the engine."""

    round: int
    frontier: tuple[int, ...]  # stops improved during this round
    earliest_arrival: tuple[float, ...]


@dataclass
class PlanResult:
    """Labels produced by one planning run."""

    source: int
    target: int
    departure_minute: int
    earliest_arrival: list[float]
    predecessor: list[Predecessor | None]
    rounds: int = 0

    def reached(self, stop_id: int) -> bool:
        return not math.isinf(self.earliest_arrival[stop_id])

    @property
    def target_reached(self) -> bool:
        return self.reached(self.target)

    def arrival_clock(self, stop_id: int) -> str:
        return format_arrival(self.earliest_arrival[stop_id])

    def boardings(self, stop_id: int) -> int:
        """Number of vehicle boardings on the predecessor chain ending at stop_id."""
        count = 0
        current = stop_id
        while current != self.source:
            step = self.predecessor[current]
            if step is None:
                break
            count += 1
            current = step.from_stop
        return count


@dataclass(frozen=True)
class ItineraryStep:
    """One stop visit of a reconstructed journey."""

    trip_id: str | None
    stop_id: int
    stop_name: str
    clock: str


@dataclass
class Journey:
    """Presentation-ready journey between two named stops."""

    origin: str
    destination: str
    departure: str
    arrival: str | None
    reachable: bool
    transfers: int = 0
    steps: list[ItineraryStep] = field(default_factory=list)

    @property
    def trip_ids(self) -> list[str]:
        """Trips ridden, in order."""
        ridden: list[str] = []
        for step in self.steps:
            if step.trip_id is not None and (not ridden or ridden[-1] != step.trip_id):
                ridden.append(step.trip_id)
        return ridden


@dataclass
class ValidationReport:
    """Report from validation process."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    stats: dict[str, int] = field(default_factory=dict)


@dataclass
class PlannerConfig:
    """Configuration for a planning run."""

    input_path: str
    day_type: str | None = None
    max_rounds: int = 5
    json_output: str | None = None
