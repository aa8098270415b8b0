"""Pytest configuration and fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest

from raptor_planner.schedule.models import Timetable
from raptor_planner.transform.timetable import TimetableBuilder

TripSpec = tuple[str, str, list[tuple[str, str]]]


@pytest.fixture
def minimal_csv() -> Path:
    """Path to single-route timetable fixture."""
    return Path(__file__).parent / "fixtures" / "minimal.csv"


@pytest.fixture
def transfer_csv() -> Path:
    """Path to two-route timetable fixture sharing one stop."""
    return Path(__file__).parent / "fixtures" / "transfer.csv"


@pytest.fixture
def network_csv() -> Path:
    """Path to timetable fixture with day types, inbound rows and VIA cells."""
    return Path(__file__).parent / "fixtures" / "network.csv"


@pytest.fixture
def make_timetable() -> Callable[..., Timetable]:
    """Factory building a timetable from (trip_id, route_id, visits) tuples.

    Stop ids follow first appearance across the given trips.
    """

    def _make(*trips: TripSpec) -> Timetable:
        builder = TimetableBuilder()
        for trip_id, route_id, visits in trips:
            builder.add_trip(trip_id, route_id, visits)
        return builder.build()

    return _make


@pytest.fixture
def single_route(make_timetable: Callable[..., Timetable]) -> Timetable:
    """X 08:00 -> Y 08:10 -> Z 08:25 on one trip."""
    return make_timetable(
        ("T1", "R1", [("X", "08:00"), ("Y", "08:10"), ("Z", "08:25")]),
    )


@pytest.fixture
def two_routes(make_timetable: Callable[..., Timetable]) -> Timetable:
    """X -> Y on route 1, Y -> Z on route 2."""
    return make_timetable(
        ("T1", "R1", [("X", "08:00"), ("Y", "08:10")]),
        ("T2", "R2", [("Y", "08:20"), ("Z", "08:40")]),
    )


@pytest.fixture
def chain_network(make_timetable: Callable[..., Timetable]) -> Timetable:
    """Six routes in a line, S0 -> S1 -> ... -> S6, one hop each."""
    trips = []
    for hop in range(6):
        depart = 8 * 60 + hop * 15
        trips.append(
            (
                f"C{hop}",
                f"L{hop}",
                [
                    (f"S{hop}", f"{depart // 60:02d}:{depart % 60:02d}"),
                    (f"S{hop + 1}", f"{(depart + 10) // 60:02d}:{(depart + 10) % 60:02d}"),
                ],
            )
        )
    return make_timetable(*trips)
