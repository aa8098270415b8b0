"""Tests for itinerary reconstruction."""

from collections.abc import Callable

import pytest

from raptor_planner.engine.raptor import RaptorEngine
from raptor_planner.engine.reconstruct import reconstruct_path
from raptor_planner.errors import InvalidStop, Unreachable
from raptor_planner.schedule.models import Timetable
from raptor_planner.schedule.timecodec import to_minutes

X, Y, Z = 0, 1, 2


def test_direct_ride(single_route: Timetable) -> None:
    """Test a single ride expands to every stop on the way."""
    result = RaptorEngine(single_route).plan(X, Z, 8 * 60)

    path = reconstruct_path(result, X, Z, single_route)

    assert [step.stop_name for step in path] == ["X", "Y", "Z"]
    assert [step.clock for step in path] == ["08:00", "08:10", "08:25"]
    assert {step.trip_id for step in path} == {"T1"}


def test_transfer_path(two_routes: Timetable) -> None:
    """Test a transfer stop appears once for each trip."""
    result = RaptorEngine(two_routes).plan(X, Z, 8 * 60)

    path = reconstruct_path(result, X, Z, two_routes)

    assert [(step.trip_id, step.stop_name, step.clock) for step in path] == [
        ("T1", "X", "08:00"),
        ("T1", "Y", "08:10"),
        ("T2", "Y", "08:20"),
        ("T2", "Z", "08:40"),
    ]
    assert path[0].stop_id == X
    assert path[-1].stop_id == Z


def test_clocks_non_decreasing(chain_network: Timetable) -> None:
    """Test visit times never go backwards along the itinerary."""
    result = RaptorEngine(chain_network).plan(0, 5, 8 * 60)

    path = reconstruct_path(result, 0, 5, chain_network)
    minutes = [to_minutes(step.clock) for step in path]

    assert minutes == sorted(minutes)
    assert path[0].stop_name == "S0"
    assert path[-1].stop_name == "S5"
    assert len(path) == 10


def test_raw_predecessor_list(two_routes: Timetable) -> None:
    """Test reconstruction from a bare predecessor sequence."""
    result = RaptorEngine(two_routes).plan(X, Z, 8 * 60)

    path = reconstruct_path(result.predecessor, X, Z, two_routes)

    assert path == reconstruct_path(result, X, Z, two_routes)


def test_source_is_target(two_routes: Timetable) -> None:
    """Test a trivial journey is the source visit alone."""
    result = RaptorEngine(two_routes).plan(Y, Y, 8 * 60 + 15)

    path = reconstruct_path(result, Y, Y, two_routes)

    assert len(path) == 1
    assert path[0].trip_id is None
    assert path[0].stop_name == "Y"
    assert path[0].clock == "08:15"


def test_source_is_target_without_departure(two_routes: Timetable) -> None:
    """Test a trivial journey without a known departure has no clock."""
    path = reconstruct_path([None, None, None], X, X, two_routes)

    assert path[0].clock == "--:--"
    assert reconstruct_path([None, None, None], X, X, two_routes, 480)[0].clock == "08:00"


def test_unreachable(single_route: Timetable) -> None:
    """Test reconstruction of an unreached stop fails."""
    result = RaptorEngine(single_route).plan(X, Z, 8 * 60 + 5)

    with pytest.raises(Unreachable) as excinfo:
        reconstruct_path(result, X, Z, single_route)

    assert excinfo.value.target == Z


def test_invalid_stop(single_route: Timetable) -> None:
    """Test unknown stops are rejected before walking the chain."""
    result = RaptorEngine(single_route).plan(X, Z, 8 * 60)

    with pytest.raises(InvalidStop):
        reconstruct_path(result, X, 42, single_route)


def test_backward_segment_itinerary(make_timetable: Callable[..., Timetable]) -> None:
    """Test a trip with a backwards stop never yields a backwards itinerary."""
    timetable = make_timetable(
        ("T", "R", [("X", "08:00"), ("Y", "08:10"), ("Z", "08:05")]),
    )
    result = RaptorEngine(timetable).plan(X, Z, 7 * 60 + 50)

    path = reconstruct_path(result, X, Y, timetable)
    assert [step.clock for step in path] == ["08:00", "08:10"]

    with pytest.raises(Unreachable):
        reconstruct_path(result, X, Z, timetable)


def test_backward_stop_left_out_of_ride(make_timetable: Callable[..., Timetable]) -> None:
    """Test stops the ride skipped are not listed between boarding and alighting."""
    timetable = make_timetable(
        ("T", "R", [("A", "08:00"), ("B", "08:10"), ("C", "07:55"), ("D", "08:20")]),
    )
    result = RaptorEngine(timetable).plan(0, 3, 8 * 60)

    path = reconstruct_path(result, 0, 3, timetable)

    assert [step.stop_name for step in path] == ["A", "B", "D"]
    assert [step.clock for step in path] == ["08:00", "08:10", "08:20"]
