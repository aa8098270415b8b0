"""Route assembly and canonical stop sequence inference."""

import logging

from raptor_planner.schedule.models import RouteData, TripData

logger = logging.getLogger(__name__)


def build_routes(trips: tuple[TripData, ...]) -> tuple[RouteData, ...]:
    """Group trips into routes, in order of first appearance."""
    logger.info("Building routes with canonical stop sequences")

    trips_by_route: dict[str, list[TripData]] = {}
    for trip in trips:
        if trip.route_id not in trips_by_route:
            trips_by_route[trip.route_id] = []
        trips_by_route[trip.route_id].append(trip)

    routes: list[RouteData] = []
    for route_index, (route_id, route_trips) in enumerate(trips_by_route.items()):
        stop_ids = _canonical_sequence(route_id, route_trips)

        # Sort by first departure, trip id breaks ties
        ordered = sorted(route_trips, key=lambda t: (t.first_departure, t.trip_id))

        routes.append(
            RouteData(
                route_index=route_index,
                route_id=route_id,
                stop_ids=stop_ids,
                trip_indices=tuple(trip.trip_index for trip in ordered),
            )
        )
        logger.debug(f"Route {route_id}: {len(stop_ids)} stops, {len(ordered)} trips")

    logger.info(f"Built {len(routes)} routes")
    return tuple(routes)


def _canonical_sequence(route_id: str, trips: list[TripData]) -> tuple[int, ...]:
    """Union of the trips' stops in first-seen forward order."""
    sequence: list[int] = []
    position: dict[int, int] = {}

    for trip in trips:
        last = -1
        conflicting = False
        for stop_id in trip.stop_ids:
            if stop_id not in position:
                position[stop_id] = len(sequence)
                sequence.append(stop_id)
            elif position[stop_id] < last:
                conflicting = True
            last = max(last, position[stop_id])

        if conflicting:
            logger.debug(
                f"Trip {trip.trip_id} visits stops of route {route_id} out of canonical order"
            )

    return tuple(sequence)
