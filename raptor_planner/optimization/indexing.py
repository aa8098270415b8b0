"""Indexing structures for fast lookups."""

import logging

from raptor_planner.schedule.models import NetworkIndex, RouteData

logger = logging.getLogger(__name__)


def build_network_index(routes: tuple[RouteData, ...], num_stops: int) -> NetworkIndex:
    """Build stop-to-routes and route-to-trips tables indexed by dense id."""
    logger.info("Building network index")

    stop_to_routes: list[set[int]] = [set() for _ in range(num_stops)]
    for route in routes:
        for stop_id in route.stop_ids:
            if not 0 <= stop_id < num_stops:
                raise ValueError(f"Route {route.route_id} references unknown stop {stop_id}")
            stop_to_routes[stop_id].add(route.route_index)

    index = NetworkIndex(
        stop_to_routes=tuple(tuple(sorted(route_ids)) for route_ids in stop_to_routes),
        route_trips=tuple(route.trip_indices for route in routes),
    )

    served = sum(1 for route_ids in index.stop_to_routes if route_ids)
    logger.info(f"Built index with {served} of {num_stops} stops served by routes")

    return index
