"""JSON journey output."""

import json
import logging
from pathlib import Path
from typing import Any

from raptor_planner.schedule.models import Journey
from raptor_planner.version import SCHEMA_VERSION

logger = logging.getLogger(__name__)


def journey_to_dict(journey: Journey) -> dict[str, Any]:
    """Plain-data view of a journey."""
    return {
        "schema_version": SCHEMA_VERSION,
        "origin": journey.origin,
        "destination": journey.destination,
        "departure": journey.departure,
        "arrival": journey.arrival,
        "reachable": journey.reachable,
        "transfers": journey.transfers,
        "trips": journey.trip_ids,
        "steps": [
            {
                "trip_id": step.trip_id,
                "stop_id": step.stop_id,
                "stop_name": step.stop_name,
                "time": step.clock,
            }
            for step in journey.steps
        ],
    }


def write_journey_json(output_path: Path, journey: Journey) -> Path:
    """Write a journey as deterministic JSON, creating parent directories."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(journey_to_dict(journey), f, indent=2, sort_keys=True)

    logger.info(f"Wrote {output_path}")
    return output_path
