"""Trip transformation from raw schedule rows."""

import logging
import math

from raptor_planner.schedule.daytypes import normalize_day_type
from raptor_planner.schedule.models import ScheduleRow
from raptor_planner.schedule.timecodec import is_clock, to_minutes
from raptor_planner.transform.timetable import TimetableBuilder

logger = logging.getLogger(__name__)

VIA_MARKERS = frozenset({"VIA", "VIA.", "VIA*"})


def is_via(text: str) -> bool:
    return text.strip().upper() in VIA_MARKERS


def build_trips(
    rows: list[ScheduleRow], builder: TimetableBuilder, day_type: str | None = None
) -> int:
    """
    Add schedule rows to the builder as trips.

    Each row becomes trip ``{trip_id}_{DAY_TYPE}``. Inbound rows are
    reversed into the canonical forward order and VIA cells are
    interpolated from the surrounding times.

    Args:
        rows: Rows from ScheduleReader
        builder: Builder receiving the trips
        day_type: Optional day type filter (any spelling normalize_day_type accepts)

    Returns:
        Number of trips added
    """
    logger.info("Building trips")

    wanted = normalize_day_type(day_type) if day_type else None
    added = 0
    skipped = 0

    for row in rows:
        row_day_type = normalize_day_type(row.day_type)
        if wanted is not None and row_day_type != wanted:
            skipped += 1
            continue

        trip_id = f"{row.trip_id}_{row_day_type}"
        if builder.has_trip(trip_id):
            logger.warning(f"Duplicate trip {trip_id}, keeping the first occurrence")
            continue

        if not row.route_id:
            logger.warning(f"Trip {trip_id} has no route, skipping")
            continue

        visits = _row_visits(row, trip_id)
        if not visits:
            logger.warning(f"Trip {trip_id} has no stop times, skipping")
            continue

        # Register stops in column order before canonical reordering
        column_order = reversed(visits) if _is_inbound(row) else visits
        for stop_name, _ in column_order:
            builder.add_stop(stop_name)

        builder.add_trip(
            trip_id,
            row.route_id,
            visits,
            base_trip_id=row.trip_id,
            day_type=row_day_type,
        )
        added += 1

    if skipped:
        logger.info(f"Skipped {skipped} trips not running on {wanted}")
    logger.info(f"Built {added} trips")
    return added


def _is_inbound(row: ScheduleRow) -> bool:
    return row.direction.strip().lower() == "inbound"


def _row_visits(row: ScheduleRow, trip_id: str) -> list[tuple[str, int]]:
    """Ordered (stop name, minute) visits of a row in canonical forward order."""
    names: list[str] = []
    minutes: list[int | None] = []
    via: list[bool] = []

    for stop_name, text in row.cells:
        if is_clock(text):
            names.append(stop_name)
            minutes.append(to_minutes(text))
            via.append(False)
        elif is_via(text):
            names.append(stop_name)
            minutes.append(None)
            via.append(True)
        else:
            logger.warning(f"Trip {trip_id} has unreadable time {text!r} at {stop_name}")

    if _is_inbound(row):
        names.reverse()
        minutes.reverse()
        via.reverse()

    filled = interpolate_via_times(minutes, via)
    return [(name, minute) for name, minute in zip(names, filled) if minute is not None]


def interpolate_via_times(minutes: list[int | None], via: list[bool]) -> list[int | None]:
    """
    Estimate times for VIA stops lying between two known times.

    Estimates are spread linearly and kept strictly after the previous
    time on the trip. VIA stops without a known time on both sides stay None.
    """
    filled = list(minutes)
    n = len(filled)
    i = 0
    while i < n:
        if not via[i] or filled[i] is not None:
            i += 1
            continue

        start = i
        while i < n and via[i] and filled[i] is None:
            i += 1

        prev_idx = start - 1
        while prev_idx >= 0 and filled[prev_idx] is None:
            prev_idx -= 1
        next_idx = i
        while next_idx < n and filled[next_idx] is None:
            next_idx += 1

        if prev_idx < 0 or next_idx >= n:
            logger.debug(f"VIA run at positions {start}..{i - 1} has no bounding times")
            continue

        prev_value = filled[prev_idx]
        next_value = filled[next_idx]
        if prev_value is None or next_value is None:
            continue

        gap = next_idx - prev_idx
        step = (next_value - prev_value) / gap
        last_value = prev_value
        for offset in range(1, gap):
            current = prev_idx + offset
            value = filled[current]
            if value is not None:
                last_value = value
                continue
            estimate = math.floor(prev_value + step * offset + 0.5)
            if estimate <= last_value:
                estimate = last_value + 1
            filled[current] = estimate
            last_value = estimate

    return filled
