"""Conversion between HH:MM clock text and minutes since midnight."""

import math
import re

from raptor_planner.errors import FormatError

NO_TIME = "--:--"

_CLOCK = re.compile(r"^(\d{1,2}):(\d{2})$", re.ASCII)


def to_minutes(text: str) -> int:
    """
    Parse a 24-hour ``HH:MM`` string into minutes since midnight.

    Times at or past 24:00 are rejected; callers must normalise
    past-midnight continuations before loading.

    Raises:
        FormatError: if the text is not a valid clock time
    """
    if not isinstance(text, str):
        raise FormatError(f"Invalid time format: {text!r}")

    match = _CLOCK.match(text.strip())
    if match is None:
        raise FormatError(f"Invalid time format: {text!r}")

    hours = int(match.group(1))
    minutes = int(match.group(2))
    if hours > 23 or minutes > 59:
        raise FormatError(f"Time out of range: {text!r}")

    return hours * 60 + minutes


def to_clock(minutes: int) -> str:
    """Format minutes since midnight as zero-padded HH:MM."""
    if minutes < 0:
        raise FormatError(f"Negative minute offset: {minutes}")

    hours, mins = divmod(int(minutes), 60)
    return f"{hours:02d}:{mins:02d}"


def format_arrival(minutes: float) -> str:
    """Format an earliest-arrival label, rendering unreached stops as ``--:--``."""
    if math.isinf(minutes):
        return NO_TIME
    return to_clock(int(minutes))


def is_clock(text: str) -> bool:
    """Return True if text parses as a clock time."""
    try:
        to_minutes(text)
    except FormatError:
        return False
    return True
