"""Day-type label normalisation."""

import logging
import re

logger = logging.getLogger(__name__)

WEEKDAY = "WEEKDAY"
SATURDAY = "SATURDAY"
SUNDAY = "SUNDAY"
PUBLIC_HOLIDAY = "PUBLIC_HOLIDAY"

DAY_TYPES = (WEEKDAY, SATURDAY, SUNDAY, PUBLIC_HOLIDAY)

_ALIASES: dict[str, str] = {
    "SATURDAY": SATURDAY,
    "SATURDAYS": SATURDAY,
    "SUNDAY": SUNDAY,
    "SUNDAYS": SUNDAY,
    "SUNDAYSANDPUBLICHOLIDAYS": SUNDAY,
    "PUBLICHOLIDAY": PUBLIC_HOLIDAY,
    "PUBLICHOLIDAYS": PUBLIC_HOLIDAY,
    "WEEKDAY": WEEKDAY,
    "WEEKDAYS": WEEKDAY,
    "MONDAYTOFRIDAY": WEEKDAY,
    "MONDAYSTOFRIDAY": WEEKDAY,
    "MONDAYTOFRIDAYS": WEEKDAY,
    "MONDAYSTOFRIDAYS": WEEKDAY,
    "MONDAYSTOTHURSDAY": WEEKDAY,
    "MONDAYSTOTHURSDAYS": WEEKDAY,
}

for _day in ("MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "FRIDAY"):
    _ALIASES[_day] = WEEKDAY
    _ALIASES[_day + "S"] = WEEKDAY

_NON_LETTERS = re.compile(r"[^A-Z]")


def normalize_day_type(raw: str | None) -> str:
    """
    Map a free-form day-type label onto one of DAY_TYPES.

    Blank labels mean weekday service. Unknown labels are reported and
    treated as weekday service too.
    """
    if raw is None or not raw.strip():
        return WEEKDAY

    collapsed = _NON_LETTERS.sub("", raw.strip().upper())
    if collapsed in _ALIASES:
        return _ALIASES[collapsed]
    if "HOLIDAY" in collapsed:
        return PUBLIC_HOLIDAY

    logger.warning(f"Unknown day type {raw!r}, defaulting to {WEEKDAY}")
    return WEEKDAY
