"""Wide-format timetable CSV reader."""

import csv
import logging
from pathlib import Path

from raptor_planner.schedule.models import ScheduleRow

logger = logging.getLogger(__name__)

FIXED_COLUMNS = ("trip_id", "day_type", "direction", "route")


class ScheduleReader:
    """
    Read a timetable where each row is one trip.

    The leading columns are ``trip_id``, ``day_type``, ``direction`` and
    ``route``; every other column is named after a stop and holds the
    trip's time there (blank when the stop is not served, ``VIA`` when
    the vehicle passes without a published time).
    """

    def __init__(self, path: str) -> None:
        """Initialize reader with the timetable file path."""
        self.path = Path(path)
        if not self.path.is_file():
            raise FileNotFoundError(f"Timetable file not found: {path}")

        self.stop_columns: list[str] = []
        self.rows: list[ScheduleRow] = []

    def read_all(self) -> list[ScheduleRow]:
        """Read every trip row."""
        logger.info(f"Reading timetable from {self.path}")

        with open(self.path, encoding="utf-8-sig", newline="") as f:
            reader = csv.reader(f)
            header = next(reader, None)
            if header is None:
                raise ValueError(f"Timetable file is empty: {self.path}")

            positions = self._fixed_column_positions(header)
            stop_columns = [
                (i, name.strip())
                for i, name in enumerate(header)
                if i not in positions.values() and name.strip()
            ]
            self.stop_columns = [name for _, name in stop_columns]

            for line_no, values in enumerate(reader, start=2):
                if not any(value.strip() for value in values):
                    continue

                trip_id = self._cell(values, positions["trip_id"])
                if not trip_id:
                    logger.warning(f"Line {line_no} has no trip_id, skipping")
                    continue

                cells = tuple(
                    (name, self._cell(values, i))
                    for i, name in stop_columns
                    if self._cell(values, i)
                )
                self.rows.append(
                    ScheduleRow(
                        trip_id=trip_id,
                        day_type=self._cell(values, positions["day_type"]),
                        direction=self._cell(values, positions["direction"]),
                        route_id=self._cell(values, positions["route"]),
                        cells=cells,
                    )
                )

        logger.info(
            f"Loaded {len(self.rows)} trip rows over {len(self.stop_columns)} stop columns"
        )
        return self.rows

    def _fixed_column_positions(self, header: list[str]) -> dict[str, int]:
        normalized = [name.strip().lower() for name in header]
        missing = [column for column in FIXED_COLUMNS if column not in normalized]
        if missing:
            raise ValueError(
                f"Timetable {self.path} is missing required columns: {', '.join(missing)}"
            )
        return {column: normalized.index(column) for column in FIXED_COLUMNS}

    @staticmethod
    def _cell(values: list[str], index: int) -> str:
        if index >= len(values):
            return ""
        return values[index].strip()
