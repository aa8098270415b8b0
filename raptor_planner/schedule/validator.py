"""Timetable validator."""

import logging

from raptor_planner.schedule.models import Timetable, ValidationReport
from raptor_planner.schedule.timecodec import to_clock

logger = logging.getLogger(__name__)


class TimetableValidator:
    """Validate a built timetable for consistency."""

    def __init__(self, timetable: Timetable) -> None:
        """Initialize validator with the timetable to check."""
        self.timetable = timetable
        self.errors: list[str] = []
        self.warnings: list[str] = []

    def validate(self) -> ValidationReport:
        """Run all validation checks."""
        logger.info("Validating timetable")

        self._validate_trips()
        self._validate_stop_times()
        self._validate_stops()

        valid = len(self.errors) == 0

        stats = {
            "stops": self.timetable.num_stops,
            "routes": self.timetable.num_routes,
            "trips": self.timetable.num_trips,
            "stop_times": sum(len(trip) for trip in self.timetable.trips),
        }

        report = ValidationReport(
            valid=valid,
            errors=self.errors.copy(),
            warnings=self.warnings.copy(),
            stats=stats,
        )

        if not valid:
            logger.error(f"Validation failed with {len(self.errors)} errors")
        elif self.warnings:
            logger.warning(f"Validation passed with {len(self.warnings)} warnings")
        else:
            logger.info("Validation passed")

        return report

    def _validate_trips(self) -> None:
        """Validate there is something to plan over."""
        if not self.timetable.trips:
            self.errors.append("No trips found in timetable")

        for trip in self.timetable.trips:
            if len(trip) < 2:
                self.warnings.append(
                    f"Trip {trip.trip_id} calls at {len(trip)} stop(s) and cannot be ridden"
                )

    def _validate_stop_times(self) -> None:
        """Validate stop references and flag non-increasing times."""
        for trip in self.timetable.trips:
            for stop_id in trip.stop_ids:
                if not self.timetable.has_stop(stop_id):
                    self.errors.append(
                        f"Trip {trip.trip_id} references non-existent stop {stop_id}"
                    )

            for i in range(1, len(trip)):
                previous, current = trip.times[i - 1], trip.times[i]
                if current <= previous:
                    self.warnings.append(
                        f"Trip {trip.trip_id} has non-increasing times at "
                        f"{self._stop_label(trip.stop_ids[i])}: "
                        f"{to_clock(previous)} -> {to_clock(current)}"
                    )

    def _validate_stops(self) -> None:
        """Flag stops no route serves."""
        for stop_id, name in enumerate(self.timetable.stop_names):
            if not self.timetable.routes_at(stop_id):
                self.warnings.append(f"Stop {name} is not served by any route")

    def _stop_label(self, stop_id: int) -> str:
        if self.timetable.has_stop(stop_id):
            return self.timetable.stop_names[stop_id]
        return f"#{stop_id}"
