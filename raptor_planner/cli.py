"""Command-line interface for raptor-planner."""

import argparse
import logging
import sys

from raptor_planner.api import load_timetable, plan_journey, validate
from raptor_planner.engine.raptor import MAX_ROUNDS
from raptor_planner.output.json import write_journey_json
from raptor_planner.schedule.daytypes import DAY_TYPES
from raptor_planner.schedule.models import PlannerConfig
from raptor_planner.version import VERSION


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def cmd_plan(args: argparse.Namespace) -> int:
    """Execute plan command."""
    setup_logging(args.verbose)

    config = PlannerConfig(
        input_path=args.input,
        day_type=args.day_type,
        max_rounds=args.max_rounds,
        json_output=args.json,
    )

    try:
        timetable = load_timetable(config.input_path, day_type=config.day_type)
        journey = plan_journey(
            timetable,
            args.origin,
            args.destination,
            args.depart,
            max_rounds=config.max_rounds,
        )
        if config.json_output:
            write_journey_json(config.json_output, journey)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        logging.exception("Planning failed")
        return 1

    if not journey.reachable:
        print(
            f"\nNo journey found from {journey.origin} to {journey.destination} "
            f"departing {journey.departure}"
        )
        return 1

    print(f"\nJourney from {journey.origin} to {journey.destination}")
    print(f"Departure: {journey.departure}  Arrival: {journey.arrival}")
    print(f"Transfers: {journey.transfers}")
    current_trip = None
    for step in journey.steps:
        if step.trip_id != current_trip:
            current_trip = step.trip_id
            print(f"  Trip {current_trip}:")
        print(f"    {step.clock}  {step.stop_name}")
    return 0


def cmd_stops(args: argparse.Namespace) -> int:
    """Execute stops command."""
    setup_logging(args.verbose)

    try:
        timetable = load_timetable(args.input, day_type=args.day_type)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        logging.exception("Loading failed")
        return 1

    for name in sorted(timetable.stop_names):
        print(name)
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Execute validate command."""
    setup_logging(args.verbose)

    try:
        report = validate(args.input, day_type=args.day_type)
        if report.valid:
            print("\nValidation successful!")
            print(f"Stats: {report.stats}")
            if report.warnings:
                print(f"Warnings ({len(report.warnings)}):")
                for warning in report.warnings:
                    print(f"  - {warning}")
            return 0
        else:
            print(f"\nValidation failed with {len(report.errors)} errors:")
            for error in report.errors:
                print(f"  - {error}")
            return 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        logging.exception("Validation failed")
        return 1


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="raptor-planner",
        description="Plan earliest-arrival public transport journeys",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Shared input options
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--input", required=True, help="Path to timetable CSV")
    common.add_argument(
        "--day-type",
        default=None,
        type=str.upper,
        choices=DAY_TYPES,
        help="Only load trips of this day type",
    )

    # Plan command
    plan_parser = subparsers.add_parser("plan", parents=[common], help="Plan a journey")
    plan_parser.add_argument("--from", dest="origin", required=True, help="Origin stop name")
    plan_parser.add_argument(
        "--to", dest="destination", required=True, help="Destination stop name"
    )
    plan_parser.add_argument("--depart", required=True, help="Earliest departure time (HH:MM)")
    plan_parser.add_argument(
        "--max-rounds",
        type=int,
        default=MAX_ROUNDS,
        help=f"Maximum number of vehicle boardings (default: {MAX_ROUNDS})",
    )
    plan_parser.add_argument(
        "--json", default=None, help="Also write the journey to this JSON file"
    )
    plan_parser.set_defaults(func=cmd_plan)

    # Stops command
    stops_parser = subparsers.add_parser("stops", parents=[common], help="List stop names")
    stops_parser.set_defaults(func=cmd_stops)

    # Validate command
    validate_parser = subparsers.add_parser(
        "validate", parents=[common], help="Validate a timetable"
    )
    validate_parser.set_defaults(func=cmd_validate)

    # Parse and execute
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
