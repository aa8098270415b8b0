"""Exceptions raised by the journey planner."""


class PlannerError(Exception):
    """Base class for planner errors."""


class FormatError(PlannerError, ValueError):
    """Malformed clock text."""


class InvalidStop(PlannerError, KeyError):
    """Stop identifier or name absent from the stop table."""

    def __init__(self, stop: int | str) -> None:
        super().__init__(stop)
        self.stop = stop

    def __str__(self) -> str:
        return f"Unknown stop: {self.stop!r}"


class Unreachable(PlannerError):
    """Path reconstruction requested for a stop the engine never reached."""

    def __init__(self, source: int, target: int) -> None:
        super().__init__(f"Stop {target} is not reachable from stop {source}")
        self.source = source
        self.target = target
