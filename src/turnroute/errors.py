"""Exception types raised by the route search core."""

from __future__ import annotations


class TurnRouteError(Exception):
    """Base class for all turnroute errors."""


class DimensionMismatchError(TurnRouteError, ValueError):
    """Raised when points or vectors of different dimensions are combined."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Dimension mismatch: expected {expected}, got {actual}.")
        self.expected = expected
        self.actual = actual


class InvalidParameterError(TurnRouteError, ValueError):
    """Raised when a solver is configured with parameters it cannot use."""


class PointParseError(TurnRouteError, ValueError):
    """Raised when point coordinates cannot be read from the input."""


class RouteValidationError(TurnRouteError, RuntimeError):
    """Raised when a solver hands back a route that breaks the contract."""


class SearchTimeoutError(TurnRouteError, TimeoutError):
    """Raised when a search runs past its configured time limit."""

    def __init__(self, time_limit_seconds: float) -> None:
        super().__init__(f"Search exceeded the time limit of {time_limit_seconds:g} seconds.")
        self.time_limit_seconds = time_limit_seconds
