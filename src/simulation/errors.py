from __future__ import annotations

from enum import Enum


class RequestError(str, Enum):
    """Reasons a ride request is refused before it reaches the backlog."""

    OUT_OF_RANGE = "out_of_range"
    SAME_FLOOR = "same_floor"


class RequestRejected(ValueError):
    def __init__(self, error: RequestError, origin: int, destination: int, message: str) -> None:
        super().__init__(message)
        self.error = error
        self.origin = origin
        self.destination = destination


class InvalidConfiguration(ValueError):
    """Raised when a building cannot be constructed with the given bounds."""
