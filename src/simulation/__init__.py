"""Simulation primitives for the elevator dispatch simulator."""

from .building import Building
from .config import SystemConfig
from .elevator import Direction, Elevator, ElevatorStatus
from .errors import InvalidConfiguration, RequestError, RequestRejected
from .request import Request
from .simulation import Simulation, SystemSnapshot, create_system
from .trace import FileTraceSink, MemoryTraceSink, TraceSink

__all__ = [
    "Building",
    "Direction",
    "Elevator",
    "ElevatorStatus",
    "FileTraceSink",
    "InvalidConfiguration",
    "MemoryTraceSink",
    "Request",
    "RequestError",
    "RequestRejected",
    "Simulation",
    "SystemConfig",
    "SystemSnapshot",
    "TraceSink",
    "create_system",
]
