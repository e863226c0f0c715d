from __future__ import annotations

import contextlib
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from .building import Building
from .elevator import ElevatorStatus
from .errors import RequestError, RequestRejected
from .request import Request
from .trace import TraceSink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SystemSnapshot:
    time_step: int
    num_floors: int
    elevators: List[ElevatorStatus]
    pending_request_count: int
    total_requests_processed: int


class Simulation:
    """Tick-driven clock around a building.

    Each tick advances time, dispatches the whole backlog, then steps every
    elevator once in index order. Nothing runs between calls, so the state
    is a pure function of the sequence of submissions and ticks.
    """

    def __init__(self, building: Building, trace_sink: Optional[TraceSink] = None) -> None:
        self.building = building
        self.trace_sink = trace_sink
        self.current_time: int = 0
        self.event_hooks: Dict[str, List[Callable[[object], None]]] = {}
        self._next_request_id = 0

    @property
    def num_floors(self) -> int:
        return self.building.num_floors

    @property
    def pending_request_count(self) -> int:
        return len(self.building.pending_requests)

    @property
    def total_requests_processed(self) -> int:
        return self.building.total_requests_processed

    def run(self, duration: int) -> None:
        for _ in range(duration):
            self.tick()

    def tick(self) -> None:
        self.current_time += 1
        assigned = self.building.dispatch()
        for elevator in self.building.elevators:
            elevator.step()

        self._write_trace()
        if assigned:
            self._emit("assignment", {"time": self.current_time, "requests": assigned})
        self._emit("tick", self.snapshot())

    def submit_request(self, origin: int, destination: int) -> Request:
        if not (self.building.contains_floor(origin) and self.building.contains_floor(destination)):
            raise RequestRejected(
                RequestError.OUT_OF_RANGE,
                origin,
                destination,
                f"Floors must be between 0 and {self.building.num_floors - 1}",
            )
        if origin == destination:
            raise RequestRejected(
                RequestError.SAME_FLOOR, origin, destination, "Origin and destination are the same floor"
            )

        request = Request(
            request_id=self._next_request_id,
            origin=origin,
            destination=destination,
            requested_at=self.current_time,
        )
        self._next_request_id += 1
        self.building.add_request(request)
        logger.debug(
            "Request %d submitted at t=%d: %d -> %d", request.request_id, self.current_time, origin, destination
        )
        self._emit("request", request)
        return request

    def snapshot(self) -> SystemSnapshot:
        return SystemSnapshot(
            time_step=self.current_time,
            num_floors=self.building.num_floors,
            elevators=[elevator.status() for elevator in self.building.elevators],
            pending_request_count=self.pending_request_count,
            total_requests_processed=self.total_requests_processed,
        )

    def on_event(self, event: str, callback: Callable[[object], None]) -> None:
        self.event_hooks.setdefault(event, []).append(callback)

    def _write_trace(self) -> None:
        if self.trace_sink is None:
            return
        with contextlib.suppress(OSError):
            for elevator in self.building.elevators:
                self.trace_sink.write(elevator.trace_line(self.current_time))

    def _emit(self, event: str, payload: object) -> None:
        for callback in self.event_hooks.get(event, []):
            callback(payload)


def create_system(
    num_floors: int,
    elevator_count: int,
    trace_sink: Optional[TraceSink] = None,
    scheduler: str = "greedy",
) -> Simulation:
    building = Building.with_elevators(num_floors, elevator_count, scheduler_name=scheduler)
    return Simulation(building=building, trace_sink=trace_sink)
