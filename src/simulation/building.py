from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Set

from .elevator import Elevator
from .errors import InvalidConfiguration
from .request import Request
from dispatch import ElevatorSnapshot, PendingRequest, Scheduler, get_scheduler

logger = logging.getLogger(__name__)


@dataclass
class Building:
    """Fixed fleet of elevators plus the backlog of unassigned requests."""

    num_floors: int
    elevators: List[Elevator] = field(default_factory=list)
    scheduler_name: str = "greedy"
    pending_requests: List[Request] = field(default_factory=list)
    total_requests_processed: int = 0
    scheduler: Scheduler = field(init=False)

    def __post_init__(self) -> None:
        if self.num_floors < 2:
            raise InvalidConfiguration(f"A building needs at least 2 floors, got {self.num_floors}")
        self.scheduler = get_scheduler(self.scheduler_name)

    @classmethod
    def with_elevators(cls, num_floors: int, elevator_count: int, **kwargs) -> "Building":
        if elevator_count < 0:
            raise InvalidConfiguration(f"elevator_count cannot be negative, got {elevator_count}")
        return cls(num_floors=num_floors, elevators=[Elevator(i) for i in range(elevator_count)], **kwargs)

    def contains_floor(self, floor_number: int) -> bool:
        return 0 <= floor_number < self.num_floors

    def add_request(self, request: Request) -> None:
        self.pending_requests.append(request)

    def dispatch(self) -> List[Request]:
        """Assign what the scheduler accepts this tick; return the assigned requests."""
        if not self.pending_requests:
            return []
        requests = [r.as_pending() for r in self.pending_requests]
        assignments = self.scheduler.select_calls(self._snapshot_elevators(), requests)

        done: Set[int] = set()
        for elevator_id, chosen in assignments.items():
            elevator = self._get_elevator(elevator_id)
            if elevator is None:
                continue
            for pending in chosen:
                self._assign(elevator, pending)
                done.add(pending.request_id)

        assigned = [r for r in self.pending_requests if r.request_id in done]
        self.pending_requests = [r for r in self.pending_requests if r.request_id not in done]
        return assigned

    def _assign(self, elevator: Elevator, pending: PendingRequest) -> None:
        elevator.add_target(pending.origin)
        elevator.add_target(pending.destination)
        self.total_requests_processed += 1
        logger.debug(
            "Request %d (%d -> %d) assigned to elevator %d",
            pending.request_id,
            pending.origin,
            pending.destination,
            elevator.elevator_id,
        )

    def _snapshot_elevators(self) -> List[ElevatorSnapshot]:
        return [
            ElevatorSnapshot(
                elevator_id=elevator.elevator_id,
                floor=elevator.current_floor,
                direction=int(elevator.direction),
                targets=list(elevator.targets),
            )
            for elevator in self.elevators
        ]

    def _get_elevator(self, elevator_id: int) -> Optional[Elevator]:
        for elevator in self.elevators:
            if elevator.elevator_id == elevator_id:
                return elevator
        return None
