from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Protocol


@dataclass(frozen=True)
class ElevatorSnapshot:
    """Read-only view of an elevator for scoring decisions."""

    elevator_id: int
    floor: int
    direction: int
    targets: List[int]

    @property
    def queue_size(self) -> int:
        return len(self.targets)

    @property
    def idle(self) -> bool:
        return self.direction == 0


@dataclass(frozen=True)
class PendingRequest:
    """Representation of a backlog request for schedulers."""

    request_id: int
    origin: int
    destination: int
    requested_at: int


class Scheduler(Protocol):
    """Strategy interface for assigning backlog requests to elevators."""

    def select_calls(
        self,
        elevator_state: Iterable[ElevatorSnapshot],
        pending_requests: Iterable[PendingRequest],
    ) -> Dict[int, List[PendingRequest]]:
        """
        Return mapping of elevator_id -> requests assigned to it, in the
        order their targets must be queued.

        Requests missing from the result stay in the backlog and are
        offered again on the next dispatch.
        """
        ...
