from __future__ import annotations

from typing import Dict, Iterable, List

from .interface import ElevatorSnapshot, PendingRequest, Scheduler
from .utils import extend_targets, score_elevator


class GreedyScheduler:
    """Assigns each backlog request to the cheapest elevator right now.

    Requests are considered in backlog order. Every elevator is scored
    against the pickup floor and the lowest score wins; equal scores go to
    the elevator listed first. There is no lookahead and no rebalancing of
    stops that were already assigned.
    """

    def select_calls(
        self,
        elevator_state: Iterable[ElevatorSnapshot],
        pending_requests: Iterable[PendingRequest],
    ) -> Dict[int, List[PendingRequest]]:
        assignments: Dict[int, List[PendingRequest]] = {}
        elevators = list(elevator_state)
        for request in pending_requests:
            candidate = self._choose_elevator(elevators, request)
            if candidate is None:
                continue
            assignments.setdefault(candidate.elevator_id, []).append(request)
            elevators = self._update_snapshot(elevators, candidate, request)
        return assignments

    def _choose_elevator(
        self, elevators: List[ElevatorSnapshot], request: PendingRequest
    ) -> ElevatorSnapshot | None:
        if not elevators:
            return None
        best_index = min(
            range(len(elevators)),
            key=lambda index: (score_elevator(elevators[index], request.origin), index),
        )
        return elevators[best_index]

    def _update_snapshot(
        self,
        elevators: List[ElevatorSnapshot],
        chosen: ElevatorSnapshot,
        request: PendingRequest,
    ) -> List[ElevatorSnapshot]:
        updated: List[ElevatorSnapshot] = []
        for elevator in elevators:
            if elevator.elevator_id == chosen.elevator_id:
                updated.append(
                    ElevatorSnapshot(
                        elevator_id=elevator.elevator_id,
                        floor=elevator.floor,
                        direction=elevator.direction,
                        targets=extend_targets(
                            elevator.targets, (request.origin, request.destination)
                        ),
                    )
                )
            else:
                updated.append(elevator)
        return updated
