from __future__ import annotations

from typing import Iterable, List

from .interface import ElevatorSnapshot

DIRECTION_PENALTY = 5


def is_compatible(elevator: ElevatorSnapshot, floor: int) -> bool:
    """True when reaching ``floor`` does not require turning around."""

    if elevator.direction == 0:
        return True
    if elevator.direction > 0:
        return floor >= elevator.floor
    return floor <= elevator.floor


def score_elevator(elevator: ElevatorSnapshot, origin: int) -> int:
    """Greedy cost of sending ``elevator`` to a pickup at ``origin``.

    Distance to the pickup, plus a fixed penalty when a moving car is
    heading away from the pickup, plus one point per queued target.
    Lower is better.
    """

    score = abs(origin - elevator.floor)
    if not elevator.idle and not is_compatible(elevator, origin):
        score += DIRECTION_PENALTY
    return score + elevator.queue_size


def extend_targets(targets: Iterable[int], floors: Iterable[int]) -> List[int]:
    """Append ``floors`` to a copy of ``targets``, skipping repeats of the tail."""

    queued = list(targets)
    for floor in floors:
        if queued and queued[-1] == floor:
            continue
        queued.append(floor)
    return queued
