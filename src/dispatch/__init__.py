from __future__ import annotations

from typing import Dict, Type

from .greedy import GreedyScheduler
from .interface import ElevatorSnapshot, PendingRequest, Scheduler
from .utils import DIRECTION_PENALTY, extend_targets, is_compatible, score_elevator

__all__ = [
    "DIRECTION_PENALTY",
    "ElevatorSnapshot",
    "GreedyScheduler",
    "PendingRequest",
    "Scheduler",
    "extend_targets",
    "get_scheduler",
    "is_compatible",
    "score_elevator",
]


SCHEDULER_REGISTRY: Dict[str, Type[Scheduler]] = {
    "greedy": GreedyScheduler,
}


def get_scheduler(name: str, **kwargs) -> Scheduler:
    cls = SCHEDULER_REGISTRY.get(name.lower())
    if cls is None:
        raise ValueError(f"Unknown scheduler '{name}'. Available: {', '.join(SCHEDULER_REGISTRY)}")
    return cls(**kwargs)
