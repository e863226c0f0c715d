from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Deque, List


class Direction(IntEnum):
    IDLE = 0
    UP = 1
    DOWN = -1

    @property
    def label(self) -> str:
        return self.name.capitalize()


@dataclass(frozen=True)
class ElevatorStatus:
    """Point-in-time view of one elevator for reporting."""

    elevator_id: int
    floor: int
    direction: str
    door_open: bool
    queue_size: int
    total_stops_served: int
    targets: List[int]


@dataclass
class Elevator:
    """Single car that performs exactly one unit of work per tick.

    A stop takes two ticks: the tick that reaches the front target opens the
    door without moving, the following tick closes it and completes the stop.
    Direction and door state only change inside :meth:`step`.
    """

    elevator_id: int
    current_floor: int = 0
    targets: Deque[int] = field(default_factory=deque, init=False)
    total_stops_served: int = field(default=0, init=False)
    _direction: Direction = field(default=Direction.IDLE, init=False, repr=False)
    _door_open: bool = field(default=False, init=False, repr=False)

    @property
    def direction(self) -> Direction:
        return self._direction

    @property
    def door_open(self) -> bool:
        return self._door_open

    @property
    def queue_size(self) -> int:
        return len(self.targets)

    def is_idle(self) -> bool:
        return not self.targets and not self._door_open and self._direction is Direction.IDLE

    def distance_to_floor(self, floor: int) -> int:
        return abs(floor - self.current_floor)

    def add_target(self, floor: int) -> None:
        if self.targets and self.targets[-1] == floor:
            return
        self.targets.append(floor)

    def step(self) -> None:
        if self._door_open:
            self._close_doors()
            return

        if not self.targets:
            self._direction = Direction.IDLE
            return

        target = self.targets[0]
        if self.current_floor < target:
            self.current_floor += 1
            self._direction = Direction.UP
        elif self.current_floor > target:
            self.current_floor -= 1
            self._direction = Direction.DOWN
        else:
            self._open_doors()

    def _open_doors(self) -> None:
        self._door_open = True
        # A car resting here picks up without moving; head for the next stop.
        if self._direction is Direction.IDLE:
            self._direction = self._heading_after_front()

    def _close_doors(self) -> None:
        self._door_open = False
        self.total_stops_served += 1
        if self.targets and self.targets[0] == self.current_floor:
            self.targets.popleft()
        if not self.targets:
            self._direction = Direction.IDLE

    def _heading_after_front(self) -> Direction:
        # Lone stop with nothing queued behind it: report Up until the door closes.
        if len(self.targets) > 1 and self.targets[1] < self.current_floor:
            return Direction.DOWN
        return Direction.UP

    def status(self) -> ElevatorStatus:
        return ElevatorStatus(
            elevator_id=self.elevator_id,
            floor=self.current_floor,
            direction=self._direction.label,
            door_open=self._door_open,
            queue_size=self.queue_size,
            total_stops_served=self.total_stops_served,
            targets=list(self.targets),
        )

    def trace_line(self, time_step: int) -> str:
        door = "Open" if self._door_open else "Closed"
        return (
            f"t={time_step} Elevator {self.elevator_id} Floor={self.current_floor} "
            f"Dir={self._direction.label} Door={door} QueueSize={self.queue_size}"
        )
