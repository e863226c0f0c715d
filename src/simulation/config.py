from __future__ import annotations

from dataclasses import dataclass, replace
from typing import ClassVar, Dict, Optional, Tuple

from .errors import InvalidConfiguration


@dataclass
class SystemConfig:
    """Building parameters accepted by the interactive and scenario front ends."""

    num_floors: int = 10
    elevator_count: int = 2
    scheduler: str = "greedy"
    trace_path: Optional[str] = None

    FLOOR_RANGE: ClassVar[Tuple[int, int]] = (5, 20)
    ELEVATOR_RANGE: ClassVar[Tuple[int, int]] = (1, 5)

    @classmethod
    def from_dict(cls, data: Dict) -> "SystemConfig":
        defaults = cls()
        return cls(
            num_floors=data.get("num_floors", defaults.num_floors),
            elevator_count=data.get("elevator_count", defaults.elevator_count),
            scheduler=data.get("scheduler", defaults.scheduler),
            trace_path=data.get("trace_path"),
        )

    def validate(self) -> None:
        low, high = self.FLOOR_RANGE
        if not low <= self.num_floors <= high:
            raise InvalidConfiguration(f"num_floors must be between {low} and {high}, got {self.num_floors}")
        low, high = self.ELEVATOR_RANGE
        if not low <= self.elevator_count <= high:
            raise InvalidConfiguration(
                f"elevator_count must be between {low} and {high}, got {self.elevator_count}"
            )

    def with_defaults(self) -> "SystemConfig":
        """Replace each out-of-range value with its default instead of failing."""
        defaults = SystemConfig()
        num_floors = self.num_floors
        if not self.FLOOR_RANGE[0] <= num_floors <= self.FLOOR_RANGE[1]:
            num_floors = defaults.num_floors
        elevator_count = self.elevator_count
        if not self.ELEVATOR_RANGE[0] <= elevator_count <= self.ELEVATOR_RANGE[1]:
            elevator_count = defaults.elevator_count
        return replace(self, num_floors=num_floors, elevator_count=elevator_count)
