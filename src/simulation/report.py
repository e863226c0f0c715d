"""Plain-text renderings of a :class:`SystemSnapshot` for terminals."""
from __future__ import annotations

from typing import List

from .simulation import SystemSnapshot

EMPTY_CELL = "[            ]"
LEGEND = "Legend: U=Up, D=Down, I=Idle, Door: Open/Closed"


def render_building_view(snapshot: SystemSnapshot) -> str:
    lines: List[str] = ["Building view (top = highest floor)", ""]
    for floor in range(snapshot.num_floors - 1, -1, -1):
        cells = []
        for elevator in snapshot.elevators:
            if elevator.floor == floor:
                door = "Open" if elevator.door_open else "Closed"
                cells.append(f"[E{elevator.elevator_id} {elevator.direction[0]} {door}]")
            else:
                cells.append(EMPTY_CELL)
        lines.append(f"Floor {floor} | " + "".join(cells))
    lines.extend(["", LEGEND])
    return "\n".join(lines)


def render_status(snapshot: SystemSnapshot) -> str:
    lines = [f"=== Time step: {snapshot.time_step} ===", render_building_view(snapshot), "", "Elevator details:"]
    for elevator in snapshot.elevators:
        door = "Open" if elevator.door_open else "Closed"
        lines.append(
            f"Elevator {elevator.elevator_id} | Floor: {elevator.floor} | Dir: {elevator.direction} "
            f"| Door: {door} | Queue size: {elevator.queue_size}"
        )
    lines.append(f"Pending requests: {snapshot.pending_request_count}")
    return "\n".join(lines)


def render_summary(snapshot: SystemSnapshot) -> str:
    lines = [
        "===== Simulation Summary =====",
        f"Total time steps: {snapshot.time_step}",
        f"Total requests processed (assigned): {snapshot.total_requests_processed}",
    ]
    for elevator in snapshot.elevators:
        lines.append(f"Elevator {elevator.elevator_id} served stops: {elevator.total_stops_served}")
    return "\n".join(lines)
