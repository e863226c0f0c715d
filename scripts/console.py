"""Interactive console for stepping the elevator simulation by hand."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Callable, Optional

from simulation import FileTraceSink, RequestError, RequestRejected, Simulation, SystemConfig, create_system
from simulation.report import render_status, render_summary

AUTO_RUN_STEPS = 5

MENU = """
Options:
  r - new request (simulate a person calling elevator)
  s - advance simulation by 1 time step
  a - auto-run {steps} steps
  q - quit simulation""".format(steps=AUTO_RUN_STEPS)


def _read_int(prompt: str, read: Callable[[str], str]) -> Optional[int]:
    try:
        return int(read(prompt).strip())
    except ValueError:
        return None


def prompt_config(read: Callable[[str], str] = input) -> SystemConfig:
    defaults = SystemConfig()
    low, high = SystemConfig.FLOOR_RANGE
    floors = _read_int(f"Enter number of floors ({low} - {high}): ", read)
    if floors is None or not low <= floors <= high:
        print(f"Invalid input. Defaulting to {defaults.num_floors} floors.")
    low, high = SystemConfig.ELEVATOR_RANGE
    elevators = _read_int(f"Enter number of elevators ({low} - {high}): ", read)
    if elevators is None or not low <= elevators <= high:
        print(f"Invalid input. Defaulting to {defaults.elevator_count} elevators.")
    requested = SystemConfig(
        num_floors=defaults.num_floors if floors is None else floors,
        elevator_count=defaults.elevator_count if elevators is None else elevators,
    )
    return requested.with_defaults()


def handle_request(simulation: Simulation, read: Callable[[str], str] = input) -> None:
    origin = _read_int("Enter current floor: ", read)
    destination = _read_int("Enter destination floor: ", read)
    if origin is None or destination is None:
        print("Invalid command.")
        return
    try:
        simulation.submit_request(origin, destination)
    except RequestRejected as exc:
        if exc.error is RequestError.SAME_FLOOR:
            print("You are already on that floor.")
        else:
            print(f"Invalid request. Floors must be between 0 and {simulation.num_floors - 1}.")
        return
    print(f"Request added from floor {origin} to floor {destination}.")


def run_console(simulation: Simulation, read: Callable[[str], str] = input) -> None:
    while True:
        print()
        print(render_status(simulation.snapshot()))
        print(MENU)
        command = read("Enter command: ").strip().lower()
        if command == "r":
            handle_request(simulation, read)
        elif command == "s":
            simulation.tick()
        elif command == "a":
            print(f"Auto-running {AUTO_RUN_STEPS} steps...")
            simulation.run(AUTO_RUN_STEPS)
        elif command == "q":
            break
        else:
            print("Invalid command.")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--trace", type=Path, default=Path("elevator_log.txt"), help="Trace file path")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    print("===== Elevator Simulation =====")
    config = prompt_config()
    trace_sink = FileTraceSink(args.trace).open()
    simulation = create_system(config.num_floors, config.elevator_count, trace_sink=trace_sink)
    try:
        run_console(simulation)
    finally:
        trace_sink.close(simulation.current_time)

    print()
    print(render_summary(simulation.snapshot()))
    if trace_sink.path.exists():
        print(f"Log saved to {trace_sink.path}")
    print("Goodbye!")


if __name__ == "__main__":
    main()
