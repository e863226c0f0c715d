"""CLI for running offline elevator dispatch scenarios defined in JSON configs."""
from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from simulation import FileTraceSink, RequestRejected, Simulation, SystemConfig, TraceSink, create_system
from simulation.report import render_summary

logger = logging.getLogger("run_scenario")


def load_system_config(config: Dict) -> SystemConfig:
    system_config = SystemConfig.from_dict(config.get("building", {}))
    system_config.validate()
    return system_config


def resolve_trace_path(config: Dict, override: Optional[Path] = None) -> Optional[Path]:
    if override:
        return override
    trace_path = load_system_config(config).trace_path
    return Path(trace_path) if trace_path else None


def build_simulation(config: Dict, trace_sink: Optional[TraceSink] = None) -> Simulation:
    system_config = load_system_config(config)
    return create_system(
        system_config.num_floors,
        system_config.elevator_count,
        trace_sink=trace_sink,
        scheduler=system_config.scheduler,
    )


def _submit_scheduled_requests(
    simulation: Simulation, requests: Iterable[Dict], current_time: int
) -> List[Dict]:
    rejected: List[Dict] = []
    for entry in requests:
        if entry.get("time", 0) != current_time:
            continue
        origin = entry.get("origin")
        destination = entry.get("destination")
        try:
            simulation.submit_request(origin, destination)
        except RequestRejected as exc:
            logger.warning("Rejected request %s -> %s at t=%d: %s", origin, destination, current_time, exc)
            rejected.append(
                {"time": current_time, "origin": origin, "destination": destination, "error": exc.error.value}
            )
    return rejected


def run_simulation(simulation: Simulation, config: Dict) -> Dict:
    duration = config.get("duration", 50)
    requests = config.get("requests", [])
    rejected: List[Dict] = []
    timeline: List[Dict] = []

    for _ in range(duration):
        rejected.extend(_submit_scheduled_requests(simulation, requests, simulation.current_time))
        simulation.tick()
        snapshot = simulation.snapshot()
        timeline.append(
            {
                "time_step": snapshot.time_step,
                "pending_request_count": snapshot.pending_request_count,
                "total_requests_processed": snapshot.total_requests_processed,
            }
        )
    return {"rejected": rejected, "timeline": timeline}


def save_results(output_path: Optional[Path], data: Dict) -> None:
    if not output_path:
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("config", type=Path, help="Path to a JSON scenario configuration file")
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional file path to write the final state and timeline as JSON",
    )
    parser.add_argument("--trace", type=Path, help="Optional file path for the per-tick elevator trace")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    config = json.loads(args.config.read_text())
    trace_path = resolve_trace_path(config, args.trace)
    trace_sink = FileTraceSink(trace_path).open() if trace_path else None
    simulation = build_simulation(config, trace_sink)
    try:
        outcome = run_simulation(simulation, config)
    finally:
        if trace_sink is not None:
            trace_sink.close(simulation.current_time)

    results = {
        "scenario": config.get("name", args.config.stem),
        "description": config.get("description"),
        "duration": simulation.current_time,
        "final_state": asdict(simulation.snapshot()),
        **outcome,
    }
    save_results(args.output, results)

    print(f"Scenario: {results['scenario']}")
    if results["description"]:
        print(results["description"])
    print(render_summary(simulation.snapshot()))
    if outcome["rejected"]:
        print(f"Rejected requests: {len(outcome['rejected'])}")
    if args.output:
        print(f"Saved results to {args.output}")


if __name__ == "__main__":
    main()
