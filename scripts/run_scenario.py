"""CLI for running scripted elevator scenarios defined in JSON configs."""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from simulation import Building, BuildingConfig, Simulation

logger = logging.getLogger("run_scenario")


def build_simulation(config: Dict) -> Simulation:
    building_config = BuildingConfig.from_dict(config.get("building", {}))
    building = Building.from_config(building_config)
    return Simulation(
        building=building,
        arrival_rate_per_floor=config.get("arrival_rate_per_floor", 0.0),
        random_seed=config.get("random_seed"),
    )


def _apply_scheduled_events(
    simulation: Simulation, events: Iterable[Dict], current_time: int
) -> None:
    for event in events:
        if event.get("time", 0) != current_time:
            continue
        kind = event.get("type")
        if kind == "start":
            simulation.start()
        elif kind == "stop":
            simulation.stop()
        elif kind == "restart":
            simulation.restart()
        elif kind == "request":
            simulation.add_request(event["origin"], event["destination"])
        else:
            logger.warning("Ignoring unknown event type %r at tick %s", kind, current_time)


def run_simulation(simulation: Simulation, config: Dict) -> List[Dict]:
    duration = config.get("duration", 60)
    events = config.get("events", [])
    snapshots: List[Dict] = []

    for _ in range(duration):
        _apply_scheduled_events(simulation, events, simulation.current_time)
        simulation.step()
        snapshots.append(
            {"time": simulation.current_time, "report": simulation.report().to_dict()}
        )
    return snapshots


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
        help="Optional file path to write per-tick reports as JSON",
    )
    parser.add_argument("--verbose", action="store_true", help="Log every state transition")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    config = json.loads(args.config.read_text())
    simulation = build_simulation(config)
    snapshots = run_simulation(simulation, config)

    results = {
        "scenario": config.get("name", args.config.stem),
        "description": config.get("description"),
        "duration": simulation.current_time,
        "rejected_requests": simulation.rejected_requests,
        "final_report": simulation.report().to_dict(),
        "reports_over_time": snapshots,
    }

    save_results(args.output, results)

    print(f"Scenario: {results['scenario']}")
    if results["description"]:
        print(results["description"])
    print(f"Duration: {results['duration']} ticks")
    print(f"Rejected requests: {results['rejected_requests']}")
    print(simulation.report(), end="")
    if args.output:
        print(f"Saved reports to {args.output}")


if __name__ == "__main__":
    main()
