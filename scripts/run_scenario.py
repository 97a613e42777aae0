"""CLI for running dispatch policies on plain-text building files."""
from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Optional

from lift_scheduler.adaptive import DEFAULT_MAX_SKIPS, DEFAULT_STARVATION_THRESHOLD
from lift_simulation import (
    BuildingConfig,
    BuildingState,
    InvalidConfiguration,
    Simulation,
    load_building_file,
)
from lift_simulation.logging_config import configure_from_env

POLICIES = ("scan", "look", "adaptive")


def build_simulation(config: BuildingConfig, policy: str, options: Optional[Dict] = None) -> Simulation:
    building = BuildingState.from_config(config)
    policy_options = dict(options or {}) if policy == "adaptive" else {}
    return Simulation(building=building, policy=policy, policy_options=policy_options)


def run_policy(config: BuildingConfig, policy: str, max_ticks: int, options: Optional[Dict] = None) -> Dict:
    simulation = build_simulation(config, policy, options)
    finished = simulation.run_until_complete(max_ticks)
    return {
        "policy": policy,
        "finished": finished,
        "steps": simulation.current_tick,
        "moves": simulation.metrics.moves,
        "final_metrics": asdict(simulation.metrics.snapshot(simulation.building)),
        "positions": [list(p) for p in simulation.history],
    }


def save_results(output_path: Optional[Path], data: Dict) -> None:
    if not output_path:
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("building", type=Path, help="Path to a 'floors,capacity' building file")
    parser.add_argument("--policy", choices=POLICIES, default="look")
    parser.add_argument("--compare", action="store_true", help="Run every policy on the building")
    parser.add_argument("--cars", type=int, default=1, help="Number of cars in the building")
    parser.add_argument("--max-ticks", type=int, default=1000)
    parser.add_argument("--threshold", type=int, default=DEFAULT_STARVATION_THRESHOLD)
    parser.add_argument("--max-skips", type=int, default=DEFAULT_MAX_SKIPS)
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional file path to write per-policy results as JSON",
    )
    args = parser.parse_args(argv)
    configure_from_env()

    try:
        config = load_building_file(args.building, car_count=args.cars)
    except (OSError, InvalidConfiguration) as exc:
        print(f"Could not load {args.building}: {exc}", file=sys.stderr)
        return 2

    options = {"starvation_threshold": args.threshold, "max_skips": args.max_skips}
    policies = POLICIES if args.compare else (args.policy,)
    runs = [run_policy(config, policy, args.max_ticks, options) for policy in policies]

    results = {
        "scenario": args.building.stem,
        "floors": config.floor_count,
        "cars": config.car_count,
        "capacity": config.capacity_per_car,
        "runs": runs,
    }
    save_results(args.output, results)

    print(f"Scenario: {results['scenario']}")
    print(f"Floors: {config.floor_count}  Cars: {config.car_count}  Capacity: {config.capacity_per_car}")
    for run in runs:
        status = "finished" if run["finished"] else f"did not finish within {args.max_ticks} ticks"
        print(f"{run['policy'].upper()}: {status}, {run['steps']} steps ({run['moves']} moves)")
    if len(runs) > 1:
        finished = [run for run in runs if run["finished"]]
        if finished:
            best = min(finished, key=lambda run: (run["steps"], run["moves"]))
            print(f"Most efficient (by steps): {best['policy'].upper()}")
    if args.output:
        print(f"Saved results to {args.output}")
    return 0 if all(run["finished"] for run in runs) else 1


if __name__ == "__main__":
    sys.exit(main())
