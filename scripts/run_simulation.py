"""Entry point for running Hivemind simulations.

Usage:
    python scripts/run_simulation.py --ticks 500 --creeps 6 --hostiles 1 --seed 42
"""

import argparse
import logging
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from rich.console import Console

from hivemind.config import RegulatorConfig
from hivemind.logger import configure_file_logging, get_logger
from hivemind.simulator.engine import SimulationEngine
from hivemind.simulator.generator import ScenarioGenerator
from hivemind.simulator.world import SimulatedWorld

console = Console()


def print_scenario_summary(world: SimulatedWorld) -> None:
    """Print a summary of the generated rooms."""
    console.print("\n[bold cyan]Generated Scenario[/bold cyan]")
    for room in world.rooms():
        console.print(f"  [bold]{room}[/bold]")
        console.print(f"    Creeps:   {len(world.my_creeps(room))}")
        console.print(f"    Hostiles: {len(world.hostile_creeps(room))}")
        console.print(f"    Towers:   {len(world.towers(room))}")
        console.print(f"    Sources:  {len(world.sources(room))}")
        console.print(f"    Sites:    {len(world.construction_sites(room))}")
        console.print(f"    Energy capacity: {world.energy_capacity_available(room)}")
    console.print()


def main():
    parser = argparse.ArgumentParser(
        description="Hivemind — job-market regulator simulator"
    )
    parser.add_argument("--ticks", type=int, default=500, help="Ticks to simulate (default: 500)")
    parser.add_argument("--rooms", type=int, default=1, help="Number of rooms (default: 1)")
    parser.add_argument("--creeps", type=int, default=6, help="Creeps per room (default: 6)")
    parser.add_argument("--hostiles", type=int, default=0, help="Hostile creeps per room (default: 0)")
    parser.add_argument("--no-tower", action="store_true", help="Don't place a tower")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--config", type=str, default=None, help="JSON file with RegulatorConfig overrides")
    parser.add_argument("--log-dir", type=str, default=None, help="Also write a rotating log file here")
    parser.add_argument("--verbose", action="store_true", help="Show debug logs on the console")

    args = parser.parse_args()

    log = get_logger()
    if args.verbose:
        log.set_console_level(logging.DEBUG)
    if args.log_dir:
        configure_file_logging(args.log_dir)

    config = RegulatorConfig.from_file(args.config) if args.config else RegulatorConfig()

    console.print("[bold]Hivemind[/bold] — Starting simulation...\n")

    generator = ScenarioGenerator(seed=args.seed)
    world = generator.generate_world(
        num_rooms=args.rooms,
        num_creeps=args.creeps,
        num_hostiles=args.hostiles,
        with_tower=not args.no_tower,
    )
    print_scenario_summary(world)

    engine = SimulationEngine(world=world, config=config, ticks=args.ticks)
    metrics = engine.run()
    metrics.print_report(console)


if __name__ == "__main__":
    main()
