#!/usr/bin/env python3
"""
Cascading Collapse CLI

Removes the most loaded node of a network round after round, letting
nodes pushed over their capacity fail in turn, and reports load, capacity
and resilience figures for every recorded iteration.

Usage Examples:
    # Run the built-in ten-node reference network
    python simulate_collapse.py run --example

    # Run a topology file (JSON or YAML) with a tighter tolerance
    python simulate_collapse.py run --input topology.yaml --alpha 0.5

    # Run a generated ring of 12 nodes, export the report
    python simulate_collapse.py run --topology ring --nodes 12 -o report.json

    # Write a generated fully connected topology to a file
    python simulate_collapse.py generate --topology net --nodes 6 net6.yaml
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import argparse
import json
import logging
from typing import List, Optional

from netcollapse.config import Container, Settings
from netcollapse.domain.models import TopologyDescription
from netcollapse.domain.services import TOPOLOGY_KINDS, generate_topology


# =============================================================================
# Topology Descriptions (for help text)
# =============================================================================

TOPOLOGY_HELP = {
    "net": "Fully connected network",
    "ring": "Nodes on a cycle",
    "line": "Nodes on a path",
    "star": "Node 0 linked to every other node",
}


# =============================================================================
# Argument Parsing
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser with subcommands."""
    # Parent parser for common arguments
    common_parser = argparse.ArgumentParser(add_help=False)

    output_group = common_parser.add_argument_group("Output")
    output_group.add_argument("--output", "-o", metavar="FILE", help="Export results to JSON")
    output_group.add_argument("--json", action="store_true", help="Print JSON to stdout")
    output_group.add_argument("--quiet", "-q", action="store_true", help="Minimal output")
    output_group.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    # Main parser
    parser = argparse.ArgumentParser(
        prog="simulate_collapse.py",
        description="Cascading structural collapse simulation.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="\n".join(f"  {k:<6} {v}" for k, v in TOPOLOGY_HELP.items()),
    )

    # --- Subcommands ---
    subs = parser.add_subparsers(dest="command", help="Command")

    # run
    rn = subs.add_parser("run", help="Run a collapse simulation", parents=[common_parser])
    rn_source = rn.add_mutually_exclusive_group(required=True)
    rn_source.add_argument("--input", "-i", metavar="FILE", help="Topology file (.json, .yaml, .yml)")
    rn_source.add_argument("--topology", "-t", choices=TOPOLOGY_KINDS, help="Generated topology kind")
    rn_source.add_argument("--example", action="store_true", help="Built-in ten-node network")
    rn.add_argument("--nodes", "-n", type=int, default=10, help="Node count for --topology")
    rn.add_argument("--alpha", "-a", type=float, default=None, help="Capacity tolerance (default: settings)")
    rn.add_argument("--max-rounds", type=int, default=None, help="Stop after N rounds")
    rn.add_argument("--top", type=int, default=5, help="Show top N loaded nodes")

    # generate
    gn = subs.add_parser("generate", help="Write a generated topology to a file", parents=[common_parser])
    gn.add_argument("--topology", "-t", choices=TOPOLOGY_KINDS, required=True, help="Topology kind")
    gn.add_argument("--nodes", "-n", type=int, default=10, help="Node count")
    gn.add_argument("destination", metavar="FILE", help="Target file (.json, .yaml, .yml)")

    return parser


# =============================================================================
# Command Handlers
# =============================================================================

def handle_run(args, container, display) -> dict:
    """Handle the 'run' subcommand."""
    sim = container.simulation_service()

    if args.input:
        report = sim.run_from_file(args.input, alpha=args.alpha, max_rounds=args.max_rounds)
    else:
        if args.example:
            topology = TopologyDescription.example()
        else:
            topology = generate_topology(args.topology, args.nodes)
        report = sim.run(topology, alpha=args.alpha, max_rounds=args.max_rounds)

    if not args.quiet and not args.json:
        display.display_report(report, top=args.top)
    return report.to_dict()


def handle_generate(args, container, display) -> dict:
    """Handle the 'generate' subcommand."""
    topology = generate_topology(args.topology, args.nodes)
    path = container.topology_repository().save(topology, args.destination)

    if not args.quiet and not args.json:
        display.display_topology(topology, title=f"Generated {args.topology} topology")
        print(f"\n{display.colored(f'Topology saved to: {path}', display.Colors.GREEN)}")
    return topology.to_dict()


# =============================================================================
# Main Entry Point
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    settings = Settings.from_env()

    # Logging
    log_level = (
        logging.WARNING if args.quiet
        else logging.DEBUG if args.verbose
        else getattr(logging, settings.log_level, logging.WARNING)
    )
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    # Initialize container and services
    container = Container.from_settings(settings)
    display = container.display_service()

    try:
        handlers = {
            "run": handle_run,
            "generate": handle_generate,
        }
        handler = handlers[args.command]
        result_data = handler(args, container, display)

        # JSON stdout
        if args.json:
            print(json.dumps(result_data, indent=2))

        # File export
        if args.output:
            path = container.report_exporter().export_json(result_data, args.output)
            if not args.quiet and not args.json:
                print(f"\n{display.colored(f'Results saved to: {path}', display.Colors.GREEN)}")

        return 0

    except KeyboardInterrupt:
        print("\nSimulation interrupted.")
        return 130
    except Exception as e:
        print(display.colored(f"Error: {e}", display.Colors.RED), file=sys.stderr)
        if args.verbose:
            logging.exception("Simulation failed")
        return 1


if __name__ == "__main__":
    sys.exit(main())
