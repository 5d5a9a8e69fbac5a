"""Command-line interface for the chemotaxis simulator."""

from __future__ import annotations

import argparse
import logging
import sys

from chemotaxis import __version__
from chemotaxis.config import SimulationSettings
from chemotaxis.engine.simulation import TickObserver, run_simulation
from chemotaxis.errors import SimulationError
from chemotaxis.logging_config import configure_logging
from chemotaxis.model.world import create_world
from chemotaxis.telemetry import open_recorder

logger = logging.getLogger("chemotaxis.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chemotaxis",
        description="Chemotaxis - run-and-tumble particle simulation",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", help="Run a headless simulation")
    run.add_argument("--ticks", type=int, default=6000, help="Ticks to run (default: 6000)")
    run.add_argument("--seed", type=int, default=None, help="Random seed (default: unseeded)")
    run.add_argument(
        "--output",
        default=None,
        help="Telemetry file for bound,tick; records (default: none)",
    )
    run.add_argument(
        "--every",
        type=int,
        default=1,
        help="Record telemetry every N ticks (default: 1)",
    )

    serve = subparsers.add_parser("serve", help="Run the simulation server")
    serve.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    serve.add_argument("--port", type=int, default=8000, help="Port to bind to (default: 8000)")

    return parser


def _run(parsed: argparse.Namespace) -> int:
    settings = SimulationSettings() if parsed.seed is None else SimulationSettings(seed=parsed.seed)
    world = create_world(settings)
    observers: list[TickObserver] = []

    def execute() -> None:
        snapshots = run_simulation(world, parsed.ticks, observers=observers)
        if snapshots:
            last = snapshots[-1]
            print(
                f"tick={last.tick} bound={last.bound_count} "
                f"live={last.live_count} free={last.free_receptors}"
            )

    try:
        if parsed.output:
            with open_recorder(parsed.output, every=parsed.every) as recorder:
                observers.append(recorder)
                execute()
        else:
            execute()
    except KeyboardInterrupt:
        logger.info("Interrupted at tick %d", world.tick)
    except SimulationError:
        logger.exception("Simulation aborted at tick %d", world.tick)
        return 1
    return 0


def _serve(parsed: argparse.Namespace) -> int:
    import uvicorn

    print(f"Starting chemotaxis server at http://{parsed.host}:{parsed.port}")
    print("Press Ctrl+C to stop")
    uvicorn.run("chemotaxis.server.app:app", host=parsed.host, port=parsed.port)
    return 0


def main(args: list[str] | None = None) -> int:
    """Entry point.

    Args:
        args: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Exit code (0 for success).
    """
    parser = build_parser()
    parsed = parser.parse_args(args)
    if parsed.command == "run" and (parsed.ticks < 0 or parsed.every < 1):
        parser.error("--ticks must be >= 0 and --every must be >= 1")
    configure_logging()
    if parsed.command == "run":
        return _run(parsed)
    return _serve(parsed)


if __name__ == "__main__":
    sys.exit(main())
