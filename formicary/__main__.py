"""Entry point for ``python -m formicary``.

Loads the default YAML config, founds a colony, and either opens a
Pygame window to watch it or, with ``--headless``, runs a fixed number
of ticks and logs the resulting population.
"""

from __future__ import annotations

import argparse
import logging
import pathlib

from formicary.colony.roles import Role
from formicary.simulation.config import SimulationConfig
from formicary.simulation.scheduler import Scheduler

logger = logging.getLogger("formicary")

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="formicary",
        description="Formicary - ant colony foraging and combat simulator",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "-p",
        "--preset",
        default=None,
        help="Colony preset to found (default: from config)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Override the RNG seed from the config",
    )
    parser.add_argument(
        "--cell-size",
        type=int,
        default=24,
        help="Pixel size per grid cell (default: 24)",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=30,
        help="Target frames per second (default: 30)",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run without a window and report the outcome",
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=1000,
        help="Ticks to run in headless mode (default: 1000)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    return parser.parse_args(argv)


def run_headless(scheduler: Scheduler, ticks: int) -> int:
    """Advance ``ticks`` ticks without a view and log a summary.

    Returns:
        Process exit status: 0 if the colony survived, 1 otherwise.
    """
    performed = scheduler.advance(ticks)
    counts = ", ".join(
        f"{role.name.lower()}s={scheduler.population(role)}"
        for role in (Role.FORAGER, Role.SCOUT, Role.SOLDIER, Role.INVADER)
    )
    logger.info("after %d ticks (%s): %s", performed, scheduler.clock_text(), counts)
    if scheduler.colony_alive:
        return 0
    logger.info("the colony did not survive")
    return 1


def main(argv: list[str] | None = None) -> int:
    """Parse CLI args, create the scheduler, launch the renderer or run headless."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = SimulationConfig.from_yaml(args.config)
    if args.seed is not None:
        config.seed = args.seed
    if args.preset is not None:
        config.preset = args.preset

    if args.headless:
        scheduler = Scheduler(config=config)
        scheduler.initialize()
        return run_headless(scheduler, args.ticks)

    from formicary.ui.pygame_client import PygameRenderer

    renderer = PygameRenderer(
        rows=config.rows,
        cols=config.cols,
        cell_size=args.cell_size,
    )
    scheduler = Scheduler(config=config, observer=renderer)
    renderer.attach(scheduler)
    scheduler.initialize()
    renderer.run(fps=args.fps)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
