"""Command-line entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from . import __version__, simulate
from .config import ForceMode, SimulationConfig
from .errors import MDError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser of the ``mduniverse`` command."""
    parser = argparse.ArgumentParser(
        prog="mduniverse",
        description=(
            "Replicate a molecule into a periodic cell and integrate it "
            "with velocity Verlet, writing an XYZ trajectory."
        ),
    )
    parser.add_argument("topology", help="topology file of the reference molecule")
    parser.add_argument("output", help="trajectory file to write")
    parser.add_argument("-t", "--temperature", type=float, help="temperature (K)")
    parser.add_argument("-p", "--pressure", type=float, help="pressure (Pa)")
    parser.add_argument("--timestep", type=float, help="integration timestep (s)")
    parser.add_argument("--max-time", type=float, help="simulated time (s)")
    parser.add_argument("-c", "--copies", type=int, help="number of replicas")
    parser.add_argument(
        "-f", "--frameskip", type=int, help="steps skipped between frames"
    )
    parser.add_argument(
        "-n",
        "--numerical",
        action="store_true",
        help="use finite-difference forces",
    )
    parser.add_argument(
        "--minimize",
        action="store_true",
        help="run the Monte Carlo minimizer before integrating",
    )
    parser.add_argument("--seed", type=int, help="random seed")
    parser.add_argument(
        "--config", help="JSON configuration; command-line options override it"
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="-v info, -vv debug"
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def config_from_args(args: argparse.Namespace) -> SimulationConfig:
    """Merge a JSON configuration, if any, with command-line options."""
    config = (
        SimulationConfig.from_json(args.config) if args.config else SimulationConfig()
    )
    overrides = {
        "temperature": args.temperature,
        "pressure": args.pressure,
        "timestep": args.timestep,
        "max_time": args.max_time,
        "copies": args.copies,
        "frameskip": args.frameskip,
        "seed": args.seed,
    }
    changes = {key: value for key, value in overrides.items() if value is not None}
    if args.numerical:
        changes["force_mode"] = ForceMode.NUMERICAL
    if args.minimize:
        changes["minimize"] = True
    return config.replace(**changes) if changes else config


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line and return the exit status."""
    args = build_parser().parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(
        level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    try:
        config = config_from_args(args)
        result = simulate.run(args.topology, args.output, config)
    except MDError as exc:
        logger.error("%s", exc)
        return 1

    logger.info(
        "%s: %d iterations, %d frames written to %s",
        result.name,
        result.iterations,
        result.frames_written,
        args.output,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
