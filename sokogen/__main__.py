"""Command line entry point: generate boards and print them as text."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import config
from .board import (
    GenerationExhausted,
    GeneratorSettings,
    LevelGenerator,
    MalformedTemplateError,
    SymmetryMode,
    TemplateLibrary,
    grid_to_lines,
)
from .util import rng


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sokogen", description="Generate puzzle board layouts from templates"
    )
    parser.add_argument(
        "--levels",
        type=int,
        default=1,
        help="Number of boards to generate (default: 1)",
    )
    parser.add_argument(
        "--seed",
        type=str,
        default=config.RANDOM_SEED,
        help="Master seed for reproducible boards (default: random)",
    )
    parser.add_argument(
        "--rooms",
        type=int,
        nargs=2,
        metavar=("MIN", "MAX"),
        default=(config.MIN_ROOMS, config.MAX_ROOMS),
        help=f"Rooms per axis (default: {config.MIN_ROOMS} {config.MAX_ROOMS})",
    )
    parser.add_argument(
        "--templates",
        type=Path,
        default=config.DEFAULT_TEMPLATES_PATH,
        help="Template file to load (default: bundled templates)",
    )
    parser.add_argument(
        "--full-symmetry",
        action="store_true",
        help="Try each of the eight rotations/reflections exactly once",
    )
    parser.add_argument(
        "--no-connectivity-check",
        action="store_true",
        help="Accept boards whose open cells form several pockets",
    )
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=config.MAX_GENERATION_ATTEMPTS,
        help="Attempts allowed per board",
    )
    parser.add_argument(
        "--time-limit",
        type=float,
        default=config.GENERATION_TIME_LIMIT,
        help="Seconds allowed per board",
    )
    parser.add_argument("--verbose", action="store_true", help="Log each attempt")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    rng.init(args.seed)

    try:
        settings = GeneratorSettings(
            min_rooms=args.rooms[0],
            max_rooms=args.rooms[1],
            max_attempts=args.max_attempts,
            time_limit=args.time_limit,
            connectivity_check=not args.no_connectivity_check,
            symmetry_mode=(
                SymmetryMode.FULL if args.full_symmetry else config.SYMMETRY_MODE
            ),
        )
    except ValueError as e:
        parser.error(str(e))

    try:
        library = TemplateLibrary.from_path(args.templates)
        boards = LevelGenerator(library, settings).generate(args.levels)
    except (OSError, MalformedTemplateError, GenerationExhausted) as e:
        print(f"sokogen: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        parser.error(str(e))

    for index, grid in enumerate(boards):
        if index:
            print()
        print("\n".join(grid_to_lines(grid)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
