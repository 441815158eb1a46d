#!/usr/bin/env python3
"""
Picture transformation command line.

    picture-transform invert IN OUT
    picture-transform grayscale IN OUT
    picture-transform blur IN OUT
    picture-transform rotate {90,180,270} IN OUT
    picture-transform flip {H,V} IN OUT
    picture-transform blend IN1 IN2 ... OUT
    picture-transform mosaic TILE IN1 IN2 ... OUT
"""
import argparse
import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from models.exceptions import LoadError, PictureError, SaveError
from pipeline.commands import (
    FLIP_AXES,
    ROTATION_ANGLES,
    Blend,
    Blur,
    Command,
    Flip,
    Grayscale,
    Invert,
    Mosaic,
    Rotate,
)
from pipeline.transform_runner import run_transformation

logger = logging.getLogger(__name__)


def resolve_log_level(verbose: bool = False) -> int:
    """DEBUG when verbose, else LOG_LEVEL; unknown names fall back to INFO."""
    if verbose:
        return logging.DEBUG
    name = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        print(f"Unknown LOG_LEVEL {name!r}, using INFO", file=sys.stderr)
        return logging.INFO
    return level


def configure_logging(verbose: bool = False) -> None:
    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        level=resolve_log_level(verbose),
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="picture-transform",
        description="Apply one transformation to a picture and save the result.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    sub = parser.add_subparsers(dest="operation", required=True)

    for name in ("invert", "grayscale", "blur"):
        p = sub.add_parser(name)
        p.add_argument("paths", nargs=2, metavar="PATH", help="input then output location")

    p = sub.add_parser("rotate")
    p.add_argument("angle", type=int, choices=ROTATION_ANGLES)
    p.add_argument("paths", nargs=2, metavar="PATH", help="input then output location")

    p = sub.add_parser("flip")
    p.add_argument("axis", choices=FLIP_AXES)
    p.add_argument("paths", nargs=2, metavar="PATH", help="input then output location")

    p = sub.add_parser("blend")
    p.add_argument("paths", nargs="+", metavar="PATH", help="inputs followed by the output location")

    p = sub.add_parser("mosaic")
    p.add_argument("tile_size", type=int)
    p.add_argument("paths", nargs="+", metavar="PATH", help="inputs followed by the output location")

    return parser


def parse_command(args: argparse.Namespace, parser: argparse.ArgumentParser) -> Command:
    """Turn parsed arguments into the command value for the engine."""
    if len(args.paths) < 2:
        parser.error("need at least one input and one output location")

    extra_inputs = tuple(args.paths[1:-1])
    if args.operation == "invert":
        return Invert()
    if args.operation == "grayscale":
        return Grayscale()
    if args.operation == "blur":
        return Blur()
    if args.operation == "rotate":
        return Rotate(args.angle)
    if args.operation == "flip":
        return Flip(args.axis)
    if args.operation == "blend":
        return Blend(extra_inputs)
    if args.tile_size <= 0:
        parser.error(f"tile size must be positive, got {args.tile_size}")
    return Mosaic(args.tile_size, extra_inputs)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    command = parse_command(args, parser)
    source, destination = args.paths[0], args.paths[-1]

    try:
        run_transformation(command, source, destination)
    except LoadError as err:
        logger.error("%s", err)
        print("invalid location", file=sys.stderr)
        return 1
    except SaveError as err:
        logger.error("%s", err)
        print("invalid destination", file=sys.stderr)
        return 1
    except PictureError as err:
        logger.error("Transformation failed: %s", err)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
