"""
Command-line entry point.

    cutout [--origin tl|bl] -c NAME:XxY:WxH [-c ...] [-v] [--dry-run] [-j N] INPUT...

Exit codes: 0 on success, 1 if a capture spec is malformed or any image
fails, 2 on usage errors (argparse).
"""
from __future__ import annotations

import argparse
import logging
from collections import Counter
from pathlib import Path
from typing import List, Optional, Sequence

from cutout import __version__
from cutout.config import CutoutConfig
from cutout.core.models import CaptureSpec, Origin
from cutout.errors import CutoutError, OriginError
from cutout.logging_utils import configure_cli_logging, detach_cli_logging
from cutout.parsing import SPEC_FORMAT, parse_capture_specs
from cutout.pipeline import run_batch, run_dry_run

logger = logging.getLogger(__name__)


def _origin_arg(value: str) -> Origin:
    """argparse type for --origin."""
    try:
        return Origin.parse(value)
    except OriginError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _positive_int(value: str) -> int:
    """argparse type for --jobs."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got '{value}'") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got '{value}'")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cutout",
        description="cutout: extract rectangular regions from images",
    )
    parser.add_argument(
        "--origin",
        type=_origin_arg,
        default=Origin.TOP_LEFT,
        metavar="{tl,bl}",
        help="Coordinate origin: tl (top-left) or bl (bottom-left). Default: tl",
    )
    parser.add_argument(
        "-c", "--capture",
        action="append",
        required=True,
        metavar="SPEC",
        help=f"Capture spec: {SPEC_FORMAT}, e.g. left:200x300:1200x1850. Can be repeated.",
    )
    parser.add_argument(
        "inputs",
        nargs="+",
        type=Path,
        metavar="INPUT",
        help="Input image files (e.g. *.jpg, *.png, *.tif, *.webp, *.gif, *.bmp)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output with timing information",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate capture specifications without writing any files",
    )
    parser.add_argument(
        "-j", "--jobs",
        type=_positive_int,
        default=None,
        help="Number of images processed in parallel (default: CPU count)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _warn_on_name_collisions(specs: Sequence[CaptureSpec]) -> None:
    """Names are not required to be unique; point out outputs that will collide."""
    for name, count in Counter(spec.name for spec in specs).items():
        if not name:
            logger.warning("Warning: capture with empty name; output files will end in '_'")
        if count > 1:
            logger.warning(
                f"Warning: capture name '{name}' used {count} times; "
                "later captures overwrite earlier outputs"
            )


def run(args: argparse.Namespace) -> int:
    """Execute a parsed command line. Returns the process exit code."""
    try:
        specs = parse_capture_specs(args.capture)
    except CutoutError as e:
        logger.error(f"Error: {e}")
        return 1

    _warn_on_name_collisions(specs)

    config = CutoutConfig(
        captures=tuple(specs),
        inputs=tuple(args.inputs),
        origin=args.origin,
        verbose=args.verbose,
        dry_run=args.dry_run,
        max_workers=args.jobs,
    )

    if config.dry_run:
        try:
            run_dry_run(config)
        except CutoutError as e:
            logger.error(f"Error: {e}")
            return 1
        return 0

    batch = run_batch(config)
    for failure in batch.failures:
        logger.error(f"Error: Failed to process input image: {failure.input_path}: {failure.error}")

    if config.verbose and batch.results:
        logger.info(batch.timing.summary())

    if not batch.ok:
        logger.error(
            f"{len(batch.failures)} of {len(config.inputs)} images failed; "
            f"{batch.output_count} files were written"
        )
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Console script entry point."""
    args = build_parser().parse_args(argv)
    handler = configure_cli_logging(verbose=args.verbose)
    try:
        return run(args)
    finally:
        detach_cli_logging(handler)
