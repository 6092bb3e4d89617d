#!/usr/bin/env python3
"""
Mark Stager CLI

Stages modified mark files of a git repository, working on a temporary copy
of the repository unless --in-place is given.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from mark_stager import __version__
from mark_stager.config import build_settings
from mark_stager.constants import (
    ENV_AUTO_FILES,
    ENV_REPO,
    EXIT_FAILURE,
    EXIT_SUCCESS,
    LOG_FORMAT,
)
from mark_stager.exceptions import MarkStagerError
from mark_stager.models import StageOutcome, StageResult
from mark_stager.stager import run

logger = logging.getLogger(__name__)

ABOUT = "Stages tracked mark files if they changed."


def configure_logging(level: str) -> None:
    """Send log records to stdout at the given level."""
    logging.basicConfig(
        level=getattr(logging, level),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mark-stager", description=ABOUT)
    parser.add_argument(
        "-r",
        "--repo",
        metavar="DIR",
        help=f"The repository path (default: ${ENV_REPO})",
    )
    parser.add_argument(
        "-a",
        "--auto-files",
        metavar="FILES",
        nargs="+",
        action="extend",
        help=f"Relative paths of files to be staged automatically; may be repeated "
        f"(default: comma separated ${ENV_AUTO_FILES})",
    )
    parser.add_argument(
        "--in-place",
        action="store_true",
        default=None,
        help="Stage in the repository itself instead of a temporary copy",
    )
    parser.add_argument(
        "--atomic",
        action="store_true",
        default=None,
        help="Check every mark file status before staging any of them",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level name (default: INFO)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _single_line(error: Exception) -> str:
    return " ".join(str(error).split())


def _print_summary(result: StageResult) -> None:
    if result.outcome == StageOutcome.STAGED:
        for entry in result.staged:
            print(f"{entry.display_path()}: {entry.label}")
    print(result.message)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = build_settings(
            repo=args.repo,
            auto_files=args.auto_files,
            in_place=args.in_place,
            atomic=args.atomic,
            log_level="DEBUG" if args.verbose else args.log_level,
        )
    except MarkStagerError as e:
        print(f"error: {_single_line(e)}", file=sys.stderr)
        return EXIT_FAILURE

    configure_logging(settings.log_level)
    if not settings.auto_files:
        logger.warning("No mark files configured; nothing can be staged")

    try:
        result = run(settings)
    except MarkStagerError as e:
        logger.error(f"Staging failed: {e}")
        print(f"error: {_single_line(e)}", file=sys.stderr)
        return EXIT_FAILURE

    _print_summary(result)
    return EXIT_SUCCESS


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
