# =============================================================================
# ragify/__main__.py - Command Line Entry Point
# =============================================================================
# Usage:
#   python -m ragify discord
#   python -m ragify elysia --workdir public
# =============================================================================

import argparse
import sys
from pathlib import Path

from lib.logger import logger
from ragify.combine import GitCommandError, combine_target
from ragify.targets import TARGETS, UnknownTargetError, get_target


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ragify",
        description="Combine a documentation repository into one markdown file.",
    )
    parser.add_argument(
        "target",
        nargs="?",
        help=f"Target name ({', '.join(sorted(TARGETS))})",
    )
    parser.add_argument(
        "--workdir",
        type=Path,
        default=Path("public"),
        help="Directory holding in/ checkouts and out/ documents (default: public)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the tool; returns the process exit code."""
    args = build_parser().parse_args(argv)

    if not args.target:
        logger.error("Please provide a target name.")
        return 1

    try:
        target = get_target(args.target)
        combine_target(target, args.workdir.resolve())
    except (UnknownTargetError, GitCommandError) as e:
        logger.error(str(e))
        return 1

    logger.info("Operation completed successfully.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
