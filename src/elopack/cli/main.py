"""Command-line entry point: ``elopack --analyze FILE``."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .. import __version__
from .analyze import analyze_file

DESCRIPTION = "elopack: Schema-driven Binary Codec"

EPILOG = """
Examples:
  elopack --analyze messages.py          Show the wire layout of message classes
  elopack -v --analyze messages.py       Same, with debug logging
"""


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="elopack",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    parser.add_argument(
        "--analyze",
        metavar="FILE",
        type=Path,
        help="print the wire layout of every BaseMessage class defined in FILE",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parser.add_argument("--version", action="version", version=f"elopack {__version__}")
    return parser


def _run_analyze(file_path: Path) -> int:
    if not file_path.is_file():
        print(f"Error: File not found: {file_path}", file=sys.stderr)
        return 1
    try:
        analyze_file(file_path)
    except Exception as e:  # the analyzed module may raise anything at import
        print(f"Error analyzing file: {e}", file=sys.stderr)
        return 1
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the CLI.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.analyze is None:
        parser.print_help()
        return 0
    return _run_analyze(args.analyze)


if __name__ == "__main__":
    sys.exit(main())
