"""Command line entry point: ``rmtree [options] [path]``.

Usage:
    rmtree                          # Print the tree of the default store
    rmtree -il /path/to/xochitl     # With icons and type labels
    rmtree -s -o ~/library          # Link the tree under ~/library
"""

import argparse
import sys
from typing import List, Optional

from . import __version__
from .api import run
from .config import DEFAULT_OUTPUT_PATH, DEFAULT_SOURCE_PATH, RunConfig, RunMode
from .formatting import FormatConfig


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rmtree",
        description="Show a reMarkable document store as a tree, or link it onto disk.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=DEFAULT_SOURCE_PATH,
        help=f"Record store directory (default: {DEFAULT_SOURCE_PATH})",
    )
    parser.add_argument("-i", "--icons", action="store_true", help="Show emoji icons")
    parser.add_argument("-l", "--labels", action="store_true", help="Show document type labels")
    parser.add_argument("-u", "--uuid", action="store_true", help="Show document UUIDs")
    parser.add_argument("-n", "--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("-v", "--version", action="store_true", help="Show version information")
    parser.add_argument(
        "-s", "--symlinks",
        action="store_true",
        help="Create symbolic links instead of printing",
    )
    parser.add_argument(
        "-o", "--output",
        default=DEFAULT_OUTPUT_PATH,
        help="Output path for symbolic links (default: current directory)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Stop at the first item that cannot be linked",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> RunConfig:
    return RunConfig(
        source_path=args.path,
        output_path=args.output,
        mode=RunMode.SYMLINK if args.symlinks else RunMode.PRINT,
        fmt=FormatConfig(
            use_color=not args.no_color,
            show_icons=args.icons,
            show_labels=args.labels,
            show_ids=args.uuid,
        ),
        strict=args.strict,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.version:
        print("rmtree version", __version__)
        return 0

    return run(config_from_args(args))


if __name__ == "__main__":
    sys.exit(main())
