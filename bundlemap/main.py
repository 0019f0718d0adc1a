"""Main CLI entry point for bundlemap.

Provides commands: build, inspect, graph
"""

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from bundlemap.cli.build import build_command
from bundlemap.cli.graph import graph_command
from bundlemap.cli.inspect import inspect_command

logger = logging.getLogger("bundlemap.cli")


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for coordinated output (optional).
    """
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )

    logging.basicConfig(
        level=level,
        format="[%(name)s] [%(levelname)s] %(message)s",
        handlers=[handler],
    )


def _add_build_inputs(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "manifest",
        help="Project manifest (TOML/JSON file) with collected roots and references",
    )
    parser.add_argument(
        "-c",
        "--config",
        help=(
            "Optional build configuration. Can be a path to a TOML/JSON "
            "file or an inline TOML/JSON string. When omitted, built-in "
            "defaults are used."
        ),
    )
    parser.add_argument(
        "--no-collision-check",
        action="store_true",
        help="Skip the same-name file collision check",
    )


def main() -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = argparse.ArgumentParser(
        description="Bundlemap - Asset Bundle Build Map Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    build_parser = subparsers.add_parser(
        "build",
        help="Resolve collected assets into bundles and write the build map",
    )
    _add_build_inputs(build_parser)
    build_parser.add_argument(
        "-o",
        "--output",
        required=True,
        help="Output build map file (JSON)",
    )
    build_parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable progress bars",
    )

    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Build the map and print bundles and variants",
    )
    _add_build_inputs(inspect_parser)

    graph_parser = subparsers.add_parser(
        "graph",
        help="Report reference cycles in the manifest asset graph",
    )
    graph_parser.add_argument(
        "manifest",
        help="Project manifest (TOML/JSON file)",
    )
    graph_parser.add_argument(
        "--limit",
        type=int,
        default=20,
        help="Maximum number of cycles to report (default: 20, <=0 for no limit)",
    )

    args = parser.parse_args()

    setup_logging(args.verbose)

    if args.command == "build":
        return build_command(args)
    elif args.command == "inspect":
        return inspect_command(args)
    elif args.command == "graph":
        return graph_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
