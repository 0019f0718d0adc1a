"""Inspect command: print bundles and variant groups as rich tables."""

import logging
from typing import Optional

from rich.console import Console
from rich.table import Table

from bundlemap.build.context import BuildMapContext
from bundlemap.cli.build import BUILD_ERRORS, run_build

logger = logging.getLogger("bundlemap.cli.inspect")


def render_build_map(context: BuildMapContext, console: Console) -> None:
    """Print one row per bundle, then the variant groups if any."""
    table = Table(title=f"Build map ({len(context)} bundles)")
    table.add_column("Bundle", style="bold")
    table.add_column("Collected", justify="right")
    table.add_column("Included", justify="right")
    table.add_column("Tags")

    for bundle_info in context:
        table.add_row(
            bundle_info.full_name,
            str(len(bundle_info.collected_asset_paths())),
            str(len(bundle_info.included_asset_paths())),
            ", ".join(sorted(bundle_info.asset_tags())),
        )
    console.print(table)

    groups = context.variant_groups()
    if not groups:
        return
    variants_table = Table(title="Variants")
    variants_table.add_column("Bundle", style="bold")
    variants_table.add_column("Variants")
    for group in groups:
        variants_table.add_row(group.bundle_name, ", ".join(group.variants))
    console.print(variants_table)


def inspect_command(args, console: Optional[Console] = None) -> int:
    """Execute inspect command.

    Args:
        args: Parsed command-line arguments.
        console: Console to print to (stdout console if None).

    Returns:
        int: Exit code.
    """
    console = console or Console()
    try:
        context = run_build(args, show_progress=False)
    except BUILD_ERRORS as e:
        logger.error("Inspect failed: %s", e)
        return 1

    render_build_map(context, console)
    return 0
