"""CLI command to inspect the asset reference graph of a manifest.

Reports reference cycles. Cycles never fail a build since dependency
closures tolerate them, so this command is diagnostic only.
"""

from __future__ import annotations

import logging
from typing import List

from bundlemap.build.errors import ManifestError
from bundlemap.runtime.manifest import load_manifest

logger = logging.getLogger("bundlemap.cli.graph")


def graph_command(args) -> int:
    """Execute graph inspection command.

    Args:
        args: Parsed command-line arguments.

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    try:
        manifest = load_manifest(args.manifest)
    except ManifestError as e:
        logger.error("Graph command failed: %s", e)
        return 1

    graph = manifest.to_graph()
    logger.info(
        "Asset graph: %d assets, %d references",
        graph.asset_count(),
        graph.reference_count(),
    )

    # Interpret limit: <= 0 means "no limit".
    limit_arg = getattr(args, "limit", None)
    limit = limit_arg if isinstance(limit_arg, int) and limit_arg > 0 else None

    cycles: List[List[str]] = graph.find_cycles(limit=limit)
    if not cycles:
        logger.info("Asset graph has no reference cycles")
        return 0

    logger.warning("Detected %d reference cycle(s)", len(cycles))
    for idx, cycle in enumerate(cycles, start=1):
        # Present a closed loop for readability: A -> B -> C -> A
        pretty_cycle = cycle + [cycle[0]]
        logger.warning("Cycle %d: %s", idx, " -> ".join(pretty_cycle))
    return 0
