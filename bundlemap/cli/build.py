"""Build command implementation."""

# CLI must gracefully handle build failures to present user-friendly errors.


import logging
import time
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from bundlemap.build.context import BuildMapContext
from bundlemap.build.errors import BuildMapError, FilenameCollisionError
from bundlemap.build.task import build_map
from bundlemap.config import BuildMapConfig
from bundlemap.export.json import export_build_map
from bundlemap.runtime.config_loader import load_build_map_config
from bundlemap.runtime.manifest import load_manifest
from bundlemap.runtime.progress import RichProgressReporter

logger = logging.getLogger("bundlemap.cli.build")

BUILD_ERRORS = (BuildMapError, ValidationError, OSError, ValueError)


def run_build(args, show_progress: Optional[bool] = None) -> BuildMapContext:
    """Load manifest and config from parsed args and build the map.

    Args:
        args: Parsed command-line arguments (``manifest``, optional ``config``
            and ``no_collision_check``).
        show_progress: Override for progress rendering; defaults to config.

    Returns:
        BuildMapContext: The built map.
    """
    config: BuildMapConfig = load_build_map_config(getattr(args, "config", None))
    if getattr(args, "no_collision_check", False):
        config = config.model_copy(update={"check_filename_collisions": False})
    if show_progress is None:
        show_progress = config.show_progress and not getattr(args, "no_progress", False)

    manifest = load_manifest(args.manifest)
    graph = manifest.to_graph()

    with RichProgressReporter(enabled=show_progress) as progress:
        return build_map(manifest, graph, config=config, progress=progress)


def build_command(args) -> int:
    """Execute build command.

    Args:
        args: Parsed command-line arguments.

    Returns:
        int: Exit code.
    """
    logger.debug("=== Bundlemap Build ===")
    logger.debug("Manifest: %s", args.manifest)
    logger.debug("Output: %s", args.output)

    start_time = time.time()
    try:
        context = run_build(args)
        export_build_map(context, Path(args.output))
    except FilenameCollisionError as e:
        logger.error(
            "Build failed: %d same-name file collision(s) found, see warnings above",
            len(e.collisions),
        )
        return 1
    except BUILD_ERRORS as e:
        logger.error("Build failed: %s", e)
        return 1

    logger.info(
        "Build map written to %s: %d bundles in %.2fs",
        args.output,
        len(context),
        time.time() - start_time,
    )
    return 0
