"""Build map step: aggregate, pack and validate.

Runs once per build invocation and hands the resulting BuildMapContext to
the packaging pipeline. Nothing is cached between runs.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from bundlemap.build.aggregator import BuildAssetAggregator
from bundlemap.build.context import BuildMapContext
from bundlemap.build.errors import EmptyInputError
from bundlemap.build.protocols import (
    AssetFilter,
    BundleRule,
    CollectRoot,
    CollectSource,
    DependencySource,
)
from bundlemap.build.resolver import DependencyResolver
from bundlemap.config import BuildMapConfig
from bundlemap.rules import ExtensionAssetFilter, PatternBundleRule
from bundlemap.runtime.progress import ProgressReporter

logger = logging.getLogger("bundlemap.build.task")


class BuildMapTask:
    """Builds the authoritative build map for one invocation."""

    def __init__(
        self,
        roots: Sequence[CollectRoot],
        dependency_source: DependencySource,
        asset_filter: AssetFilter,
        bundle_rule: BundleRule,
        config: Optional[BuildMapConfig] = None,
        progress: Optional[ProgressReporter] = None,
    ) -> None:
        self.roots = list(roots)
        self.config = config or BuildMapConfig.default()
        self.resolver = DependencyResolver(
            dependency_source, asset_filter, default_variant=self.config.default_variant
        )
        self.aggregator = BuildAssetAggregator(self.resolver, bundle_rule, progress)

    def run(self) -> BuildMapContext:
        """Execute the step.

        Returns:
            BuildMapContext: Every bundle with its assets.

        Raises:
            EmptyInputError: If no root yields a valid asset.
            FilenameCollisionError: If a bundle holds same-named files and
                collision checking is enabled.
        """
        all_assets = self.aggregator.get_build_assets(self.roots)
        if not all_assets:
            raise EmptyInputError(len(self.roots))

        logger.info("Build asset list contains %d assets", len(all_assets))
        context = BuildMapContext(default_variant=self.config.default_variant)
        for asset_info in all_assets:
            context.pack_asset(asset_info)
        logger.info("Packed assets into %d bundles", len(context))

        if self.config.check_filename_collisions:
            context.detect_filename_collisions()
        return context


def build_map(
    collect_source: CollectSource,
    dependency_source: DependencySource,
    config: Optional[BuildMapConfig] = None,
    asset_filter: Optional[AssetFilter] = None,
    bundle_rule: Optional[BundleRule] = None,
    progress: Optional[ProgressReporter] = None,
) -> BuildMapContext:
    """Build a map with the configured filter and pack rules unless overridden."""
    config = config or BuildMapConfig.default()
    task = BuildMapTask(
        roots=collect_source.collect_roots(),
        dependency_source=dependency_source,
        asset_filter=asset_filter or ExtensionAssetFilter.from_config(config.asset_filter),
        bundle_rule=bundle_rule or PatternBundleRule.from_config(config.pack_rules),
        config=config,
        progress=progress,
    )
    return task.run()


__all__ = ["BuildMapTask", "build_map"]
