"""Build asset aggregation.

Merges the dependency closures of every collected root into one
deduplicated, tagged and bundle-assigned asset list:

    merge -> prune -> assign -> re-home

The order of the last three passes is a contract. Orphans (dependency-only
assets reached by a single root) are pruned before bundle assignment and
re-homed afterwards, so the root they are re-homed onto already carries its
bundle identity.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from bundlemap.build.asset_info import AssetInfo
from bundlemap.build.protocols import BundleRule, CollectRoot
from bundlemap.build.resolver import DependencyResolver
from bundlemap.runtime.progress import NullProgressReporter, ProgressReporter

logger = logging.getLogger("bundlemap.build.aggregator")

STAGE_RESOLVE = "Resolving dependencies"
STAGE_ASSIGN = "Assigning bundles"


class BuildAssetAggregator:
    """Produces the flat build asset list from root declarations."""

    def __init__(
        self,
        resolver: DependencyResolver,
        bundle_rule: BundleRule,
        progress: Optional[ProgressReporter] = None,
    ) -> None:
        """Initialize aggregator.

        Args:
            resolver: Resolves each root into its valid dependency closure.
            bundle_rule: Assigns a label/variant pair to a path.
            progress: Optional advisory progress reporter.
        """
        self.resolver = resolver
        self.bundle_rule = bundle_rule
        self.progress = progress or NullProgressReporter()

    def get_build_assets(self, roots: Sequence[CollectRoot]) -> List[AssetInfo]:
        """Run every pass and return survivors followed by re-homed orphans.

        Args:
            roots: Root declarations, in declaration order.

        Returns:
            List[AssetInfo]: One entry per unique valid path, all with a bundle.
        """
        build_assets, references = self._merge(roots)
        orphans = self._prune(build_assets)
        self._assign(build_assets)
        self._rehome(build_assets, references, orphans)

        logger.info(
            "Aggregated %d build assets from %d roots (%d re-homed)",
            len(build_assets),
            len(roots),
            len(orphans),
        )
        return list(build_assets.values())

    def _merge(
        self, roots: Sequence[CollectRoot]
    ) -> Tuple[Dict[str, AssetInfo], Dict[str, str]]:
        """Merge every root's closure into one map keyed by path.

        Returns:
            Tuple of the working map and the ``path -> first referencing root`` map.
        """
        build_assets: Dict[str, AssetInfo] = {}
        references: Dict[str, str] = {}

        self.progress.start_stage(STAGE_RESOLVE, len(roots))
        for root in roots:
            main_asset_path = root.path
            for asset_info in self.resolver.resolve(main_asset_path):
                asset_path = asset_info.path

                existing = build_assets.get(asset_path)
                if existing is not None:
                    existing.dependent_count += 1
                    asset_info = existing
                else:
                    build_assets[asset_path] = asset_info
                    references[asset_path] = main_asset_path

                asset_info.add_tags(root.tags)

                # A dependency discovered earlier can still be declared as a root later.
                if asset_path == main_asset_path:
                    asset_info.mark_collected(root.exclude_from_listing)

            self.progress.advance(STAGE_RESOLVE)
        self.progress.finish_stage(STAGE_RESOLVE)

        logger.debug("Merged %d unique asset paths", len(build_assets))
        return build_assets, references

    def _prune(self, build_assets: Dict[str, AssetInfo]) -> List[AssetInfo]:
        """Remove assets that are neither roots nor shared between roots."""
        orphans = [
            asset_info
            for asset_info in build_assets.values()
            if not asset_info.is_collected_root and asset_info.dependent_count == 0
        ]
        for asset_info in orphans:
            del build_assets[asset_info.path]

        logger.debug("Pruned %d singly-referenced dependencies", len(orphans))
        return orphans

    def _assign(self, build_assets: Dict[str, AssetInfo]) -> None:
        """Apply the bundle rule to every surviving asset."""
        self.progress.start_stage(STAGE_ASSIGN, len(build_assets))
        for asset_info in build_assets.values():
            address = self.bundle_rule.bundle_for(asset_info.path)
            asset_info.set_bundle(address.label, address.variant)
            self.progress.advance(STAGE_ASSIGN)
        self.progress.finish_stage(STAGE_ASSIGN)

    def _rehome(
        self,
        build_assets: Dict[str, AssetInfo],
        references: Dict[str, str],
        orphans: List[AssetInfo],
    ) -> None:
        """Give each orphan the bundle of the root that first reached it."""
        for asset_info in orphans:
            reference_path = references[asset_info.path]
            reference_info = build_assets.get(reference_path)
            if reference_info is None:
                # The root itself was rejected by the asset filter.
                logger.warning(
                    "Referencing root %s of %s is not a build asset; "
                    "assigning bundle from its own rule",
                    reference_path,
                    asset_info.path,
                )
                address = self.bundle_rule.bundle_for(asset_info.path)
                asset_info.set_bundle(address.label, address.variant)
            else:
                asset_info.set_bundle(
                    reference_info.bundle_label, reference_info.bundle_variant
                )
            build_assets[asset_info.path] = asset_info


def get_build_assets(
    roots: Sequence[CollectRoot],
    resolver: DependencyResolver,
    bundle_rule: BundleRule,
    progress: Optional[ProgressReporter] = None,
) -> List[AssetInfo]:
    """Convenience wrapper around BuildAssetAggregator.get_build_assets."""
    return BuildAssetAggregator(resolver, bundle_rule, progress).get_build_assets(roots)


__all__ = ["BuildAssetAggregator", "get_build_assets", "STAGE_ASSIGN", "STAGE_RESOLVE"]
