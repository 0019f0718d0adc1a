"""Dependency resolution for a single root asset."""

# Collaborator errors propagate unchanged: a failed lookup aborts the build.


from __future__ import annotations

import logging
from typing import List

from bundlemap.build.asset_info import DEFAULT_VARIANT, AssetInfo
from bundlemap.build.protocols import AssetFilter, DependencySource

logger = logging.getLogger("bundlemap.build.resolver")


class DependencyResolver:
    """Turns a root path into the AssetInfo list of its dependency closure.

    The returned list always starts with the root itself (when the root is a
    valid asset) and keeps the order and multiplicity reported by the
    dependency source, minus every path rejected by the asset filter.
    """

    def __init__(
        self,
        dependency_source: DependencySource,
        asset_filter: AssetFilter,
        default_variant: str = DEFAULT_VARIANT,
    ) -> None:
        """Initialize resolver.

        Args:
            dependency_source: Graph introspection collaborator.
            asset_filter: Validity predicate applied to every returned path.
            default_variant: Default variant given to created AssetInfo objects.
        """
        self.dependency_source = dependency_source
        self.asset_filter = asset_filter
        self.default_variant = default_variant

    def resolve_paths(self, root_path: str) -> List[str]:
        """Return the filtered dependency paths of ``root_path``.

        Args:
            root_path: Declared root asset path.

        Returns:
            List[str]: Valid paths, root first.
        """
        depends = list(self.dependency_source.get_dependencies(root_path))
        if root_path not in depends:
            logger.debug("Dependency source omitted root %s; prepending it", root_path)
            depends.insert(0, root_path)

        result: List[str] = []
        skipped = 0
        for asset_path in depends:
            if self.asset_filter.is_valid_asset(asset_path):
                result.append(asset_path)
            else:
                skipped += 1

        if skipped:
            logger.debug(
                "Root %s: %d valid dependencies, %d filtered out",
                root_path,
                len(result),
                skipped,
            )
        return result

    def resolve(self, root_path: str) -> List[AssetInfo]:
        """Return fresh AssetInfo objects for every valid path in the closure."""
        return [
            AssetInfo(asset_path, default_variant=self.default_variant)
            for asset_path in self.resolve_paths(root_path)
        ]


__all__ = ["DependencyResolver"]
