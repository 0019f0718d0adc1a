"""Collaborator interfaces consumed by the build map core.

The core never looks these up from ambient state; every implementation is
passed in explicitly so the algorithm can run against in-memory fakes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class CollectRoot:
    """A declared root asset.

    Args:
        path: Asset path of the root.
        tags: Tags applied to the root and everything it reaches.
        exclude_from_listing: Keep the root out of downstream path listings.
    """

    path: str
    tags: FrozenSet[str] = field(default_factory=frozenset)
    exclude_from_listing: bool = False


@dataclass(frozen=True)
class BundleAddress:
    """Label/variant pair produced by a bundle rule. ``variant=None`` means default."""

    label: str
    variant: Optional[str] = None


@runtime_checkable
class CollectSource(Protocol):
    """Source of root declarations, in declaration order."""

    def collect_roots(self) -> List[CollectRoot]:
        """Return all declared roots."""


@runtime_checkable
class DependencySource(Protocol):
    """Dependency graph introspection."""

    def get_dependencies(self, path: str) -> List[str]:
        """Return every path transitively referenced by ``path``, itself included."""


@runtime_checkable
class AssetFilter(Protocol):
    """Predicate deciding which paths are eligible for bundling."""

    def is_valid_asset(self, path: str) -> bool:
        """Return True when ``path`` may be placed in a bundle."""


@runtime_checkable
class BundleRule(Protocol):
    """Maps an asset path to its bundle label and variant."""

    def bundle_for(self, path: str) -> BundleAddress:
        """Return the bundle address for ``path``."""


__all__ = [
    "AssetFilter",
    "BundleAddress",
    "BundleRule",
    "CollectRoot",
    "CollectSource",
    "DependencySource",
]
