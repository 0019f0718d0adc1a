"""Build map core: resolution, aggregation and bundle packing."""

from bundlemap.build.aggregator import BuildAssetAggregator, get_build_assets
from bundlemap.build.asset_info import DEFAULT_VARIANT, AssetInfo, make_bundle_full_name
from bundlemap.build.bundle import BundleInfo, PipelineBuild
from bundlemap.build.context import BuildMapContext, VariantGroup
from bundlemap.build.errors import (
    BuildMapError,
    BundleNameConflictError,
    EmptyInputError,
    FilenameCollision,
    FilenameCollisionError,
    ManifestError,
    UnresolvedBundleLookupError,
)
from bundlemap.build.protocols import (
    AssetFilter,
    BundleAddress,
    BundleRule,
    CollectRoot,
    CollectSource,
    DependencySource,
)
from bundlemap.build.resolver import DependencyResolver

__all__ = [
    "AssetFilter",
    "AssetInfo",
    "BuildAssetAggregator",
    "BuildMapContext",
    "BuildMapError",
    "BundleNameConflictError",
    "BundleAddress",
    "BundleInfo",
    "BundleRule",
    "CollectRoot",
    "CollectSource",
    "DEFAULT_VARIANT",
    "DependencyResolver",
    "DependencySource",
    "EmptyInputError",
    "FilenameCollision",
    "FilenameCollisionError",
    "ManifestError",
    "PipelineBuild",
    "UnresolvedBundleLookupError",
    "VariantGroup",
    "get_build_assets",
    "make_bundle_full_name",
]
