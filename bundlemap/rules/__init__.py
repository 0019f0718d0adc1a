"""Concrete asset filter and bundle rule implementations."""

from bundlemap.rules.filters import ExtensionAssetFilter, normalize_asset_path
from bundlemap.rules.pack_rules import (
    PatternBundleRule,
    label_for_directory,
    label_for_file,
)

__all__ = [
    "ExtensionAssetFilter",
    "PatternBundleRule",
    "label_for_directory",
    "label_for_file",
    "normalize_asset_path",
]
