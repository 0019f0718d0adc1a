"""Configuration schema and validation for bundlemap."""

from .schema import (
    PACK_DIRECTORY,
    PACK_EXPLICIT,
    PACK_FILE,
    PACK_MODES,
    AssetFilterConfig,
    BuildMapConfig,
    BundleRuleConfig,
    PackRulesConfig,
)

__all__ = [
    "PACK_DIRECTORY",
    "PACK_EXPLICIT",
    "PACK_FILE",
    "PACK_MODES",
    "AssetFilterConfig",
    "BuildMapConfig",
    "BundleRuleConfig",
    "PackRulesConfig",
]
