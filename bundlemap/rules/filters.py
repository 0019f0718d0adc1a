"""Asset validity predicate."""

from __future__ import annotations

import fnmatch
import logging
import posixpath
from typing import Iterable, Optional

from bundlemap.config import AssetFilterConfig

logger = logging.getLogger("bundlemap.rules.filters")


def normalize_asset_path(asset_path: str) -> str:
    """Forward slashes, no leading ``./``."""
    normalized = asset_path.replace("\\", "/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized


class ExtensionAssetFilter:
    """Rejects script/plugin files and configured ignore patterns."""

    def __init__(
        self,
        ignore_extensions: Optional[Iterable[str]] = None,
        ignore_patterns: Optional[Iterable[str]] = None,
    ) -> None:
        overrides = {}
        if ignore_extensions is not None:
            overrides["ignore_extensions"] = list(ignore_extensions)
        if ignore_patterns is not None:
            overrides["ignore_patterns"] = list(ignore_patterns)
        # Validates and normalizes the extensions.
        config = AssetFilterConfig(**overrides)
        self.ignore_extensions = frozenset(config.ignore_extensions)
        self.ignore_patterns = tuple(config.ignore_patterns)

    @classmethod
    def from_config(cls, config: AssetFilterConfig) -> "ExtensionAssetFilter":
        return cls(config.ignore_extensions, config.ignore_patterns)

    def is_valid_asset(self, path: str) -> bool:
        if not path or path.endswith(("/", "\\")):
            return False

        normalized = normalize_asset_path(path)
        extension = posixpath.splitext(normalized)[1].lower()
        if extension in self.ignore_extensions:
            return False

        for pattern in self.ignore_patterns:
            if fnmatch.fnmatchcase(normalized, pattern):
                logger.debug("Asset %s ignored by pattern %s", path, pattern)
                return False
        return True


__all__ = ["ExtensionAssetFilter", "normalize_asset_path"]
