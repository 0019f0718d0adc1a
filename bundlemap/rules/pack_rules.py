"""Pattern-based bundle label/variant rules.

Rules are evaluated in order and the first glob that matches the asset
path decides its bundle. Paths no rule matches use the fallback pack mode.
"""

from __future__ import annotations

import fnmatch
import logging
import posixpath
from typing import List, Optional, Sequence

from bundlemap.build.protocols import BundleAddress
from bundlemap.config import (
    PACK_DIRECTORY,
    PACK_EXPLICIT,
    PACK_FILE,
    BundleRuleConfig,
    PackRulesConfig,
)
from bundlemap.rules.filters import normalize_asset_path

logger = logging.getLogger("bundlemap.rules.pack_rules")


def label_for_file(asset_path: str) -> str:
    """Label made of the path without its extension."""
    return posixpath.splitext(normalize_asset_path(asset_path))[0]


def label_for_directory(asset_path: str) -> str:
    """Label made of the parent directory; bare file names fall back to the file label."""
    directory = posixpath.dirname(normalize_asset_path(asset_path))
    return directory or label_for_file(asset_path)


class PatternBundleRule:
    """Ordered glob rules mapping asset paths to bundle addresses."""

    def __init__(
        self,
        rules: Optional[Sequence[BundleRuleConfig]] = None,
        fallback_pack: str = PACK_DIRECTORY,
        lowercase_labels: bool = True,
    ) -> None:
        self.rules: List[BundleRuleConfig] = list(rules or [])
        self.fallback_pack = fallback_pack
        self.lowercase_labels = lowercase_labels

    @classmethod
    def from_config(cls, config: PackRulesConfig) -> "PatternBundleRule":
        return cls(config.rules, config.fallback_pack, config.lowercase_labels)

    def match(self, asset_path: str) -> Optional[BundleRuleConfig]:
        """Return the first rule whose pattern matches ``asset_path``."""
        normalized = normalize_asset_path(asset_path)
        for rule in self.rules:
            if fnmatch.fnmatchcase(normalized, rule.pattern):
                return rule
        return None

    def bundle_for(self, path: str) -> BundleAddress:
        rule = self.match(path)
        if rule is None:
            label = self._derive_label(path, self.fallback_pack, None)
            variant = None
        else:
            label = self._derive_label(path, rule.pack, rule.label)
            variant = rule.variant

        if self.lowercase_labels:
            label = label.lower()
        if not label:
            raise ValueError(f"Bundle rule produced an empty label for asset: {path}")
        return BundleAddress(label=label, variant=variant)

    @staticmethod
    def _derive_label(asset_path: str, pack: str, explicit_label: Optional[str]) -> str:
        if pack == PACK_EXPLICIT:
            return explicit_label or ""
        if pack == PACK_FILE:
            return label_for_file(asset_path)
        return label_for_directory(asset_path)


__all__ = ["PatternBundleRule", "label_for_directory", "label_for_file"]
