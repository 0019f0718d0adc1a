"""Asset value object shared by resolution, aggregation and packing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Set

# Variant used when a bundle rule does not name one.
DEFAULT_VARIANT = "unity3d"


def normalize_variant(variant: Optional[str], default_variant: str = DEFAULT_VARIANT) -> str:
    """Lower-case ``variant``; a missing one or any casing of the default becomes the default."""
    if not variant or variant.lower() == default_variant.lower():
        return default_variant
    return variant.lower()


def make_bundle_full_name(
    label: str, variant: Optional[str], default_variant: str = DEFAULT_VARIANT
) -> str:
    """Build the unique bundle name for a (label, variant) pair.

    Args:
        label: Bundle label.
        variant: Bundle variant; None or the default variant yields the bare label.
        default_variant: Variant treated as "no variant".

    Returns:
        str: ``label`` or ``label.variant``.
    """
    variant = normalize_variant(variant, default_variant)
    if variant == default_variant:
        return label
    return f"{label}.{variant}"


@dataclass
class AssetInfo:
    """One resource taking part in the build.

    Attributes:
        path: Asset path, the stable key for every map.
        tags: Tags accumulated from every root whose closure reaches this path.
        is_collected_root: Whether the path itself was declared as a root.
        exclude_from_listing: Listing flag copied from the root declaration.
        dependent_count: Additional resolution passes that returned this path.
        bundle_label: Assigned bundle label (empty until assigned).
        bundle_variant: Assigned bundle variant.
    """

    path: str
    tags: Set[str] = field(default_factory=set)
    is_collected_root: bool = False
    exclude_from_listing: bool = False
    dependent_count: int = 0
    bundle_label: str = ""
    bundle_variant: str = ""
    default_variant: str = field(default=DEFAULT_VARIANT, repr=False)

    def __post_init__(self) -> None:
        if not self.bundle_variant:
            self.bundle_variant = self.default_variant

    def add_tags(self, tags: Iterable[str]) -> None:
        """Union ``tags`` into the asset's tag set."""
        self.tags.update(tags)

    def mark_collected(self, exclude_from_listing: bool) -> None:
        """Flag the asset as a declared root. Never reverted."""
        self.is_collected_root = True
        self.exclude_from_listing = exclude_from_listing

    def set_bundle(self, label: str, variant: Optional[str] = None) -> None:
        """Assign bundle identity; the variant is normalized by normalize_variant."""
        if not label:
            raise ValueError(f"Empty bundle label assigned to asset: {self.path}")
        self.bundle_label = label
        self.bundle_variant = normalize_variant(variant, self.default_variant)

    @property
    def bundle_full_name(self) -> str:
        return make_bundle_full_name(
            self.bundle_label, self.bundle_variant, self.default_variant
        )


__all__ = ["AssetInfo", "DEFAULT_VARIANT", "make_bundle_full_name", "normalize_variant"]
