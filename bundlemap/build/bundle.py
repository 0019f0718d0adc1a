"""Per-bundle aggregation of build assets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Set, Tuple

from bundlemap.build.asset_info import (
    DEFAULT_VARIANT,
    AssetInfo,
    make_bundle_full_name,
    normalize_variant,
)


@dataclass(frozen=True)
class PipelineBuild:
    """Input record for the packaging pipeline: one physical bundle."""

    bundle_name: str
    asset_paths: Tuple[str, ...]

    def to_dict(self) -> dict:
        return {"bundle_name": self.bundle_name, "asset_paths": list(self.asset_paths)}


@dataclass
class BundleInfo:
    """Assets sharing one (label, variant) identity.

    No path deduplication happens here; the aggregator already guarantees
    one AssetInfo per path.
    """

    label: str
    variant: str = DEFAULT_VARIANT
    default_variant: str = field(default=DEFAULT_VARIANT, repr=False)
    assets: List[AssetInfo] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.variant = normalize_variant(self.variant, self.default_variant)

    @property
    def full_name(self) -> str:
        return make_bundle_full_name(self.label, self.variant, self.default_variant)

    @property
    def has_default_variant(self) -> bool:
        return self.variant == self.default_variant

    def pack_asset(self, asset_info: AssetInfo) -> None:
        """Append an asset whose bundle identity matches this bundle.

        Raises:
            ValueError: If the asset belongs to a different label/variant.
        """
        if (
            asset_info.bundle_label != self.label
            or asset_info.bundle_variant != self.variant
        ):
            raise ValueError(
                f"Asset {asset_info.path} assigned to "
                f"{asset_info.bundle_full_name!r} cannot be packed into {self.full_name!r}"
            )
        self.assets.append(asset_info)

    def included_asset_paths(self) -> List[str]:
        """Every member path, in packing order."""
        return [asset_info.path for asset_info in self.assets]

    def collected_asset_paths(self) -> List[str]:
        """Member paths that were declared as roots."""
        return [
            asset_info.path for asset_info in self.assets if asset_info.is_collected_root
        ]

    def listed_asset_paths(self) -> List[str]:
        """Declared roots that downstream listings should contain."""
        return [
            asset_info.path
            for asset_info in self.assets
            if asset_info.is_collected_root and not asset_info.exclude_from_listing
        ]

    def asset_tags(self) -> Set[str]:
        """Union of every member's tags."""
        tags: Set[str] = set()
        for asset_info in self.assets:
            tags.update(asset_info.tags)
        return tags

    def pipeline_build(self) -> PipelineBuild:
        return PipelineBuild(
            bundle_name=self.full_name, asset_paths=tuple(self.included_asset_paths())
        )

    def __len__(self) -> int:
        return len(self.assets)


__all__ = ["BundleInfo", "PipelineBuild"]
