"""Build map container: every bundle of one build invocation."""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Set, Tuple

from bundlemap.build.asset_info import DEFAULT_VARIANT, AssetInfo
from bundlemap.build.bundle import BundleInfo, PipelineBuild
from bundlemap.build.errors import (
    BundleNameConflictError,
    FilenameCollision,
    FilenameCollisionError,
    UnresolvedBundleLookupError,
)

logger = logging.getLogger("bundlemap.build.context")


@dataclass(frozen=True)
class VariantGroup:
    """Variants available for one bundle label.

    Attributes:
        bundle_name: Lower-cased ``label.<default variant>`` name.
        variants: Sorted, lower-cased non-default variant identifiers.
    """

    bundle_name: str
    variants: Tuple[str, ...]

    def to_dict(self) -> dict:
        return {"bundle_name": self.bundle_name, "variants": list(self.variants)}


def file_name_of(asset_path: str) -> str:
    """Final path component, accepting both separator styles."""
    return posixpath.basename(asset_path.replace("\\", "/"))


class BuildMapContext:
    """Ordered mapping of bundle full name to BundleInfo."""

    def __init__(self, default_variant: str = DEFAULT_VARIANT) -> None:
        self.default_variant = default_variant
        self._bundles: Dict[str, BundleInfo] = {}

    def pack_asset(self, asset_info: AssetInfo) -> BundleInfo:
        """Route an asset to its bundle, creating the bundle on first use.

        Returns:
            BundleInfo: The bundle the asset was packed into.

        Raises:
            BundleNameConflictError: If another (label, variant) pair already
                owns the asset's full bundle name.
        """
        bundle_name = asset_info.bundle_full_name
        bundle_info = self._bundles.get(bundle_name)
        if bundle_info is not None and (
            bundle_info.label != asset_info.bundle_label
            or bundle_info.variant != asset_info.bundle_variant
        ):
            raise BundleNameConflictError(
                bundle_name,
                existing=(bundle_info.label, bundle_info.variant),
                conflicting=(asset_info.bundle_label, asset_info.bundle_variant),
                asset_path=asset_info.path,
            )
        if bundle_info is None:
            bundle_info = BundleInfo(
                label=asset_info.bundle_label,
                variant=asset_info.bundle_variant,
                default_variant=self.default_variant,
            )
            self._bundles[bundle_name] = bundle_info
        bundle_info.pack_asset(asset_info)
        return bundle_info

    @property
    def bundles(self) -> List[BundleInfo]:
        return list(self._bundles.values())

    def bundle_names(self) -> List[str]:
        return list(self._bundles)

    def get_bundle(self, bundle_name: str) -> BundleInfo:
        """Return the bundle named ``bundle_name``.

        Raises:
            UnresolvedBundleLookupError: If no such bundle exists.
        """
        bundle_info = self._bundles.get(bundle_name)
        if bundle_info is None:
            raise UnresolvedBundleLookupError(bundle_name)
        return bundle_info

    def find_bundle(self, bundle_name: str) -> Optional[BundleInfo]:
        return self._bundles.get(bundle_name)

    def __contains__(self, bundle_name: object) -> bool:
        return bundle_name in self._bundles

    def __len__(self) -> int:
        return len(self._bundles)

    def __iter__(self) -> Iterator[BundleInfo]:
        return iter(self._bundles.values())

    def all_assets(self) -> List[AssetInfo]:
        """Every packed asset, bundle by bundle."""
        result: List[AssetInfo] = []
        for bundle_info in self._bundles.values():
            result.extend(bundle_info.assets)
        return result

    def asset_tags(self, bundle_name: str) -> Set[str]:
        return self.get_bundle(bundle_name).asset_tags()

    def included_asset_paths(self, bundle_name: str) -> List[str]:
        return self.get_bundle(bundle_name).included_asset_paths()

    def collected_asset_paths(self, bundle_name: str) -> List[str]:
        return self.get_bundle(bundle_name).collected_asset_paths()

    def pipeline_builds(self) -> List[PipelineBuild]:
        """Packaging pipeline input, one record per bundle in insertion order."""
        return [bundle_info.pipeline_build() for bundle_info in self._bundles.values()]

    def find_filename_collisions(self) -> List[FilenameCollision]:
        """Collect every same-filename pair inside each bundle.

        Within a bundle, each path whose file name was already taken by an
        earlier member yields one collision against that earlier member.
        """
        collisions: List[FilenameCollision] = []
        for bundle_info in self._bundles.values():
            first_by_name: Dict[str, str] = {}
            for asset_path in bundle_info.included_asset_paths():
                file_name = file_name_of(asset_path)
                same_file = first_by_name.get(file_name)
                if same_file is None:
                    first_by_name[file_name] = asset_path
                elif same_file != asset_path:
                    collisions.append(
                        FilenameCollision(
                            bundle_name=bundle_info.full_name,
                            path=asset_path,
                            other_path=same_file,
                        )
                    )
        return collisions

    def detect_filename_collisions(self) -> None:
        """Report every collision, then fail once.

        Raises:
            FilenameCollisionError: If any bundle holds two files with the same name.
        """
        collisions = self.find_filename_collisions()
        if not collisions:
            return
        for collision in collisions:
            logger.warning(
                "Found same file in one bundle %s: %s %s",
                collision.bundle_name,
                collision.path,
                collision.other_path,
            )
        raise FilenameCollisionError(collisions)

    def variant_groups(self) -> List[VariantGroup]:
        """Summarize labels that have at least one non-default variant."""
        variants_by_label: Dict[str, List[str]] = {}
        for bundle_info in self._bundles.values():
            label_variants = variants_by_label.setdefault(bundle_info.label, [])
            if not bundle_info.has_default_variant:
                label_variants.append(bundle_info.variant.lower())

        result: List[VariantGroup] = []
        for label, variants in variants_by_label.items():
            if not variants:
                continue
            bundle_name = f"{label}.{self.default_variant}".lower()
            result.append(
                VariantGroup(bundle_name=bundle_name, variants=tuple(sorted(set(variants))))
            )
        return result


__all__ = ["BuildMapContext", "VariantGroup", "file_name_of"]
