"""JSON export for build maps."""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from bundlemap.build.context import BuildMapContext

logger = logging.getLogger("bundlemap.export.json")


def build_map_to_dict(context: BuildMapContext) -> Dict[str, Any]:
    """Serialize a build map into plain JSON-compatible data.

    Args:
        context: Build map to serialize.

    Returns:
        Dict[str, Any]: Report with bundles, pipeline builds and variant groups.
    """
    bundles = []
    for bundle_info in context:
        bundles.append(
            {
                "name": bundle_info.full_name,
                "label": bundle_info.label,
                "variant": bundle_info.variant,
                "tags": sorted(bundle_info.asset_tags()),
                "collected_assets": bundle_info.collected_asset_paths(),
                "listed_assets": bundle_info.listed_asset_paths(),
                "included_assets": bundle_info.included_asset_paths(),
            }
        )

    return {
        "default_variant": context.default_variant,
        "bundle_count": len(context),
        "asset_count": len(context.all_assets()),
        "bundles": bundles,
        "pipeline_builds": [build.to_dict() for build in context.pipeline_builds()],
        "variants": [group.to_dict() for group in context.variant_groups()],
    }


def export_build_map(context: BuildMapContext, output_path: Path) -> None:
    """Export build map to JSON format.

    Args:
        context: Build map to export.
        output_path: Output file path.
    """
    logger.info("Exporting build map to JSON: %s", output_path)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    data = build_map_to_dict(context)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)

    logger.info(
        "JSON export completed: %d bundles, %d assets",
        data["bundle_count"],
        data["asset_count"],
    )
