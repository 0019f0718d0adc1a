"""Project manifest: collected roots plus the direct asset reference graph.

A manifest is a TOML/JSON document::

    [[collect]]
    path = "Assets/UI/Login.prefab"
    tags = ["login"]
    exclude_from_listing = false

    [dependencies]
    "Assets/UI/Login.prefab" = ["Assets/UI/Atlas.png"]

It is the file-backed collect source and dependency source used by the CLI.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from bundlemap.build.errors import ManifestError
from bundlemap.build.protocols import CollectRoot
from bundlemap.graph import AssetGraph
from bundlemap.runtime.config_loader import read_mapping

logger = logging.getLogger("bundlemap.runtime.manifest")

ManifestSource = Union[str, Path, Dict[str, Any]]


class CollectEntry(BaseModel):
    """One declared root asset."""

    path: str = Field(min_length=1)
    tags: List[str] = Field(default_factory=list)
    exclude_from_listing: bool = False

    model_config = {"extra": "forbid"}

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: List[str]) -> List[str]:
        """Strip tags and drop empty ones."""
        return [tag.strip() for tag in v if tag and tag.strip()]

    def to_root(self) -> CollectRoot:
        return CollectRoot(
            path=self.path,
            tags=frozenset(self.tags),
            exclude_from_listing=self.exclude_from_listing,
        )


class ProjectManifest(BaseModel):
    """Declared roots and direct references of a project."""

    collect: List[CollectEntry] = Field(default_factory=list)
    dependencies: Dict[str, List[str]] = Field(default_factory=dict)

    model_config = {"extra": "forbid"}

    def collect_roots(self) -> List[CollectRoot]:
        return [entry.to_root() for entry in self.collect]

    def to_graph(self) -> AssetGraph:
        graph = AssetGraph.from_mapping(self.dependencies)
        for entry in self.collect:
            graph.add_asset(entry.path)
        return graph


def load_manifest(source: ManifestSource) -> ProjectManifest:
    """Load a ProjectManifest from a mapping, a file path or inline TOML/JSON.

    Raises:
        ManifestError: If the document cannot be read or fails validation.
    """
    try:
        data = source if isinstance(source, dict) else read_mapping(source)
        manifest = ProjectManifest.model_validate(data)
    except (OSError, ValueError, ValidationError) as e:
        raise ManifestError(f"Invalid project manifest: {e}") from e

    logger.info(
        "Loaded manifest: %d collected roots, %d assets with references",
        len(manifest.collect),
        len(manifest.dependencies),
    )
    return manifest


__all__ = ["CollectEntry", "ManifestSource", "ProjectManifest", "load_manifest"]
