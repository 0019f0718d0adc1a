"""Asset dependency graph backed by networkx.

Edges point from an asset to the assets it references directly
(``asset -> dependency``). Transitive lookups walk successors in edge
insertion order, so results are deterministic for identical inputs.
"""

from __future__ import annotations

import itertools
import logging
from typing import Iterable, List, Mapping, Optional

import networkx as nx

logger = logging.getLogger("bundlemap.graph.asset_graph")


class AssetGraph:
    """Directed asset reference graph.

    Implements the dependency source used by the resolver: the closure of
    a path contains the path itself followed by every asset reachable
    from it, each exactly once. Reference cycles are tolerated.
    """

    def __init__(self) -> None:
        self._graph = nx.DiGraph()

    @classmethod
    def from_mapping(cls, dependencies: Mapping[str, Iterable[str]]) -> "AssetGraph":
        """Build a graph from a ``path -> direct dependencies`` mapping."""
        graph = cls()
        for asset_path, depends in dependencies.items():
            graph.add_asset(asset_path)
            graph.add_dependencies(asset_path, depends)
        logger.debug(
            "Asset graph built: %d assets, %d references",
            graph.asset_count(),
            graph.reference_count(),
        )
        return graph

    def add_asset(self, asset_path: str) -> None:
        if not asset_path:
            raise ValueError("Asset path must be a non-empty string")
        self._graph.add_node(asset_path)

    def add_dependency(self, asset_path: str, dependency_path: str) -> None:
        """Record that ``asset_path`` references ``dependency_path`` directly."""
        self.add_asset(asset_path)
        self.add_asset(dependency_path)
        if asset_path == dependency_path:
            return
        self._graph.add_edge(asset_path, dependency_path)

    def add_dependencies(self, asset_path: str, dependency_paths: Iterable[str]) -> None:
        for dependency_path in dependency_paths:
            self.add_dependency(asset_path, dependency_path)

    def has_asset(self, asset_path: str) -> bool:
        return self._graph.has_node(asset_path)

    def asset_count(self) -> int:
        return self._graph.number_of_nodes()

    def reference_count(self) -> int:
        return self._graph.number_of_edges()

    def direct_dependencies(self, asset_path: str) -> List[str]:
        if not self._graph.has_node(asset_path):
            return []
        return list(self._graph.successors(asset_path))

    def get_dependencies(self, path: str) -> List[str]:
        """Return ``path`` followed by every asset it transitively references.

        Unknown paths are returned alone, mirroring an asset without references.
        """
        if not self._graph.has_node(path):
            return [path]
        return list(nx.dfs_preorder_nodes(self._graph, source=path))

    def find_cycles(self, limit: Optional[int] = None) -> List[List[str]]:
        """Return up to ``limit`` reference cycles (all when limit is None)."""
        cycles = nx.simple_cycles(self._graph)
        if limit is not None:
            cycles = itertools.islice(cycles, limit)
        return [list(cycle) for cycle in cycles]

    def has_cycles(self) -> bool:
        return not nx.is_directed_acyclic_graph(self._graph)


__all__ = ["AssetGraph"]
