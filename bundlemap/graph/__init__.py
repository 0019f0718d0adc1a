"""Public graph API surface."""

from bundlemap.graph.asset_graph import AssetGraph

__all__ = ["AssetGraph"]
