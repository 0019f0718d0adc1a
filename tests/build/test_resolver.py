"""Tests for DependencyResolver."""

import pytest

from bundlemap.build.resolver import DependencyResolver
from bundlemap.rules import ExtensionAssetFilter


class _Deps:
    def __init__(self, closures):
        self.closures = closures

    def get_dependencies(self, path):
        if path == "broken":
            raise RuntimeError("graph unavailable")
        return self.closures.get(path, [path])


def test_resolve_filters_invalid_assets() -> None:
    resolver = DependencyResolver(
        _Deps({"A.prefab": ["A.prefab", "Logic.cs", "Tex.png"]}),
        ExtensionAssetFilter(),
    )

    assets = resolver.resolve("A.prefab")

    assert [asset.path for asset in assets] == ["A.prefab", "Tex.png"]
    assert all(not asset.is_collected_root for asset in assets)
    assert all(asset.dependent_count == 0 for asset in assets)


def test_resolve_puts_missing_root_first() -> None:
    resolver = DependencyResolver(
        _Deps({"A.prefab": ["Tex.png"]}), ExtensionAssetFilter()
    )

    assert resolver.resolve_paths("A.prefab") == ["A.prefab", "Tex.png"]


def test_resolve_keeps_source_multiplicity() -> None:
    resolver = DependencyResolver(
        _Deps({"A.prefab": ["A.prefab", "Tex.png", "Tex.png"]}), ExtensionAssetFilter()
    )

    assert resolver.resolve_paths("A.prefab") == ["A.prefab", "Tex.png", "Tex.png"]


def test_resolve_uses_configured_default_variant() -> None:
    resolver = DependencyResolver(_Deps({}), ExtensionAssetFilter(), default_variant="ab")

    (asset,) = resolver.resolve("A.prefab")

    assert asset.bundle_variant == "ab"


def test_dependency_source_errors_propagate() -> None:
    resolver = DependencyResolver(_Deps({}), ExtensionAssetFilter())

    with pytest.raises(RuntimeError, match="graph unavailable"):
        resolver.resolve("broken")
