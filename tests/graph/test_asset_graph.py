"""Tests for the networkx-backed asset graph."""

import pytest

from bundlemap.graph import AssetGraph


def test_dependencies_include_self_first_and_are_transitive() -> None:
    graph = AssetGraph.from_mapping(
        {
            "Scene.unity": ["Player.prefab", "Sky.mat"],
            "Player.prefab": ["Player.mat"],
            "Player.mat": ["Player.png", "Standard.shader"],
        }
    )

    assert graph.get_dependencies("Scene.unity") == [
        "Scene.unity",
        "Player.prefab",
        "Player.mat",
        "Player.png",
        "Standard.shader",
        "Sky.mat",
    ]
    assert graph.direct_dependencies("Player.mat") == ["Player.png", "Standard.shader"]


def test_shared_dependency_listed_once() -> None:
    graph = AssetGraph.from_mapping({"A": ["B", "C"], "B": ["C"]})

    assert graph.get_dependencies("A") == ["A", "B", "C"]


def test_unknown_path_resolves_to_itself() -> None:
    assert AssetGraph().get_dependencies("Lonely.png") == ["Lonely.png"]
    assert AssetGraph().direct_dependencies("Lonely.png") == []


def test_cycles_are_tolerated_and_reported() -> None:
    graph = AssetGraph.from_mapping({"A": ["B"], "B": ["A", "C"]})

    assert graph.get_dependencies("A") == ["A", "B", "C"]
    assert graph.has_cycles()
    cycles = graph.find_cycles()
    assert len(cycles) == 1
    assert set(cycles[0]) == {"A", "B"}
    assert graph.find_cycles(limit=0) == []


def test_self_reference_is_ignored() -> None:
    graph = AssetGraph()
    graph.add_dependency("A", "A")

    assert graph.reference_count() == 0
    assert not graph.has_cycles()


def test_empty_path_rejected() -> None:
    with pytest.raises(ValueError):
        AssetGraph().add_asset("")


def test_asset_and_reference_counts() -> None:
    graph = AssetGraph.from_mapping({"A": ["C"], "B": ["C"]})

    assert graph.asset_count() == 3
    assert graph.reference_count() == 2
