"""Tests for build asset aggregation (merge, prune, assign, re-home)."""

from __future__ import annotations

from typing import Dict, List

import pytest

from bundlemap.build.aggregator import BuildAssetAggregator
from bundlemap.build.asset_info import DEFAULT_VARIANT
from bundlemap.build.protocols import BundleAddress, CollectRoot
from bundlemap.build.resolver import DependencyResolver


class _Deps:
    """Dependency source answering from a fixed mapping."""

    def __init__(self, closures: Dict[str, List[str]]) -> None:
        self.closures = closures
        self.calls: List[str] = []

    def get_dependencies(self, path: str) -> List[str]:
        self.calls.append(path)
        return list(self.closures.get(path, [path]))


class _AcceptAll:
    def is_valid_asset(self, path: str) -> bool:
        return True


class _RejectPaths:
    def __init__(self, *rejected: str) -> None:
        self.rejected = set(rejected)

    def is_valid_asset(self, path: str) -> bool:
        return path not in self.rejected


class _TableRule:
    """Bundle rule from a table; unknown paths get a label equal to their path."""

    def __init__(self, table: Dict[str, BundleAddress]) -> None:
        self.table = table
        self.calls: List[str] = []

    def bundle_for(self, path: str) -> BundleAddress:
        self.calls.append(path)
        return self.table.get(path, BundleAddress(label=path.lower()))


def _aggregate(closures, roots, table=None, asset_filter=None):
    rule = _TableRule(table or {})
    resolver = DependencyResolver(_Deps(closures), asset_filter or _AcceptAll())
    assets = BuildAssetAggregator(resolver, rule).get_build_assets(roots)
    return {asset.path: asset for asset in assets}, [a.path for a in assets], rule


def test_end_to_end_example_rehomes_orphan_into_root_bundle() -> None:
    """A depends on {A, X}, B on {B}: X lands in A's bundle with A's tags."""
    roots = [
        CollectRoot("A", frozenset({"t1"})),
        CollectRoot("B", frozenset({"t2"})),
    ]
    table = {"A": BundleAddress("bundleA"), "B": BundleAddress("bundleB")}

    by_path, order, rule = _aggregate({"A": ["A", "X"], "B": ["B"]}, roots, table)

    assert order == ["A", "B", "X"]
    assert by_path["X"].bundle_label == "bundleA"
    assert by_path["X"].bundle_variant == DEFAULT_VARIANT
    assert by_path["X"].tags == {"t1"}
    assert by_path["X"].is_collected_root is False
    assert by_path["B"].bundle_label == "bundleB"
    # The rule is never consulted for an orphan.
    assert "X" not in rule.calls


def test_shared_dependency_gets_its_own_bundle_and_merged_tags() -> None:
    roots = [
        CollectRoot("A", frozenset({"t1"})),
        CollectRoot("B", frozenset({"t2"})),
    ]
    table = {
        "A": BundleAddress("bundleA"),
        "B": BundleAddress("bundleB"),
        "S": BundleAddress("shared"),
    }

    by_path, _, _ = _aggregate({"A": ["A", "S"], "B": ["B", "S"]}, roots, table)

    shared = by_path["S"]
    assert shared.dependent_count == 1
    assert shared.bundle_label == "shared"
    assert shared.tags == {"t1", "t2"}
    assert shared.is_collected_root is False


def test_dependency_later_declared_as_root_is_upgraded() -> None:
    """P first seen as A's dependency, then declared as root B itself."""
    roots = [
        CollectRoot("A", frozenset({"ta"})),
        CollectRoot("P", frozenset({"tp"}), exclude_from_listing=True),
    ]

    by_path, order, _ = _aggregate({"A": ["A", "P"], "P": ["P"]}, roots)

    p_info = by_path["P"]
    assert p_info.is_collected_root is True
    assert p_info.exclude_from_listing is True
    assert p_info.tags == {"ta", "tp"}
    assert p_info.bundle_label == "p"
    assert order.count("P") == 1


def test_collected_flag_is_never_reverted() -> None:
    """A root later reached as another root's dependency stays a root."""
    roots = [CollectRoot("P"), CollectRoot("A")]

    by_path, _, _ = _aggregate({"P": ["P"], "A": ["A", "P"]}, roots)

    assert by_path["P"].is_collected_root is True
    assert by_path["P"].dependent_count == 1


def test_same_root_declared_twice_merges_tags_without_duplicates() -> None:
    roots = [
        CollectRoot("A", frozenset({"t1"})),
        CollectRoot("A", frozenset({"t2"})),
    ]

    by_path, order, _ = _aggregate({"A": ["A"]}, roots)

    assert order == ["A"]
    assert by_path["A"].tags == {"t1", "t2"}
    assert by_path["A"].is_collected_root is True


def test_root_without_dependencies_gets_own_bundle() -> None:
    by_path, order, _ = _aggregate({}, [CollectRoot("Solo")])

    assert order == ["Solo"]
    assert by_path["Solo"].bundle_label == "solo"


def test_repeated_path_within_one_root_is_not_pruned() -> None:
    """A path listed twice by one root counts as an extra reference."""
    roots = [CollectRoot("A")]
    table = {"A": BundleAddress("bundleA"), "D": BundleAddress("own")}

    by_path, _, rule = _aggregate({"A": ["A", "D", "D"]}, roots, table)

    assert by_path["D"].dependent_count == 1
    assert by_path["D"].bundle_label == "own"
    assert "D" in rule.calls


def test_variant_is_copied_when_rehoming() -> None:
    roots = [CollectRoot("A")]
    table = {"A": BundleAddress("ui", "en")}

    by_path, _, _ = _aggregate({"A": ["A", "X"]}, roots, table)

    assert by_path["X"].bundle_label == "ui"
    assert by_path["X"].bundle_variant == "en"
    assert by_path["X"].bundle_full_name == "ui.en"


def test_orphan_of_filtered_root_falls_back_to_own_rule() -> None:
    roots = [CollectRoot("Script.cs")]

    by_path, order, _ = _aggregate(
        {"Script.cs": ["Script.cs", "Tex.png"]},
        roots,
        asset_filter=_RejectPaths("Script.cs"),
    )

    assert order == ["Tex.png"]
    assert by_path["Tex.png"].bundle_label == "tex.png"


def test_invalid_paths_are_filtered_out() -> None:
    roots = [CollectRoot("A")]

    _, order, _ = _aggregate(
        {"A": ["A", "Code.cs", "X"]}, roots, asset_filter=_RejectPaths("Code.cs")
    )

    assert "Code.cs" not in order
    assert set(order) == {"A", "X"}


def test_aggregation_is_idempotent() -> None:
    closures = {
        "A": ["A", "X", "S"],
        "B": ["B", "S", "Y"],
        "C": ["C", "A", "X", "S"],
    }
    roots = [
        CollectRoot("A", frozenset({"a"})),
        CollectRoot("B", frozenset({"b"})),
        CollectRoot("C", frozenset({"c"})),
    ]

    first, first_order, _ = _aggregate(closures, roots)
    second, second_order, _ = _aggregate(closures, roots)

    assert first_order == second_order
    for path in first_order:
        assert first[path].bundle_full_name == second[path].bundle_full_name
        assert first[path].tags == second[path].tags


def test_every_resolved_path_appears_exactly_once() -> None:
    closures = {
        "A": ["A", "X", "S"],
        "B": ["B", "S", "Y"],
        "C": ["C", "A", "X", "S"],
    }
    roots = [CollectRoot("A"), CollectRoot("B"), CollectRoot("C")]

    by_path, order, _ = _aggregate(closures, roots)

    expected = {path for closure in closures.values() for path in closure}
    assert set(order) == expected
    assert len(order) == len(set(order))
    assert all(asset.bundle_label for asset in by_path.values())


@pytest.mark.parametrize("count", [0, 1])
def test_empty_or_single_input(count: int) -> None:
    roots = [CollectRoot("A")][:count]

    _, order, _ = _aggregate({"A": ["A"]}, roots)

    assert order == ["A"][:count]
