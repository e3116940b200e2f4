"""Tests for the public API functions and package surface."""

from __future__ import annotations

import tomllib
from collections.abc import Callable
from pathlib import Path

import talent_diff
from talent_diff import DiffKind, PurchasedFull, Unselected, compare, diff, parse
from talent_diff.topology.nodes import TalentTreeTopology


class TestPublicApi:
    def test_parse_and_diff(self, encode: Callable[..., str]) -> None:
        a = parse(encode(254, [PurchasedFull(0), Unselected(1)]))
        b = parse(encode(254, [PurchasedFull(0), PurchasedFull(1)]))
        result = diff(a, b)
        assert result.summary.added == (1,)
        assert result.by_index()[0].kind == DiffKind.UNCHANGED

    def test_compare_strings(self, encode: Callable[..., str]) -> None:
        text = encode(254, [PurchasedFull(0)])
        assert compare(text, text).is_identical

    def test_marksmanship_self_diff(self, marksmanship_export: str) -> None:
        result = compare(marksmanship_export, marksmanship_export)
        assert result.is_identical
        assert all(entry.kind == DiffKind.UNCHANGED for entry in result.diffs)
        assert result.spec_name == "Marksmanship Hunter"

    def test_select_active_branch(
        self,
        hero_topology: TalentTreeTopology,
        record: Callable[..., talent_diff.SelectionRecord],
        selection: Callable[[int, set[int]], list[talent_diff.NodeSelection]],
    ) -> None:
        cache = talent_diff.ComponentCache()
        branch = talent_diff.select_active_branch(
            hero_topology, record(selection(67, {55, 56, 57})), cache=cache
        )
        assert branch is not None
        assert branch.active_node_ids == frozenset(range(201, 213))


class TestPackage:
    def test_version(self) -> None:
        assert talent_diff.__version__ == "0.1.0"

    def test_all_exports_resolve(self) -> None:
        for name in talent_diff.__all__:
            assert hasattr(talent_diff, name), name

    def test_core_exports(self) -> None:
        expected = {"parse", "diff", "select_active_branch", "resolve_overlaps", "visible_tree"}
        assert expected <= set(talent_diff.__all__)

    def test_errors_are_value_errors(self) -> None:
        for error in (
            talent_diff.InvalidCharacterError,
            talent_diff.TooShortError,
            talent_diff.SpecMismatchError,
            talent_diff.TopologyError,
        ):
            assert issubclass(error, ValueError)

    def test_declared_readme_exists(self) -> None:
        root = Path(__file__).resolve().parents[2]
        with (root / "pyproject.toml").open("rb") as handle:
            project = tomllib.load(handle)["project"]
        readme = root / project["readme"]
        assert readme.name == "README.md"
        assert readme.is_file()
