"""Tests for diff result serialization and immutability."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import FrozenInstanceError

import pytest

from talent_diff.diff import DiffKind, DiffSummary, diff_builds
from talent_diff.selection import PurchasedFull, PurchasedPartial, SelectionRecord, Unselected


class TestDiffKind:
    def test_values(self) -> None:
        assert [str(kind) for kind in DiffKind] == ["added", "removed", "changed", "unchanged"]


class TestToDict:
    def test_shape(self, record: Callable[..., SelectionRecord]) -> None:
        a = record([PurchasedPartial(0, ranks_purchased=1), Unselected(1)])
        b = record([PurchasedPartial(0, ranks_purchased=3), PurchasedFull(1)])
        data = diff_builds(a, b).to_dict()
        assert data["specId"] == 254
        assert data["specName"] == "Marksmanship Hunter"
        assert data["summary"] == {"added": [1], "removed": [], "changed": [0]}
        changed = data["diffs"][0]
        assert changed["diffType"] == "changed"
        assert changed["changeDetails"] == {"rankChange": {"from": 1, "to": 3}}
        added = data["diffs"][1]
        assert "buildA" not in added
        assert added["buildB"]["nodeIndex"] == 1


class TestImmutability:
    def test_summary_frozen(self) -> None:
        summary = DiffSummary(added=(1,))
        with pytest.raises(FrozenInstanceError):
            summary.added = ()  # type: ignore[misc]

    def test_by_index_is_read_only(self, record: Callable[..., SelectionRecord]) -> None:
        lookup = diff_builds(record([PurchasedFull(0)]), record([PurchasedFull(0)])).by_index()
        with pytest.raises(TypeError):
            lookup[5] = lookup[0]  # type: ignore[index]
