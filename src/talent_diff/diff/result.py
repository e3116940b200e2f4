"""Result types returned by ``diff_builds``.

All types are frozen dataclasses and serialize to the camelCase JSON shape of
the web tool via ``to_dict()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

    from talent_diff.selection import NodeSelection

__all__ = [
    "ChangeDetails",
    "ChoiceChange",
    "DiffKind",
    "DiffResult",
    "DiffSummary",
    "NodeDiff",
    "RankChange",
]


class DiffKind(StrEnum):
    """Classification of one node index across two builds.

    - ADDED:     selected in the new build only.
    - REMOVED:   selected in the baseline build only.
    - CHANGED:   selected in both, with a different rank or choice.
    - UNCHANGED: selected in both, identical.
    """

    ADDED = auto()
    REMOVED = auto()
    CHANGED = auto()
    UNCHANGED = auto()


@dataclass(frozen=True, slots=True)
class RankChange:
    from_value: int
    to_value: int

    def to_dict(self) -> dict[str, int]:
        return {"from": self.from_value, "to": self.to_value}


@dataclass(frozen=True, slots=True)
class ChoiceChange:
    from_value: int
    to_value: int

    def to_dict(self) -> dict[str, int]:
        return {"from": self.from_value, "to": self.to_value}


@dataclass(frozen=True, slots=True)
class ChangeDetails:
    """What differs on a node selected in both builds (one or both fields set)."""

    rank_change: RankChange | None = None
    choice_change: ChoiceChange | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.rank_change is not None:
            data["rankChange"] = self.rank_change.to_dict()
        if self.choice_change is not None:
            data["choiceChange"] = self.choice_change.to_dict()
        return data


@dataclass(frozen=True, slots=True)
class NodeDiff:
    """Diff entry for one node index.

    Attributes:
        node_index:     Selection index (not a topology node id).
        kind:           Classification, see ``DiffKind``.
        build_a:        Baseline selection; None for ADDED.
        build_b:        New selection; None for REMOVED.
        change_details: Set only for CHANGED.
    """

    node_index: int
    kind: DiffKind
    build_a: NodeSelection | None = None
    build_b: NodeSelection | None = None
    change_details: ChangeDetails | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"nodeIndex": self.node_index, "diffType": str(self.kind)}
        if self.build_a is not None:
            data["buildA"] = self.build_a.to_dict()
        if self.build_b is not None:
            data["buildB"] = self.build_b.to_dict()
        if self.change_details is not None:
            data["changeDetails"] = self.change_details.to_dict()
        return data


@dataclass(frozen=True, slots=True)
class DiffSummary:
    """Node indices per change kind, each sorted ascending.  UNCHANGED is not listed."""

    added: tuple[int, ...] = ()
    removed: tuple[int, ...] = ()
    changed: tuple[int, ...] = ()

    def to_dict(self) -> dict[str, list[int]]:
        return {
            "added": list(self.added),
            "removed": list(self.removed),
            "changed": list(self.changed),
        }


@dataclass(frozen=True, slots=True)
class DiffResult:
    """Rich result of a ``diff_builds`` call.

    Attributes:
        spec_id:   Specialization id, taken from the baseline build.
        spec_name: Specialization name from the baseline build, if resolved.
        diffs:     One entry per index selected in either build, ascending.
        summary:   Sorted index lists for added, removed and changed nodes.
    """

    spec_id: int
    spec_name: str | None
    diffs: tuple[NodeDiff, ...]
    summary: DiffSummary

    @property
    def is_identical(self) -> bool:
        return not (self.summary.added or self.summary.removed or self.summary.changed)

    def by_index(self) -> Mapping[int, NodeDiff]:
        """Return a read-only lookup of diff entries keyed by node index."""
        return MappingProxyType({entry.node_index: entry for entry in self.diffs})

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "specId": self.spec_id,
            "diffs": [entry.to_dict() for entry in self.diffs],
            "summary": self.summary.to_dict(),
        }
        if self.spec_name is not None:
            data["specName"] = self.spec_name
        return data
