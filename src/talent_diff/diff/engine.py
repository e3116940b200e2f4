"""diff_builds: node-by-node comparison of two decoded builds.

Build A is the baseline and build B the new build.  Indices are compared
positionally, so both records must come from the same specialization (and, in
practice, the same tree fingerprint).

Effective values used for CHANGED detection:

- rank:   ``ranks_purchased`` if present, else 1 if partially ranked, else 0.
          Only compared when at least one side is partially ranked.
- choice: ``choice_entry_index`` if present, else 0.
          Only compared when at least one side is a choice node.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from talent_diff.diff.result import (
    ChangeDetails,
    ChoiceChange,
    DiffKind,
    DiffResult,
    DiffSummary,
    NodeDiff,
    RankChange,
)
from talent_diff.errors import SpecMismatchError

if TYPE_CHECKING:
    from talent_diff.selection import NodeSelection, SelectionRecord

__all__ = ["diff_builds"]

logger = logging.getLogger(__name__)


def diff_builds(build_a: SelectionRecord, build_b: SelectionRecord) -> DiffResult:
    """Compare two builds of the same specialization.

    Args:
        build_a: Baseline build.
        build_b: New build.

    Returns:
        A ``DiffResult``.  Indices selected in neither build are omitted.

    Raises:
        SpecMismatchError: If the builds have different spec ids.
    """
    if build_a.spec_id != build_b.spec_id:
        raise SpecMismatchError(build_a.display_name, build_b.display_name)

    nodes_a = {node.index: node for node in build_a.nodes}
    nodes_b = {node.index: node for node in build_b.nodes}

    diffs: list[NodeDiff] = []
    added: list[int] = []
    removed: list[int] = []
    changed: list[int] = []

    for index in sorted(nodes_a.keys() | nodes_b.keys()):
        node_a = nodes_a.get(index)
        node_b = nodes_b.get(index)
        selected_a = node_a is not None and node_a.is_selected
        selected_b = node_b is not None and node_b.is_selected

        if selected_b and not selected_a:
            diffs.append(NodeDiff(index, DiffKind.ADDED, build_b=node_b))
            added.append(index)
        elif selected_a and not selected_b:
            diffs.append(NodeDiff(index, DiffKind.REMOVED, build_a=node_a))
            removed.append(index)
        elif node_a is not None and node_b is not None and selected_a and selected_b:
            details = _change_details(node_a, node_b)
            if details is None:
                diffs.append(
                    NodeDiff(index, DiffKind.UNCHANGED, build_a=node_a, build_b=node_b)
                )
            else:
                diffs.append(
                    NodeDiff(
                        index,
                        DiffKind.CHANGED,
                        build_a=node_a,
                        build_b=node_b,
                        change_details=details,
                    )
                )
                changed.append(index)

    logger.debug(
        "Diffed spec %d: +%d -%d ~%d", build_a.spec_id, len(added), len(removed), len(changed)
    )
    return DiffResult(
        spec_id=build_a.spec_id,
        spec_name=build_a.spec_name,
        diffs=tuple(diffs),
        summary=DiffSummary(
            added=tuple(sorted(added)),
            removed=tuple(sorted(removed)),
            changed=tuple(sorted(changed)),
        ),
    )


def _effective_rank(node: NodeSelection) -> int:
    if node.ranks_purchased is not None:
        return node.ranks_purchased
    return 1 if node.is_partially_ranked else 0


def _change_details(node_a: NodeSelection, node_b: NodeSelection) -> ChangeDetails | None:
    """Return what differs between two selected nodes, or None if nothing does."""
    rank_change: RankChange | None = None
    choice_change: ChoiceChange | None = None

    if node_a.is_partially_ranked or node_b.is_partially_ranked:
        rank_a = _effective_rank(node_a)
        rank_b = _effective_rank(node_b)
        if rank_a != rank_b:
            rank_change = RankChange(rank_a, rank_b)

    if node_a.is_choice_node or node_b.is_choice_node:
        choice_a = node_a.choice_entry_index or 0
        choice_b = node_b.choice_entry_index or 0
        if choice_a != choice_b:
            choice_change = ChoiceChange(choice_a, choice_b)

    if rank_change is None and choice_change is None:
        return None
    return ChangeDetails(rank_change=rank_change, choice_change=choice_change)
