"""resolve_overlaps: hide nodes of inactive branches that share a canvas slot.

Mutually exclusive branches are drawn on top of each other, so a position can
hold one node from each branch.  Only the active branch's node should remain.

Rules per position (exact ``(pos_x, pos_y)`` equality):

1. A single node is kept.
2. If any node at the position is not a branch node, every node is kept:
   a mixed collision is never hidden.
3. Otherwise the first node (in input order) belonging to the active branch
   is kept, or the first node at the position when none does.

Output follows the first appearance of each position in the input, and the
kept node objects are returned unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Set

    from talent_diff.topology.nodes import TalentNode

__all__ = ["resolve_overlaps"]


def resolve_overlaps(
    nodes: Iterable[TalentNode],
    active_branch_node_ids: Set[int],
    all_branch_node_ids: Set[int],
) -> list[TalentNode]:
    """Deduplicate branch nodes sharing a position.

    Args:
        nodes:                  Candidate nodes, in display order.
        active_branch_node_ids: Ids of the active branch's nodes (may be empty).
        all_branch_node_ids:    Ids of every optional-branch node.

    Returns:
        The kept nodes.
    """
    by_position: dict[tuple[int, int], list[TalentNode]] = {}
    for node in nodes:
        by_position.setdefault(node.position, []).append(node)

    result: list[TalentNode] = []
    for group in by_position.values():
        if len(group) == 1 or not all(n.id in all_branch_node_ids for n in group):
            result.extend(group)
            continue
        active = next((n for n in group if n.id in active_branch_node_ids), group[0])
        result.append(active)
    return result
