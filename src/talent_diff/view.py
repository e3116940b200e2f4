"""visible_tree: the node and edge set a tree view should draw for one build.

Layout and rendering live elsewhere; this module only decides *which* nodes
and edges are visible:

- selector nodes (``SELECTOR_NODE_TYPE``) are hidden;
- nodes without any edge are hidden;
- nodes restricted to other specializations are hidden;
- optional-branch nodes outside the active branch are hidden;
- remaining position collisions go through ``resolve_overlaps``;
- an edge is visible only when both of its endpoints are.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from talent_diff.errors import SpecMismatchError
from talent_diff.graph.branches import ActiveBranch, branch_node_ids, select_active_branch
from talent_diff.graph.config import DEFAULT_BRANCH_POLICY, BranchPolicy
from talent_diff.overlap import resolve_overlaps
from talent_diff.topology.nodes import SELECTOR_NODE_TYPE

if TYPE_CHECKING:
    from talent_diff.graph.components import ComponentCache
    from talent_diff.selection import SelectionRecord
    from talent_diff.topology.nodes import TalentEdge, TalentNode, TalentTreeTopology

__all__ = ["VisibleTree", "visible_tree"]


@dataclass(frozen=True, slots=True)
class VisibleTree:
    """Nodes and edges of a talent tree that remain visible for one build.

    Attributes:
        nodes:          Surviving nodes, overlaps already resolved.
        edges:          Edges whose endpoints both survive.
        active_branch:  The inferred active branch, or None if no branch has
                        a selected node.
    """

    nodes: tuple[TalentNode, ...]
    edges: tuple[TalentEdge, ...]
    active_branch: ActiveBranch | None


def visible_tree(
    topology: TalentTreeTopology,
    record: SelectionRecord,
    policy: BranchPolicy = DEFAULT_BRANCH_POLICY,
    cache: ComponentCache | None = None,
) -> VisibleTree:
    """Compute the visible nodes and edges of ``topology`` for ``record``.

    Raises:
        SpecMismatchError: If the record was encoded for another specialization.
    """
    if record.spec_id != topology.spec_id:
        raise SpecMismatchError(
            record.display_name,
            topology.spec_name if topology.spec_name is not None else str(topology.spec_id),
        )

    active_branch = select_active_branch(topology, record, policy=policy, cache=cache)
    if active_branch is not None:
        active_ids = active_branch.active_node_ids
        all_branch_ids = active_branch.all_branch_node_ids
    else:
        active_ids = frozenset()
        all_branch_ids = branch_node_ids(topology, policy=policy, cache=cache)

    connected_ids = {edge.from_node_id for edge in topology.edges} | {
        edge.to_node_id for edge in topology.edges
    }

    def _shown(node: TalentNode) -> bool:
        if node.node_type == SELECTOR_NODE_TYPE or node.id not in connected_ids:
            return False
        if not node.is_usable_by(record.spec_id):
            return False
        if node.id in all_branch_ids:
            return node.id in active_ids
        return True

    nodes = resolve_overlaps(
        (node for node in topology.nodes if _shown(node)), active_ids, all_branch_ids
    )
    visible_ids = {node.id for node in nodes}
    edges = tuple(
        edge
        for edge in topology.edges
        if edge.from_node_id in visible_ids and edge.to_node_id in visible_ids
    )
    return VisibleTree(nodes=tuple(nodes), edges=edges, active_branch=active_branch)
