"""Active optional-branch inference from selection bits.

An optional branch ("hero tree") is a small connected component of the
topology.  The analyzer never needs the branch groups named in static data:
it takes every component whose size falls inside the ``BranchPolicy`` band as
a candidate, counts the build's selected nodes in each, and picks the
candidate with the strictly highest count (first candidate on ties).

Only nodes usable by the build's specialization are counted, since a tree can
carry spec-restricted nodes that a build of another spec may still flag.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from talent_diff.graph.components import partition_components
from talent_diff.graph.config import DEFAULT_BRANCH_POLICY, BranchPolicy

if TYPE_CHECKING:
    from talent_diff.graph.components import ComponentCache, ComponentPartition
    from talent_diff.selection import SelectionRecord
    from talent_diff.topology.nodes import BranchGroup, TalentTreeTopology

__all__ = [
    "ActiveBranch",
    "branch_node_ids",
    "select_active_branch",
    "select_branch_group",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ActiveBranch:
    """The branch a build activates.

    Attributes:
        active_node_ids:     Node ids of the winning component.
        all_branch_node_ids: Node ids of every candidate component (winner included).
        selected_count:      Selected, usable nodes counted in the winner.
    """

    active_node_ids: frozenset[int]
    all_branch_node_ids: frozenset[int]
    selected_count: int


def _partition(
    topology: TalentTreeTopology, cache: ComponentCache | None
) -> ComponentPartition:
    return cache.get(topology) if cache is not None else partition_components(topology)


def _candidates(
    topology: TalentTreeTopology,
    policy: BranchPolicy,
    cache: ComponentCache | None,
) -> list[np.ndarray]:
    partition = _partition(topology, cache)
    return [c for c in partition.components if policy.contains(len(c))]


def branch_node_ids(
    topology: TalentTreeTopology,
    policy: BranchPolicy = DEFAULT_BRANCH_POLICY,
    cache: ComponentCache | None = None,
) -> frozenset[int]:
    """Return the node ids of every branch candidate component."""
    candidates = _candidates(topology, policy, cache)
    if not candidates:
        return frozenset()
    return topology.node_ids(np.concatenate(candidates).tolist())


def _counted_mask(topology: TalentTreeTopology, record: SelectionRecord) -> np.ndarray:
    """Boolean mask of node indices that are selected and usable by the build's spec."""
    size = len(topology.nodes)
    selected = np.zeros(size, dtype=bool)
    indices = [index for index in record.selected_indices() if index < size]
    selected[indices] = True
    usable = np.fromiter(
        (node.is_usable_by(record.spec_id) for node in topology.nodes),
        dtype=bool,
        count=size,
    )
    return selected & usable


def select_active_branch(
    topology: TalentTreeTopology,
    record: SelectionRecord,
    policy: BranchPolicy = DEFAULT_BRANCH_POLICY,
    cache: ComponentCache | None = None,
) -> ActiveBranch | None:
    """Infer which optional branch ``record`` activates.

    Args:
        topology: Tree the record was encoded against.
        record:   Decoded build.
        policy:   Size band for candidate components.
        cache:    Optional partition cache; without one the topology is
                  partitioned on every call.

    Returns:
        An ``ActiveBranch``, or None when there are no candidates or no
        candidate holds a selected node.
    """
    candidates = _candidates(topology, policy, cache)
    if not candidates:
        return None

    counted = _counted_mask(topology, record)
    best: np.ndarray | None = None
    best_count = 0
    for component in candidates:
        count = int(np.count_nonzero(counted[component]))
        if count > best_count:
            best = component
            best_count = count

    if best is None:
        logger.debug("No branch selected for spec %d", record.spec_id)
        return None

    return ActiveBranch(
        active_node_ids=topology.node_ids(best.tolist()),
        all_branch_node_ids=topology.node_ids(np.concatenate(candidates).tolist()),
        selected_count=best_count,
    )


def select_branch_group(
    topology: TalentTreeTopology, record: SelectionRecord
) -> BranchGroup | None:
    """Pick among the topology's named branch groups by selected-member count.

    The group with the strictly highest number of selected member nodes wins;
    the first group wins ties.  Returns None when the topology names no
    groups or none of their members is selected.
    """
    if not topology.branch_groups:
        return None

    selected_ids = frozenset(
        node.id
        for index in record.selected_indices()
        if (node := topology.node_at(index)) is not None
    )

    best: BranchGroup | None = None
    best_count = 0
    for group in topology.branch_groups:
        count = len(group.node_ids & selected_ids)
        if count > best_count:
            best = group
            best_count = count
    return best
