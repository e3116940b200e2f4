"""graph subpackage: component partition and active-branch inference."""

from talent_diff.graph.branches import (
    ActiveBranch,
    branch_node_ids,
    select_active_branch,
    select_branch_group,
)
from talent_diff.graph.components import (
    ComponentCache,
    ComponentPartition,
    partition_components,
)
from talent_diff.graph.config import DEFAULT_BRANCH_POLICY, BranchPolicy

__all__ = [
    "DEFAULT_BRANCH_POLICY",
    "ActiveBranch",
    "BranchPolicy",
    "ComponentCache",
    "ComponentPartition",
    "branch_node_ids",
    "partition_components",
    "select_active_branch",
    "select_branch_group",
]
