"""talent_diff - decode, compare and inspect talent export strings."""

from __future__ import annotations

import logging

from talent_diff.api import (
    compare,
    diff,
    parse,
    resolve_overlaps,
    select_active_branch,
    visible_tree,
)
from talent_diff.diff.result import DiffKind, DiffResult
from talent_diff.errors import (
    InvalidCharacterError,
    SpecMismatchError,
    TalentStringError,
    TooShortError,
    TopologyError,
)
from talent_diff.graph.branches import ActiveBranch
from talent_diff.graph.components import ComponentCache
from talent_diff.graph.config import DEFAULT_BRANCH_POLICY, BranchPolicy
from talent_diff.selection import (
    Granted,
    NodeSelection,
    PurchasedFull,
    PurchasedPartial,
    SelectionRecord,
    Unselected,
)
from talent_diff.topology.loader import TopologyIndex, load_topology, topology_from_dict
from talent_diff.topology.nodes import TalentNode, TalentTreeTopology

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__: str = "0.1.0"
__all__: list[str] = [
    "DEFAULT_BRANCH_POLICY",
    "ActiveBranch",
    "BranchPolicy",
    "ComponentCache",
    "DiffKind",
    "DiffResult",
    "Granted",
    "InvalidCharacterError",
    "NodeSelection",
    "PurchasedFull",
    "PurchasedPartial",
    "SelectionRecord",
    "SpecMismatchError",
    "TalentNode",
    "TalentStringError",
    "TalentTreeTopology",
    "TooShortError",
    "TopologyError",
    "TopologyIndex",
    "Unselected",
    "compare",
    "diff",
    "load_topology",
    "parse",
    "resolve_overlaps",
    "select_active_branch",
    "topology_from_dict",
    "visible_tree",
]
