"""topology subpackage: read-only static talent tree data."""

from talent_diff.topology.loader import TopologyIndex, load_topology, topology_from_dict
from talent_diff.topology.nodes import (
    SELECTOR_NODE_TYPE,
    BranchGroup,
    TalentEdge,
    TalentEntry,
    TalentNode,
    TalentTreeTopology,
)

__all__ = [
    "SELECTOR_NODE_TYPE",
    "BranchGroup",
    "TalentEdge",
    "TalentEntry",
    "TalentNode",
    "TalentTreeTopology",
    "TopologyIndex",
    "load_topology",
    "topology_from_dict",
]
