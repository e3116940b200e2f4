"""Static talent tree topology types.

A ``TalentTreeTopology`` is the read-only node/edge graph for one
specialization.  Its nodes are always held in ascending node-id order: that
order defines the selection index used by export strings, and the position of
a node in ``nodes`` doubles as its dense index for the graph algorithms.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from talent_diff.errors import TopologyError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

__all__ = [
    "SELECTOR_NODE_TYPE",
    "BranchGroup",
    "TalentEdge",
    "TalentEntry",
    "TalentNode",
    "TalentTreeTopology",
]

# Node type of the hidden hero-tree selector node.
SELECTOR_NODE_TYPE = 3


@dataclass(frozen=True, slots=True)
class TalentEntry:
    """One concrete option within a node (two or more on a choice node)."""

    id: int
    definition_id: int
    spell_id: int
    name: str
    icon_id: int = 0
    max_ranks: int = 1
    entry_index: int = 0


@dataclass(frozen=True, slots=True)
class TalentNode:
    """A choosable point in the tree.

    Attributes:
        id:            Stable node id.
        pos_x, pos_y:  Canvas position.
        node_type:     Raw type tag (``SELECTOR_NODE_TYPE`` for selector nodes).
        max_ranks:     Maximum purchasable ranks.
        entries:       Options, ordered by entry index.
        allowed_specs: Specializations that may use the node; empty means all.
    """

    id: int
    pos_x: int
    pos_y: int
    node_type: int = 0
    max_ranks: int = 1
    entries: tuple[TalentEntry, ...] = ()
    allowed_specs: tuple[int, ...] = ()

    def is_usable_by(self, spec_id: int) -> bool:
        return not self.allowed_specs or spec_id in self.allowed_specs

    @property
    def position(self) -> tuple[int, int]:
        return (self.pos_x, self.pos_y)


@dataclass(frozen=True, slots=True)
class TalentEdge:
    """A prerequisite link between two nodes (undirected for graph purposes)."""

    from_node_id: int
    to_node_id: int
    edge_type: int = 0


@dataclass(frozen=True, slots=True)
class BranchGroup:
    """An explicitly named optional branch ("hero tree")."""

    id: int
    name: str
    node_ids: frozenset[int]


@dataclass(frozen=True, eq=False)
class TalentTreeTopology:
    """Read-only node/edge graph for one specialization.

    Nodes passed in any order are stored sorted by ascending id.  Equality is
    identity: two topologies are only interchangeable if they are the same
    loaded object, which also makes the instance usable as a cache key.

    Raises:
        TopologyError: If two nodes share an id.
    """

    spec_id: int
    nodes: tuple[TalentNode, ...]
    edges: tuple[TalentEdge, ...] = ()
    branch_groups: tuple[BranchGroup, ...] = ()
    spec_name: str | None = None
    class_name: str | None = None
    tree_id: int | None = None
    _index_by_id: Mapping[int, int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        ordered = tuple(sorted(self.nodes, key=lambda node: node.id))
        index_by_id = {node.id: index for index, node in enumerate(ordered)}
        if len(index_by_id) != len(ordered):
            msg = f"Duplicate node ids in topology for spec {self.spec_id}"
            raise TopologyError(msg)
        object.__setattr__(self, "nodes", ordered)
        object.__setattr__(self, "edges", tuple(self.edges))
        object.__setattr__(self, "branch_groups", tuple(self.branch_groups))
        object.__setattr__(self, "_index_by_id", MappingProxyType(index_by_id))

    def __len__(self) -> int:
        return len(self.nodes)

    def node_at(self, index: int) -> TalentNode | None:
        """Return the node a selection index refers to, or None if out of range."""
        if 0 <= index < len(self.nodes):
            return self.nodes[index]
        return None

    def index_of(self, node_id: int) -> int | None:
        """Return the dense index (= selection index) of ``node_id``."""
        return self._index_by_id.get(node_id)

    def node_by_id(self, node_id: int) -> TalentNode | None:
        index = self._index_by_id.get(node_id)
        return None if index is None else self.nodes[index]

    def node_ids(self, indices: Iterable[int]) -> frozenset[int]:
        """Translate dense indices into node ids."""
        return frozenset(self.nodes[index].id for index in indices)
