"""Builders for ``TalentTreeTopology`` from the static JSON data files.

The JSON shape is the one produced by the offline data export::

    {
      "specId": 254, "specName": "Marksmanship", "className": "Hunter",
      "treeId": 781,
      "nodes": [{"id": 1, "posX": 0, "posY": 0, "type": 0, "maxRanks": 1,
                 "entries": [{"id": 10, "definitionId": 11, "spellId": 12,
                              "name": "...", "maxRanks": 1, "entryIndex": 0}],
                 "allowedSpecs": [254]}],
      "edges": [{"fromNodeId": 1, "toNodeId": 2, "type": 0}],
      "heroTrees": [{"id": 1, "name": "...", "nodeIds": [1, 2]}]
    }

``allowedSpecs``, ``heroTrees``, ``iconId`` and ``entryIndex`` are optional.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from talent_diff.errors import TopologyError
from talent_diff.topology.nodes import (
    BranchGroup,
    TalentEdge,
    TalentEntry,
    TalentNode,
    TalentTreeTopology,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

__all__ = ["TopologyIndex", "load_topology", "topology_from_dict"]

logger = logging.getLogger(__name__)


def _require(data: dict[str, Any], key: str, context: str) -> Any:
    try:
        return data[key]
    except KeyError:
        msg = f"Missing required field {key!r} in {context}"
        raise TopologyError(msg) from None


def _entry_from_dict(data: dict[str, Any]) -> TalentEntry:
    return TalentEntry(
        id=int(_require(data, "id", "entry")),
        definition_id=int(data.get("definitionId", 0)),
        spell_id=int(data.get("spellId", 0)),
        name=str(data.get("name", "")),
        icon_id=int(data.get("iconId", 0)),
        max_ranks=int(data.get("maxRanks", 1)),
        entry_index=int(data.get("entryIndex", 0)),
    )


def _node_from_dict(data: dict[str, Any]) -> TalentNode:
    node_id = int(_require(data, "id", "node"))
    context = f"node {node_id}"
    entries = sorted(
        (_entry_from_dict(entry) for entry in data.get("entries", [])),
        key=lambda entry: entry.entry_index,
    )
    return TalentNode(
        id=node_id,
        pos_x=int(_require(data, "posX", context)),
        pos_y=int(_require(data, "posY", context)),
        node_type=int(data.get("type", 0)),
        max_ranks=int(data.get("maxRanks", 1)),
        entries=tuple(entries),
        allowed_specs=tuple(int(spec) for spec in data.get("allowedSpecs") or ()),
    )


def _edge_from_dict(data: dict[str, Any]) -> TalentEdge:
    return TalentEdge(
        from_node_id=int(_require(data, "fromNodeId", "edge")),
        to_node_id=int(_require(data, "toNodeId", "edge")),
        edge_type=int(data.get("type", 0)),
    )


def _group_from_dict(data: dict[str, Any]) -> BranchGroup:
    return BranchGroup(
        id=int(_require(data, "id", "hero tree")),
        name=str(data.get("name", "")),
        node_ids=frozenset(int(node_id) for node_id in data.get("nodeIds", ())),
    )


def topology_from_dict(data: dict[str, Any]) -> TalentTreeTopology:
    """Build a topology from a decoded spec data file.

    Raises:
        TopologyError: If a required field is missing or node ids repeat.
    """
    topology = TalentTreeTopology(
        spec_id=int(_require(data, "specId", "spec data")),
        spec_name=data.get("specName"),
        class_name=data.get("className"),
        tree_id=data.get("treeId"),
        nodes=tuple(_node_from_dict(node) for node in _require(data, "nodes", "spec data")),
        edges=tuple(_edge_from_dict(edge) for edge in data.get("edges", ())),
        branch_groups=tuple(_group_from_dict(group) for group in data.get("heroTrees") or ()),
    )
    logger.debug(
        "Loaded topology for spec %d: %d nodes, %d edges, %d branch groups",
        topology.spec_id,
        len(topology.nodes),
        len(topology.edges),
        len(topology.branch_groups),
    )
    return topology


def load_topology(path: str | Path) -> TalentTreeTopology:
    """Read one spec data JSON file from disk."""
    with Path(path).open(encoding="utf-8") as handle:
        return topology_from_dict(json.load(handle))


class TopologyIndex:
    """Read-only registry of topologies keyed by specialization id.

    Example::

        index = TopologyIndex(load_topology(p) for p in Path("specs").glob("*.json"))
        topology = index.get(254)
    """

    def __init__(self, topologies: Iterable[TalentTreeTopology]) -> None:
        by_spec: dict[int, TalentTreeTopology] = {}
        for topology in topologies:
            if topology.spec_id in by_spec:
                msg = f"Duplicate topology for spec {topology.spec_id}"
                raise TopologyError(msg)
            by_spec[topology.spec_id] = topology
        self._by_spec = MappingProxyType(by_spec)

    @classmethod
    def from_directory(cls, directory: str | Path) -> TopologyIndex:
        """Load every ``<spec id>.json`` file in ``directory``."""
        paths = sorted(p for p in Path(directory).glob("*.json") if p.stem.isdigit())
        return cls(load_topology(path) for path in paths)

    def __contains__(self, spec_id: object) -> bool:
        return spec_id in self._by_spec

    def __iter__(self) -> Iterator[TalentTreeTopology]:
        return iter(self._by_spec.values())

    def __len__(self) -> int:
        return len(self._by_spec)

    @property
    def spec_ids(self) -> tuple[int, ...]:
        return tuple(sorted(self._by_spec))

    def get(self, spec_id: int) -> TalentTreeTopology:
        """Return the topology for ``spec_id``.

        Raises:
            KeyError: If no topology was loaded for the id.
        """
        return self._by_spec[spec_id]
