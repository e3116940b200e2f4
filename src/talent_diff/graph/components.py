"""Connected-component partition of a talent tree topology.

Edges are treated as undirected.  Nodes are addressed by dense index (their
position in ``TalentTreeTopology.nodes``), and each component is a sorted
integer array of those indices.

Components are ordered by their lowest node index, which is the order a
breadth-first sweep that starts from each still-unvisited node in canonical
order would discover them.  Tie-breaking between branch candidates depends on
this order, so it is fixed here rather than left to scipy's labelling.

The partition never changes for a given topology; ``ComponentCache`` keeps
recently used partitions so repeated builds only pay for the counting pass.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from cachetools import LRUCache
from scipy import sparse  # type: ignore[import-untyped]
from scipy.sparse import csgraph  # type: ignore[import-untyped]

if TYPE_CHECKING:
    from talent_diff.topology.nodes import TalentTreeTopology

__all__ = ["ComponentCache", "ComponentPartition", "partition_components"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ComponentPartition:
    """Connected components of one topology.

    Attributes:
        components: Read-only index arrays, one per component, ordered by
                    their smallest index.
        labels:     Read-only array mapping each node index to its position in
                    ``components``.
    """

    components: tuple[np.ndarray, ...]
    labels: np.ndarray

    def __len__(self) -> int:
        return len(self.components)

    @property
    def sizes(self) -> tuple[int, ...]:
        return tuple(len(component) for component in self.components)

    def component_of(self, index: int) -> np.ndarray:
        """Return the component containing node index ``index``."""
        return self.components[int(self.labels[index])]


def _adjacency(topology: TalentTreeTopology) -> sparse.csr_matrix:
    """Build the (directed-storage) CSR adjacency; edges to unknown ids are skipped."""
    size = len(topology.nodes)
    rows: list[int] = []
    cols: list[int] = []
    skipped = 0
    for edge in topology.edges:
        source = topology.index_of(edge.from_node_id)
        target = topology.index_of(edge.to_node_id)
        if source is None or target is None:
            skipped += 1
            continue
        rows.append(source)
        cols.append(target)
    if skipped:
        logger.debug("Ignored %d edges referencing unknown nodes", skipped)
    data = np.ones(len(rows), dtype=np.int8)
    return sparse.coo_matrix((data, (rows, cols)), shape=(size, size)).tocsr()


def partition_components(topology: TalentTreeTopology) -> ComponentPartition:
    """Partition ``topology`` into connected components.

    Args:
        topology: The tree to partition.

    Returns:
        A ``ComponentPartition``; empty for a topology without nodes.
    """
    size = len(topology.nodes)
    if size == 0:
        return ComponentPartition(components=(), labels=np.zeros(0, dtype=np.intp))

    count, raw_labels = csgraph.connected_components(_adjacency(topology), directed=False)

    # Group indices by scipy label (each group ascending), then order groups
    # by their first member.
    order = np.argsort(raw_labels, kind="stable")
    bounds = np.cumsum(np.bincount(raw_labels, minlength=count))[:-1]
    groups = sorted(np.split(order, bounds), key=lambda group: int(group[0]))

    labels = np.empty(size, dtype=np.intp)
    for position, group in enumerate(groups):
        labels[group] = position
        group.flags.writeable = False
    labels.flags.writeable = False

    logger.debug(
        "Partitioned spec %d into %d components (largest %d)",
        topology.spec_id,
        len(groups),
        max(len(group) for group in groups),
    )
    return ComponentPartition(components=tuple(groups), labels=labels)


class ComponentCache:
    """LRU cache of component partitions keyed by topology object.

    Each instance owns its own ``LRUCache``; two caches never share entries.  A lock
    guards lookups and inserts so one cache can serve several threads.

    Args:
        max_size: Maximum number of topologies to remember.  Defaults to 64,
            enough for every specialization at once.
    """

    def __init__(self, max_size: int = 64) -> None:
        self._cache: LRUCache[TalentTreeTopology, ComponentPartition] = LRUCache(
            maxsize=max_size
        )
        self._lock = threading.Lock()

    @property
    def max_size(self) -> int:
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        return int(self._cache.currsize)

    def get(self, topology: TalentTreeTopology) -> ComponentPartition:
        """Return the partition for ``topology``, computing it on first use."""
        with self._lock:
            partition = self._cache.get(topology)
        if partition is not None:
            logger.debug("Component cache hit for spec %d", topology.spec_id)
            return partition

        partition = partition_components(topology)
        with self._lock:
            self._cache[topology] = partition
        return partition
