"""Tests for partition_components and ComponentCache.

Covers:
- Undirected connectivity regardless of edge direction
- Component ordering by lowest node index
- Edges referencing unknown node ids
- Isolated nodes and empty topologies
- LRU caching per topology object
- Concurrent use of one small cache from several threads
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Callable

import numpy as np

from talent_diff.graph.components import ComponentCache, partition_components
from talent_diff.topology.nodes import TalentEdge, TalentNode, TalentTreeTopology


def _node(node_id: int) -> TalentNode:
    return TalentNode(id=node_id, pos_x=0, pos_y=0)


class TestPartition:
    def test_sizes(self, hero_topology: TalentTreeTopology) -> None:
        partition = partition_components(hero_topology)
        assert partition.sizes == (40, 15, 12)

    def test_components_ordered_by_lowest_index(
        self, hero_topology: TalentTreeTopology
    ) -> None:
        partition = partition_components(hero_topology)
        firsts = [int(component[0]) for component in partition.components]
        assert firsts == [0, 40, 55]

    def test_components_hold_sorted_dense_indices(
        self, hero_topology: TalentTreeTopology
    ) -> None:
        partition = partition_components(hero_topology)
        np.testing.assert_array_equal(partition.components[2], np.arange(55, 67))

    def test_edge_direction_is_ignored(self) -> None:
        topology = TalentTreeTopology(
            spec_id=1,
            nodes=(_node(1), _node(2), _node(3)),
            edges=(TalentEdge(2, 1), TalentEdge(2, 3)),
        )
        assert partition_components(topology).sizes == (3,)

    def test_input_order_does_not_matter(self) -> None:
        topology = TalentTreeTopology(
            spec_id=1,
            nodes=(_node(30), _node(10), _node(20)),
            edges=(TalentEdge(30, 10),),
        )
        partition = partition_components(topology)
        # ids 10, 20, 30 -> indices 0, 1, 2; {10, 30} first, then {20}
        assert partition.sizes == (2, 1)
        assert topology.node_ids(partition.components[0].tolist()) == {10, 30}

    def test_unknown_edge_endpoints_ignored(self) -> None:
        topology = TalentTreeTopology(
            spec_id=1,
            nodes=(_node(1), _node(2)),
            edges=(TalentEdge(1, 999), TalentEdge(999, 2)),
        )
        assert partition_components(topology).sizes == (1, 1)

    def test_isolated_nodes_are_singletons(self) -> None:
        topology = TalentTreeTopology(spec_id=1, nodes=(_node(1), _node(2), _node(3)))
        assert partition_components(topology).sizes == (1, 1, 1)

    def test_empty_topology(self) -> None:
        partition = partition_components(TalentTreeTopology(spec_id=1, nodes=()))
        assert len(partition) == 0
        assert partition.sizes == ()

    def test_component_of(self, hero_topology: TalentTreeTopology) -> None:
        partition = partition_components(hero_topology)
        assert len(partition.component_of(60)) == 12

    def test_arrays_are_read_only(self, hero_topology: TalentTreeTopology) -> None:
        partition = partition_components(hero_topology)
        assert not partition.labels.flags.writeable
        assert not partition.components[0].flags.writeable


class TestComponentCache:
    def test_returns_same_partition(self, hero_topology: TalentTreeTopology) -> None:
        cache = ComponentCache()
        first = cache.get(hero_topology)
        assert cache.get(hero_topology) is first
        assert cache.curr_size == 1

    def test_keys_by_topology_object(
        self,
        make_chain: Callable[..., tuple[list[TalentNode], list[TalentEdge]]],
        make_topology: Callable[..., TalentTreeTopology],
    ) -> None:
        cache = ComponentCache()
        one = make_topology(make_chain(1, 5))
        two = make_topology(make_chain(1, 5))
        cache.get(one)
        cache.get(two)
        assert cache.curr_size == 2

    def test_evicts_least_recently_used(
        self,
        make_chain: Callable[..., tuple[list[TalentNode], list[TalentEdge]]],
        make_topology: Callable[..., TalentTreeTopology],
    ) -> None:
        cache = ComponentCache(max_size=1)
        cache.get(make_topology(make_chain(1, 3)))
        cache.get(make_topology(make_chain(1, 4)))
        assert cache.max_size == 1
        assert cache.curr_size == 1

    def test_concurrent_gets_share_small_cache(
        self,
        make_chain: Callable[..., tuple[list[TalentNode], list[TalentEdge]]],
        make_topology: Callable[..., TalentTreeTopology],
    ) -> None:
        cache = ComponentCache(max_size=2)
        topologies = [make_topology(make_chain(1, size)) for size in range(3, 11)]
        errors: list[BaseException] = []
        start = threading.Barrier(8)

        def worker(offset: int) -> None:
            start.wait()
            try:
                for step in range(400):
                    topology = topologies[(offset + step) % len(topologies)]
                    partition = cache.get(topology)
                    assert partition.sizes == (len(topology.nodes),)
            except BaseException as exc:  # noqa: BLE001
                errors.append(exc)

        interval = sys.getswitchinterval()
        sys.setswitchinterval(1e-6)
        try:
            threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join()
        finally:
            sys.setswitchinterval(interval)

        assert errors == []
        assert cache.curr_size <= 2
