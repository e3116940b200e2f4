"""Shared builders for talent_diff tests.

Export strings are assembled bit by bit so tests can state exactly which
selection each node carries.  Topologies are built from chains of
consecutive node ids so component sizes are obvious at the call site.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

import pytest

from talent_diff.codec.bitstream import ALPHABET
from talent_diff.selection import (
    Granted,
    NodeSelection,
    PurchasedFull,
    PurchasedPartial,
    SelectionRecord,
    Unselected,
)
from talent_diff.topology.nodes import TalentEdge, TalentNode, TalentTreeTopology

MARKSMANSHIP_EXPORT = (
    "C4PAAAAAAAAAAAAAAAAAAAAAAwCMwwohBwMYDAAAAAAAAYGzMzYbGzYMDGTzYMzYZbzMzMMzMMzsMGzywMDAAgxYAwoNwAsN"
)


# ---------------------------------------------------------------------------
# Bit-level encoding
# ---------------------------------------------------------------------------


def _write(bits: list[int], value: int, width: int) -> None:
    bits.extend((value >> i) & 1 for i in range(width))


def _write_node(bits: list[int], node: NodeSelection) -> None:
    bits.append(1 if node.is_selected else 0)
    if isinstance(node, Unselected):
        return
    bits.append(0 if isinstance(node, Granted) else 1)
    if isinstance(node, Granted):
        return
    if isinstance(node, PurchasedPartial):
        bits.append(1)
        _write(bits, node.ranks_purchased, 6)
    else:
        bits.append(0)
    if node.choice_entry_index is None:
        bits.append(0)
    else:
        bits.append(1)
        _write(bits, node.choice_entry_index, 2)


def bits_to_export(bits: Sequence[int]) -> str:
    """Pack bits (first = least significant) into alphabet symbols.

    Bits are zero-padded to a multiple of 24 so every bit survives decoding.
    """
    padded = list(bits) + [0] * (-len(bits) % 24)
    symbols = []
    for start in range(0, len(padded), 6):
        value = sum(bit << i for i, bit in enumerate(padded[start : start + 6]))
        symbols.append(ALPHABET[value])
    return "".join(symbols)


def header_bits(spec_id: int, version: int = 2, tree_hash: bytes = bytes(range(16))) -> list[int]:
    bits: list[int] = []
    _write(bits, version, 8)
    _write(bits, spec_id, 16)
    for byte in tree_hash:
        _write(bits, byte, 8)
    return bits


def encode_build(
    spec_id: int,
    nodes: Sequence[NodeSelection],
    version: int = 2,
    tree_hash: bytes = bytes(range(16)),
) -> str:
    bits = header_bits(spec_id, version=version, tree_hash=tree_hash)
    for node in nodes:
        _write_node(bits, node)
    return bits_to_export(bits)


# ---------------------------------------------------------------------------
# Records and topologies
# ---------------------------------------------------------------------------


def make_record(
    nodes: Sequence[NodeSelection],
    spec_id: int = 254,
    spec_name: str | None = "Marksmanship Hunter",
) -> SelectionRecord:
    return SelectionRecord(
        version=2,
        spec_id=spec_id,
        spec_name=spec_name,
        tree_hash="0" * 32,
        nodes=tuple(nodes),
    )


def select_indices(count: int, selected: set[int]) -> list[NodeSelection]:
    """``count`` nodes, full-rank purchased at ``selected`` and unselected elsewhere."""
    return [PurchasedFull(i) if i in selected else Unselected(i) for i in range(count)]


def chain(
    first_id: int,
    size: int,
    pos_x: int = 0,
    node_type: int = 0,
    allowed_specs: tuple[int, ...] = (),
) -> tuple[list[TalentNode], list[TalentEdge]]:
    """A path of ``size`` nodes with consecutive ids starting at ``first_id``."""
    nodes = [
        TalentNode(
            id=first_id + i,
            pos_x=pos_x,
            pos_y=i * 100,
            node_type=node_type,
            allowed_specs=allowed_specs,
        )
        for i in range(size)
    ]
    edges = [TalentEdge(first_id + i, first_id + i + 1) for i in range(size - 1)]
    return nodes, edges


def build_topology(
    *parts: tuple[list[TalentNode], list[TalentEdge]],
    spec_id: int = 254,
    spec_name: str | None = "Marksmanship",
) -> TalentTreeTopology:
    nodes = [node for part_nodes, _ in parts for node in part_nodes]
    edges = [edge for _, part_edges in parts for edge in part_edges]
    return TalentTreeTopology(spec_id=spec_id, spec_name=spec_name, nodes=tuple(nodes), edges=tuple(edges))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def marksmanship_export() -> str:
    return MARKSMANSHIP_EXPORT


@pytest.fixture
def encode() -> Callable[..., str]:
    """Factory: ``encode(spec_id, nodes)`` -> export string."""
    return encode_build


@pytest.fixture
def raw_export() -> Callable[[Sequence[int]], str]:
    """Factory: pack a raw bit list into an export string."""
    return bits_to_export


@pytest.fixture
def header() -> Callable[..., list[int]]:
    return header_bits


@pytest.fixture
def record() -> Callable[..., SelectionRecord]:
    """Factory: ``record(nodes, spec_id=254, spec_name=...)``."""
    return make_record


@pytest.fixture
def selection() -> Callable[[int, set[int]], list[NodeSelection]]:
    return select_indices


@pytest.fixture
def hero_topology() -> TalentTreeTopology:
    """Backbone of 40 nodes (ids 1-40), branches of 15 (101-115) and 12 (201-212).

    Selection indices: backbone 0-39, 15-node branch 40-54, 12-node branch 55-66.
    """
    return build_topology(
        chain(1, 40),
        chain(101, 15, pos_x=5000),
        chain(201, 12, pos_x=5000),
    )


@pytest.fixture
def make_chain() -> Callable[..., tuple[list[TalentNode], list[TalentEdge]]]:
    """Factory: ``make_chain(first_id, size, pos_x=0, ...)``."""
    return chain


@pytest.fixture
def make_topology() -> Callable[..., TalentTreeTopology]:
    """Factory: ``make_topology(*chains, spec_id=254)``."""
    return build_topology
