"""Export-string parser: header plus per-node selection bitfields.

Wire layout (all fields little-endian, least significant bit first)::

    version              8 bits
    spec id             16 bits
    tree fingerprint   128 bits  (16 x 8-bit reads, rendered as hex in order)
    per node, ascending node id, no count prefix, no separators:
        is_selected           1 bit
        if selected:
            is_purchased      1 bit
            if purchased:
                is_partially_ranked   1 bit
                if partial:   ranks_purchased   6 bits
                is_choice_node        1 bit
                if choice:    choice_entry_index 2 bits

The node section ends when the buffer does.  A node whose bits run past the
end decodes from zero-filled bits, which is indistinguishable from an
unselected node; ``SelectionRecord.truncated`` records that it happened.
"""

from __future__ import annotations

import logging

from talent_diff.codec.bitstream import BitCursor, decode_alphabet_string
from talent_diff.codec.specs import spec_name
from talent_diff.errors import TooShortError
from talent_diff.selection import (
    Granted,
    NodeSelection,
    PurchasedFull,
    PurchasedPartial,
    SelectionRecord,
    Unselected,
)

__all__ = ["HEADER_BYTES", "hex_dump", "parse_talent_string"]

logger = logging.getLogger(__name__)

HEADER_BYTES = 19  # 152 header bits
VERSION_BITS = 8
SPEC_ID_BITS = 16
TREE_HASH_BYTES = 16
RANKS_BITS = 6
CHOICE_BITS = 2


def parse_talent_string(text: str) -> SelectionRecord:
    """Decode an export string into a ``SelectionRecord``.

    Args:
        text: The export string.  Surrounding and embedded whitespace is ignored.

    Returns:
        The decoded record.  Node ``i`` in the record corresponds to the
        ``i``-th topology node in ascending node-id order.

    Raises:
        InvalidCharacterError: If the string contains a symbol outside the alphabet.
        TooShortError:         If fewer than 19 bytes decode from the string.
    """
    data = decode_alphabet_string(text.strip())
    if len(data) < HEADER_BYTES:
        raise TooShortError(len(data), HEADER_BYTES)

    cursor = BitCursor(data)

    version = cursor.read_bits(VERSION_BITS)
    spec_id = cursor.read_bits(SPEC_ID_BITS)
    tree_hash = "".join(f"{cursor.read_bits(8):02x}" for _ in range(TREE_HASH_BYTES))

    nodes: list[NodeSelection] = []
    while cursor.bits_remaining >= 1:
        nodes.append(_read_node(cursor, len(nodes)))

    if cursor.underrun:
        logger.warning(
            "Talent string for spec %d ended mid-node; %d missing bits read as zero",
            spec_id,
            cursor.underrun_bits,
        )

    record = SelectionRecord(
        version=version,
        spec_id=spec_id,
        spec_name=spec_name(spec_id),
        tree_hash=tree_hash,
        nodes=tuple(nodes),
        raw_bytes=data,
        truncated=cursor.underrun,
    )
    logger.debug(
        "Parsed talent string v%d spec=%d: %d nodes, %d selected",
        version,
        spec_id,
        record.node_count,
        record.selected_count,
    )
    return record


def _read_node(cursor: BitCursor, index: int) -> NodeSelection:
    """Read one node's variable-length bitfield."""
    if not cursor.read_bit():
        return Unselected(index)
    if not cursor.read_bit():
        return Granted(index)

    ranks: int | None = None
    if cursor.read_bit():
        ranks = cursor.read_bits(RANKS_BITS)

    choice: int | None = None
    if cursor.read_bit():
        choice = cursor.read_bits(CHOICE_BITS)

    if ranks is None:
        return PurchasedFull(index, choice_entry_index=choice)
    return PurchasedPartial(index, ranks_purchased=ranks, choice_entry_index=choice)


def hex_dump(data: bytes) -> str:
    """Render a byte buffer as space-separated two-digit hex."""
    return " ".join(f"{byte:02x}" for byte in data)
