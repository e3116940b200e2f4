"""Selection record types produced by the export-string parser.

Each node of the talent tree decodes into exactly one of four variants:

- ``Unselected``:        the node was not taken.
- ``Granted``:           the node is active but was not purchased (free grant).
- ``PurchasedFull``:     purchased at full rank, optionally a choice node.
- ``PurchasedPartial``:  purchased below full rank, optionally a choice node.

The variants make illegal flag combinations unconstructable (a rank count can
only exist on ``PurchasedPartial``).  The flag view (``is_selected``,
``is_purchased``, ...) mirrors the wire schema: a flag that was never read for
a node is ``None``, not ``False``.  The diff relies on that distinction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

__all__ = [
    "MAX_CHOICE_ENTRY_INDEX",
    "MAX_RANKS_PURCHASED",
    "Granted",
    "NodeSelection",
    "PurchasedFull",
    "PurchasedPartial",
    "SelectionRecord",
    "Unselected",
]

MAX_RANKS_PURCHASED = 63  # 6-bit field
MAX_CHOICE_ENTRY_INDEX = 3  # 2-bit field


def _check_index(index: int) -> None:
    if index < 0:
        msg = f"index must be >= 0, got {index}"
        raise ValueError(msg)


def _check_choice(choice_entry_index: int | None) -> None:
    if choice_entry_index is not None and not (
        0 <= choice_entry_index <= MAX_CHOICE_ENTRY_INDEX
    ):
        msg = (
            f"choice_entry_index must be in [0, {MAX_CHOICE_ENTRY_INDEX}], "
            f"got {choice_entry_index}"
        )
        raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Unselected:
    """A node the player did not take."""

    index: int

    def __post_init__(self) -> None:
        _check_index(self.index)

    @property
    def is_selected(self) -> bool:
        return False

    @property
    def is_purchased(self) -> bool | None:
        return None

    @property
    def is_partially_ranked(self) -> bool | None:
        return None

    @property
    def ranks_purchased(self) -> int | None:
        return None

    @property
    def is_choice_node(self) -> bool | None:
        return None

    @property
    def choice_entry_index(self) -> int | None:
        return None

    def to_dict(self) -> dict[str, Any]:
        return {"nodeIndex": self.index, "isSelected": False}


@dataclass(frozen=True, slots=True)
class Granted:
    """A node that is active without being purchased."""

    index: int

    def __post_init__(self) -> None:
        _check_index(self.index)

    @property
    def is_selected(self) -> bool:
        return True

    @property
    def is_purchased(self) -> bool | None:
        return False

    @property
    def is_partially_ranked(self) -> bool | None:
        return None

    @property
    def ranks_purchased(self) -> int | None:
        return None

    @property
    def is_choice_node(self) -> bool | None:
        return None

    @property
    def choice_entry_index(self) -> int | None:
        return None

    def to_dict(self) -> dict[str, Any]:
        return {"nodeIndex": self.index, "isSelected": True, "isPurchased": False}


@dataclass(frozen=True, slots=True)
class PurchasedFull:
    """A node purchased at full rank.

    Attributes:
        index:              Position of the node in canonical (ascending id) order.
        choice_entry_index: Chosen entry for a choice node; None for plain nodes.
    """

    index: int
    choice_entry_index: int | None = None

    def __post_init__(self) -> None:
        _check_index(self.index)
        _check_choice(self.choice_entry_index)

    @property
    def is_selected(self) -> bool:
        return True

    @property
    def is_purchased(self) -> bool | None:
        return True

    @property
    def is_partially_ranked(self) -> bool | None:
        return False

    @property
    def ranks_purchased(self) -> int | None:
        return None

    @property
    def is_choice_node(self) -> bool | None:
        return self.choice_entry_index is not None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "nodeIndex": self.index,
            "isSelected": True,
            "isPurchased": True,
            "isPartiallyRanked": False,
            "isChoiceNode": self.is_choice_node,
        }
        if self.choice_entry_index is not None:
            data["choiceEntryIndex"] = self.choice_entry_index
        return data


@dataclass(frozen=True, slots=True)
class PurchasedPartial:
    """A node purchased below its maximum rank.

    Attributes:
        index:              Position of the node in canonical (ascending id) order.
        ranks_purchased:    Ranks bought, 0..63 on the wire.  Not checked against
                            the node's ``max_ranks``; the parser has no topology.
        choice_entry_index: Chosen entry for a choice node; None for plain nodes.
    """

    index: int
    ranks_purchased: int
    choice_entry_index: int | None = None

    def __post_init__(self) -> None:
        _check_index(self.index)
        if not 0 <= self.ranks_purchased <= MAX_RANKS_PURCHASED:
            msg = (
                f"ranks_purchased must be in [0, {MAX_RANKS_PURCHASED}], "
                f"got {self.ranks_purchased}"
            )
            raise ValueError(msg)
        _check_choice(self.choice_entry_index)

    @property
    def is_selected(self) -> bool:
        return True

    @property
    def is_purchased(self) -> bool | None:
        return True

    @property
    def is_partially_ranked(self) -> bool | None:
        return True

    @property
    def is_choice_node(self) -> bool | None:
        return self.choice_entry_index is not None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "nodeIndex": self.index,
            "isSelected": True,
            "isPurchased": True,
            "isPartiallyRanked": True,
            "ranksPurchased": self.ranks_purchased,
            "isChoiceNode": self.is_choice_node,
        }
        if self.choice_entry_index is not None:
            data["choiceEntryIndex"] = self.choice_entry_index
        return data


NodeSelection = Unselected | Granted | PurchasedFull | PurchasedPartial


@dataclass(frozen=True, slots=True)
class SelectionRecord:
    """Decoded contents of one export string.

    Attributes:
        version:   Format version from the header.
        spec_id:   Specialization id from the header.
        spec_name: Resolved display name; None when the id is not in the table.
        tree_hash: 128-bit tree fingerprint as 32 lowercase hex characters.
        nodes:     One selection per topology node, index ``i`` matching the
                   ``i``-th node in ascending node-id order.
        raw_bytes: The decoded buffer, kept for debugging.
        truncated: True when the node section ran past the end of the buffer
                   and the trailing bits were read as zero.
    """

    version: int
    spec_id: int
    spec_name: str | None
    tree_hash: str
    nodes: tuple[NodeSelection, ...]
    raw_bytes: bytes = b""
    truncated: bool = False

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def selected_count(self) -> int:
        return sum(1 for node in self.nodes if node.is_selected)

    @property
    def display_name(self) -> str:
        """Spec name, falling back to the numeric id."""
        return self.spec_name if self.spec_name is not None else str(self.spec_id)

    def selected_indices(self) -> frozenset[int]:
        """Return the indices of all selected nodes."""
        return frozenset(node.index for node in self.nodes if node.is_selected)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "version": self.version,
            "specId": self.spec_id,
            "treeHash": self.tree_hash,
            "nodes": [node.to_dict() for node in self.nodes],
            "rawBytes": list(self.raw_bytes),
        }
        if self.spec_name is not None:
            data["specName"] = self.spec_name
        return data
