"""BranchPolicy: size band that marks a connected component as an optional branch.

The band is an empirical observation about current talent trees (optional
branches have 10-25 nodes; the class and spec backbones are far larger), not
part of any data format.  Adjust ``DEFAULT_BRANCH_POLICY`` when tree shapes
change.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["DEFAULT_BRANCH_POLICY", "BranchPolicy"]


@dataclass(frozen=True, slots=True)
class BranchPolicy:
    """Immutable closed size interval for branch candidate components.

    Attributes:
        min_size: Smallest candidate component, inclusive (>= 1).
        max_size: Largest candidate component, inclusive (>= min_size).
    """

    min_size: int = 10
    max_size: int = 25

    def __post_init__(self) -> None:
        if self.min_size < 1:
            msg = f"min_size must be >= 1, got {self.min_size}"
            raise ValueError(msg)
        if self.max_size < self.min_size:
            msg = f"max_size must be >= min_size ({self.min_size}), got {self.max_size}"
            raise ValueError(msg)

    def contains(self, size: int) -> bool:
        return self.min_size <= size <= self.max_size


DEFAULT_BRANCH_POLICY = BranchPolicy()
