"""diff subpackage: comparison of two decoded builds."""

from talent_diff.diff.engine import diff_builds
from talent_diff.diff.result import (
    ChangeDetails,
    ChoiceChange,
    DiffKind,
    DiffResult,
    DiffSummary,
    NodeDiff,
    RankChange,
)

__all__ = [
    "ChangeDetails",
    "ChoiceChange",
    "DiffKind",
    "DiffResult",
    "DiffSummary",
    "NodeDiff",
    "RankChange",
    "diff_builds",
]
