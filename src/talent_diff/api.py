"""Public API functions for talent_diff.

Each function is a pure call over immutable inputs: no module-level mutable
state is read or written.  Pass a ``ComponentCache`` to the branch functions
to reuse a topology's component partition across builds.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from talent_diff.codec.parser import parse_talent_string
from talent_diff.diff.engine import diff_builds
from talent_diff.graph.branches import select_active_branch as _select_active_branch
from talent_diff.graph.config import DEFAULT_BRANCH_POLICY, BranchPolicy
from talent_diff.overlap import resolve_overlaps
from talent_diff.view import VisibleTree
from talent_diff.view import visible_tree as _visible_tree

if TYPE_CHECKING:
    from talent_diff.diff.result import DiffResult
    from talent_diff.graph.branches import ActiveBranch
    from talent_diff.graph.components import ComponentCache
    from talent_diff.selection import SelectionRecord
    from talent_diff.topology.nodes import TalentTreeTopology

__all__ = ["compare", "diff", "parse", "resolve_overlaps", "select_active_branch", "visible_tree"]


def parse(export_string: str) -> SelectionRecord:
    """Decode an export string.

    Raises:
        InvalidCharacterError: On a symbol outside ``A-Za-z0-9+/``.
        TooShortError:         When the header cannot be read.
    """
    return parse_talent_string(export_string)


def diff(build_a: SelectionRecord, build_b: SelectionRecord) -> DiffResult:
    """Diff two decoded builds; ``build_a`` is the baseline.

    Raises:
        SpecMismatchError: When the builds are for different specializations.
    """
    return diff_builds(build_a, build_b)


def compare(export_a: str, export_b: str) -> DiffResult:
    """Parse two export strings and diff them."""
    return diff_builds(parse_talent_string(export_a), parse_talent_string(export_b))


def select_active_branch(
    topology: TalentTreeTopology,
    record: SelectionRecord,
    policy: BranchPolicy = DEFAULT_BRANCH_POLICY,
    cache: ComponentCache | None = None,
) -> ActiveBranch | None:
    """Infer the optional branch a build activates; None when there is none."""
    return _select_active_branch(topology, record, policy=policy, cache=cache)


def visible_tree(
    topology: TalentTreeTopology,
    record: SelectionRecord,
    policy: BranchPolicy = DEFAULT_BRANCH_POLICY,
    cache: ComponentCache | None = None,
) -> VisibleTree:
    """Return the nodes and edges a tree view should draw for a build."""
    return _visible_tree(topology, record, policy=policy, cache=cache)
