"""Newline-separated list of affected target labels.

The output is compatible with target-selection tooling that reads one label
per line.  Labels whose target no longer exists after the change are left
out unless explicitly requested, since there is nothing left to build or
test for them.
"""

from __future__ import annotations

from hash_engine.errors import IncompleteComparison
from hash_engine.models.diff import ComparisonResult
from hash_engine.models.snapshot import Snapshot


def select_labels(
    result: ComparisonResult,
    *,
    include_removed: bool = False,
    after: Snapshot | None = None,
) -> list[str]:
    """Return the affected labels to emit, in ascending order.

    A label is kept when it still has at least one configuration in the
    after snapshot, or when *include_removed* is set.  Survival is read from
    *after* when given, otherwise from ``result.summary.surviving_targets``.

    Raises
    ------
    IncompleteComparison
        If removed labels must be excluded but neither *after* nor the
        result records which labels survive (e.g. a result loaded from its
        JSON export).
    """
    affected = result.summary.affected_targets
    if include_removed:
        return list(affected)
    if after is not None:
        return [label for label in affected if after.has_configurations(label)]
    if result.summary.surviving_targets is None:
        raise IncompleteComparison(
            "comparison does not record which targets still exist; "
            "pass the after snapshot or include removed targets",
            operation="render label list",
        )
    surviving = set(result.summary.surviving_targets)
    return [label for label in affected if label in surviving]


def render_label_list(
    result: ComparisonResult,
    *,
    include_removed: bool = False,
    after: Snapshot | None = None,
) -> str:
    """Render the selected labels one per line, with a trailing newline."""
    labels = select_labels(result, include_removed=include_removed, after=after)
    return "".join(f"{label}\n" for label in labels)
