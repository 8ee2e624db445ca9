"""Compact plain-text digest of a comparison."""

from __future__ import annotations

from hash_engine.models.diff import ComparisonResult


def render_summary(result: ComparisonResult) -> str:
    summary = result.summary
    lines = [
        "Hash Comparison Summary",
        "=======================",
        f"Before commit: {result.before_commit}",
        f"After commit:  {result.after_commit}",
        "",
        "Target Changes:",
        f"  Changed:     {summary.total_changed}",
        f"  Added:       {summary.total_added}",
        f"  Removed:     {summary.total_removed}",
        f"  Total Diff:  {result.total_differences}",
        "",
        f"Affected Target Labels ({len(summary.affected_targets)}):",
    ]
    lines.extend(f"  {label}" for label in summary.affected_targets)
    return "\n".join(lines) + "\n"
