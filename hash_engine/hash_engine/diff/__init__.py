"""Deterministic diff engine for target-hash snapshots."""

from hash_engine.diff.hash_diff import affected_labels, compare_snapshots, diff_target_hashes, summarise

__all__ = [
    "affected_labels",
    "compare_snapshots",
    "diff_target_hashes",
    "summarise",
]
