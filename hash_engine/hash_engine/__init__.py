"""Hash engine: compare persisted target-hash snapshots between revisions."""

from hash_engine.diff import compare_snapshots
from hash_engine.errors import (
    HashDifferError,
    IncompleteComparison,
    MalformedSnapshot,
    ReadFailure,
    UnsupportedOutputForm,
    WriteFailure,
)
from hash_engine.models import ComparisonResult, DiffStatus, HashDifference, Snapshot, SnapshotMetadata
from hash_engine.store import load_snapshot_file, save_snapshot_file

__version__ = "0.1.0"

__all__ = [
    "ComparisonResult",
    "DiffStatus",
    "HashDifference",
    "HashDifferError",
    "IncompleteComparison",
    "MalformedSnapshot",
    "ReadFailure",
    "Snapshot",
    "SnapshotMetadata",
    "UnsupportedOutputForm",
    "WriteFailure",
    "compare_snapshots",
    "load_snapshot_file",
    "save_snapshot_file",
]
