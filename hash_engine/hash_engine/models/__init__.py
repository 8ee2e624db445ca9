"""Domain models for the hash engine."""

from hash_engine.models.diff import ComparisonResult, ComparisonSummary, DiffStatus, HashDifference
from hash_engine.models.label import Label, LabelParseError, parse_label
from hash_engine.models.snapshot import Snapshot, SnapshotMetadata

__all__ = [
    "ComparisonResult",
    "ComparisonSummary",
    "DiffStatus",
    "HashDifference",
    "Label",
    "LabelParseError",
    "Snapshot",
    "SnapshotMetadata",
    "parse_label",
]
