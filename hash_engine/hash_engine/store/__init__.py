"""JSON persistence for target-hash snapshots."""

from hash_engine.store.snapshot_store import (
    deserialize_snapshot,
    load_snapshot,
    load_snapshot_file,
    save_snapshot,
    save_snapshot_file,
    serialize_snapshot,
)

__all__ = [
    "deserialize_snapshot",
    "load_snapshot",
    "load_snapshot_file",
    "save_snapshot",
    "save_snapshot_file",
    "serialize_snapshot",
]
