"""Capture a fresh snapshot from an external target-hashing service.

Hash computation itself (build-graph traversal, file hashing, configuration
fingerprinting) happens outside this package.  The hashing service is
reached through the :class:`TargetHasher` protocol, which yields a
``label -> configuration -> hex hash`` mapping for a target pattern.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import TypeAdapter, ValidationError

from hash_engine.errors import MalformedSnapshot, ReadFailure
from hash_engine.models.snapshot import Snapshot, SnapshotMetadata

logger = logging.getLogger(__name__)

_TARGET_HASHES_ADAPTER: TypeAdapter[dict[str, dict[str, str]]] = TypeAdapter(dict[str, dict[str, str]])


@runtime_checkable
class TargetHasher(Protocol):
    """Computes per-target, per-configuration content hashes."""

    bazel_release: str

    def compute(self, targets_pattern: str) -> Mapping[str, Mapping[str, str]]:
        """Return ``label -> configuration checksum -> hex hash`` for *targets_pattern*."""
        ...


class MappingHasher:
    """A :class:`TargetHasher` over hashes that were computed ahead of time."""

    def __init__(self, target_hashes: Mapping[str, Mapping[str, str]], *, bazel_release: str = "") -> None:
        self._target_hashes = {label: dict(configs) for label, configs in target_hashes.items()}
        self.bazel_release = bazel_release

    @classmethod
    def from_file(cls, path: Path, *, bazel_release: str = "") -> MappingHasher:
        """Load precomputed hashes from a JSON file of the ``target_hashes`` shape.

        Raises
        ------
        ReadFailure
            If the file cannot be read.
        MalformedSnapshot
            If the content is not valid UTF-8 or not a
            ``label -> configuration -> hash`` object.
        """
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedSnapshot(
                f"not valid UTF-8: {exc}", operation="load target hashes", path=str(path)
            ) from exc
        except OSError as exc:
            raise ReadFailure(str(exc), operation="load target hashes", path=str(path)) from exc
        try:
            target_hashes = _TARGET_HASHES_ADAPTER.validate_json(text)
        except ValidationError as exc:
            raise MalformedSnapshot(
                f"{exc.error_count()} validation error(s)",
                operation="load target hashes",
                path=str(path),
                errors=[err["msg"] for err in exc.errors()],
            ) from exc
        return cls(target_hashes, bazel_release=bazel_release)

    def compute(self, targets_pattern: str) -> Mapping[str, Mapping[str, str]]:
        return self._target_hashes


def build_snapshot(
    commit_sha: str,
    target_hashes: Mapping[str, Mapping[str, str]],
    *,
    bazel_release: str = "",
    targets_pattern: str = "",
    workspace_path: str = "",
    timestamp: datetime | None = None,
) -> Snapshot:
    """Wrap a computed hash mapping into a :class:`Snapshot`.

    The mapping is copied.  ``metadata.total_targets`` counts
    (label, configuration) pairs, not labels.
    """
    copied = {label: dict(configs) for label, configs in target_hashes.items()}
    return Snapshot(
        git_commit_sha=commit_sha,
        timestamp=timestamp or datetime.now(UTC),
        bazel_release=bazel_release,
        target_hashes=copied,
        metadata=SnapshotMetadata(
            targets_pattern=targets_pattern,
            workspace_path=workspace_path,
            total_targets=sum(len(configs) for configs in copied.values()),
        ),
    )


def capture_snapshot(
    hasher: TargetHasher,
    commit_sha: str,
    *,
    targets_pattern: str = "//...",
    workspace_path: str = "",
) -> Snapshot:
    """Run *hasher* over *targets_pattern* and build a snapshot for *commit_sha*."""
    logger.info("Computing target hashes for %s (%s)", commit_sha, targets_pattern)
    target_hashes = hasher.compute(targets_pattern)
    snapshot = build_snapshot(
        commit_sha,
        target_hashes,
        bazel_release=hasher.bazel_release,
        targets_pattern=targets_pattern,
        workspace_path=workspace_path,
    )
    logger.info(
        "Computed %d hashes across %d targets",
        snapshot.metadata.total_targets,
        len(snapshot.target_hashes),
    )
    return snapshot
