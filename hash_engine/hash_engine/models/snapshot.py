"""Snapshot models for capturing point-in-time target hashes.

A snapshot records the content hash of every (target label, configuration)
pair computed for one source revision, enabling later comparison without
recomputing anything.  ``timestamp``, ``bazel_release`` and ``metadata`` are
stored for persistence and auditability but are **not** used by the diff
engine.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field


class SnapshotMetadata(BaseModel):
    """Provenance of a hash computation.  Descriptive only."""

    model_config = ConfigDict(frozen=True)

    targets_pattern: str = Field(
        default="",
        description="Target pattern the hashes were computed for, e.g. '//...'.",
    )
    workspace_path: str = Field(
        default="",
        description="Absolute path of the workspace the hashes were computed in.",
    )
    total_targets: int = Field(
        default=0,
        ge=0,
        description="Number of (label, configuration) pairs that were hashed.",
    )


class Snapshot(BaseModel):
    """Hashes of every target, per configuration, for a single revision.

    ``target_hashes`` is keyed by target label, then by configuration
    checksum, for O(1) lookup during diff operations.  It is a required
    field: a payload that omits it is malformed rather than empty.

    A label that is absent has not been computed.  A label mapped to an
    empty dict is legal and means zero configurations were built.
    """

    model_config = ConfigDict(frozen=True)

    git_commit_sha: str = Field(
        ...,
        description="Source-control revision the hashes correspond to.",
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When the hashes were computed (informational only).",
    )
    bazel_release: str = Field(
        default="",
        description="Build tool release used to compute the hashes (informational only).",
    )
    target_hashes: dict[str, dict[str, str]] = Field(
        ...,
        description="Hex content hashes keyed by target label, then configuration checksum.",
    )
    metadata: SnapshotMetadata = Field(
        default_factory=SnapshotMetadata,
        description="Provenance of the computation.",
    )

    def labels(self) -> list[str]:
        """Return every computed target label, sorted."""
        return sorted(self.target_hashes)

    def configurations_for(self, label: str) -> dict[str, str]:
        """Return the configuration -> hash map for *label* (empty if absent)."""
        return dict(self.target_hashes.get(label, {}))

    def has_configurations(self, label: str) -> bool:
        """True when *label* is present with at least one configuration."""
        return bool(self.target_hashes.get(label))

    def pair_count(self) -> int:
        """Number of (label, configuration) pairs in this snapshot."""
        return sum(len(configs) for configs in self.target_hashes.values())
