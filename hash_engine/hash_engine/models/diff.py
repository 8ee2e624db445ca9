"""Diff models for comparing two target-hash snapshots.

These models represent the output of reconciling a *before* snapshot with
an *after* snapshot at (target label, configuration) granularity.  The
field names match the persisted comparison format so that
``model_dump(mode="json", exclude_none=True)`` is the export.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from hash_engine.models.label import Label, parse_label


class DiffStatus(str, Enum):
    """Classification of a single (label, configuration) difference."""

    ADDED = "added"
    REMOVED = "removed"
    CHANGED = "changed"


class HashDifference(BaseModel):
    """One atomic finding of a comparison."""

    model_config = ConfigDict(frozen=True)

    label: str = Field(..., description="Target label.")
    configuration: str = Field(..., description="Configuration checksum.")
    status: DiffStatus
    before_hash: str | None = Field(
        default=None,
        description="Hash in the before snapshot (absent for added pairs).",
    )
    after_hash: str | None = Field(
        default=None,
        description="Hash in the after snapshot (absent for removed pairs).",
    )

    @model_validator(mode="after")
    def _check_hashes_match_status(self) -> HashDifference:
        if self.status is DiffStatus.ADDED:
            if self.before_hash is not None or self.after_hash is None:
                raise ValueError("added difference needs after_hash only")
        elif self.status is DiffStatus.REMOVED:
            if self.before_hash is None or self.after_hash is not None:
                raise ValueError("removed difference needs before_hash only")
        elif self.before_hash is None or self.after_hash is None:
            raise ValueError("changed difference needs both hashes")
        elif self.before_hash == self.after_hash:
            raise ValueError("changed difference needs unequal hashes")
        return self


class ComparisonSummary(BaseModel):
    """Aggregate statistics derived from the list of differences."""

    model_config = ConfigDict(frozen=True)

    total_changed: int = Field(default=0, ge=0)
    total_added: int = Field(default=0, ge=0)
    total_removed: int = Field(default=0, ge=0)
    affected_targets: list[str] = Field(
        default_factory=list,
        description="Sorted, de-duplicated labels appearing in any difference.",
    )
    surviving_targets: list[str] | None = Field(
        default=None,
        exclude=True,
        description=(
            "Affected labels that still have at least one configuration in the "
            "after snapshot, or None when unknown.  Not part of the export format."
        ),
    )


class ComparisonResult(BaseModel):
    """Result of comparing a before snapshot with an after snapshot."""

    model_config = ConfigDict(frozen=True)

    before_commit: str
    after_commit: str
    differences: list[HashDifference] = Field(default_factory=list)
    summary: ComparisonSummary = Field(default_factory=ComparisonSummary)

    @property
    def total_differences(self) -> int:
        return len(self.differences)

    def affected_target_labels(self) -> list[Label]:
        """Parse each distinct label in ``differences``, in first-seen order.

        Raises
        ------
        LabelParseError
            If any difference carries a label that is not well-formed.
        """
        seen: set[str] = set()
        labels: list[Label] = []
        for diff in self.differences:
            if diff.label in seen:
                continue
            seen.add(diff.label)
            labels.append(parse_label(diff.label))
        return labels
