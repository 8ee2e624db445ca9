"""Diff engine for comparing target-hash snapshots.

Reconciles a *before* and an *after* :class:`Snapshot` at the granularity of
(target label, configuration) and produces a :class:`ComparisonResult`.  Only
hash equality is checked; nothing is recomputed and neither input is
mutated.

The comparison runs three mutually exclusive passes over explicit keys:

1. every label of the before snapshot (removed or changed configurations,
   or the whole label removed);
2. configurations added to labels present in both snapshots;
3. labels present only in the after snapshot.

Labels and configurations are visited in sorted order so that identical
inputs always yield the same ``differences`` sequence and byte-identical
JSON.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from hash_engine.models.diff import (
    ComparisonResult,
    ComparisonSummary,
    DiffStatus,
    HashDifference,
)
from hash_engine.models.snapshot import Snapshot


def _removed(label: str, config: str, before_hash: str) -> HashDifference:
    return HashDifference(
        label=label,
        configuration=config,
        status=DiffStatus.REMOVED,
        before_hash=before_hash,
    )


def _added(label: str, config: str, after_hash: str) -> HashDifference:
    return HashDifference(
        label=label,
        configuration=config,
        status=DiffStatus.ADDED,
        after_hash=after_hash,
    )


def diff_target_hashes(
    before: Mapping[str, Mapping[str, str]],
    after: Mapping[str, Mapping[str, str]],
) -> list[HashDifference]:
    """Compare two ``label -> configuration -> hash`` mappings.

    Parameters
    ----------
    before:
        Hashes of the *before* revision.
    after:
        Hashes of the *after* revision.

    Returns
    -------
    list[HashDifference]
        One record per (label, configuration) pair whose hash differs or
        exists on one side only.  Pairs with equal hashes produce nothing.
    """
    differences: list[HashDifference] = []

    # Pass 1: removed and changed, over every before-label.
    for label in sorted(before):
        before_configs = before[label]
        after_configs = after.get(label)
        if after_configs is None:
            differences.extend(_removed(label, config, before_configs[config]) for config in sorted(before_configs))
            continue

        for config in sorted(before_configs):
            before_hash = before_configs[config]
            after_hash = after_configs.get(config)
            if after_hash is None:
                differences.append(_removed(label, config, before_hash))
            elif after_hash != before_hash:
                differences.append(
                    HashDifference(
                        label=label,
                        configuration=config,
                        status=DiffStatus.CHANGED,
                        before_hash=before_hash,
                        after_hash=after_hash,
                    )
                )

        # Pass 2: configurations added to a label that already existed.
        differences.extend(
            _added(label, config, after_configs[config])
            for config in sorted(after_configs)
            if config not in before_configs
        )

    # Pass 3: labels that only exist after.
    for label in sorted(after):
        if label in before:
            continue
        after_configs = after[label]
        differences.extend(_added(label, config, after_configs[config]) for config in sorted(after_configs))

    return differences


def affected_labels(differences: Iterable[HashDifference]) -> list[str]:
    """Return the distinct labels appearing in *differences*, sorted ascending."""
    return sorted({diff.label for diff in differences})


def summarise(
    differences: list[HashDifference],
    after: Snapshot | None = None,
) -> ComparisonSummary:
    """Tally *differences* by status and collect the affected labels.

    When *after* is given, ``surviving_targets`` lists the affected labels
    that still have at least one configuration in it.  Membership decides
    this, not record status: a label that lost one configuration but kept
    another still survives.  Without *after* it is left as None (unknown).
    """
    counts = dict.fromkeys(DiffStatus, 0)
    for diff in differences:
        counts[diff.status] += 1

    affected = affected_labels(differences)
    surviving = [label for label in affected if after.has_configurations(label)] if after is not None else None

    return ComparisonSummary(
        total_changed=counts[DiffStatus.CHANGED],
        total_added=counts[DiffStatus.ADDED],
        total_removed=counts[DiffStatus.REMOVED],
        affected_targets=affected,
        surviving_targets=surviving,
    )


def compare_snapshots(before: Snapshot, after: Snapshot) -> ComparisonResult:
    """Compare two snapshots and return the full comparison result.

    Pure and deterministic: repeated calls with the same snapshots return
    equal results.  Provenance fields (timestamp, tool release, metadata)
    are ignored.
    """
    differences = diff_target_hashes(before.target_hashes, after.target_hashes)
    return ComparisonResult(
        before_commit=before.git_commit_sha,
        after_commit=after.git_commit_sha,
        differences=differences,
        summary=summarise(differences, after),
    )
