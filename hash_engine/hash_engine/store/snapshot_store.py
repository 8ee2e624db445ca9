"""Persistence of snapshots as JSON.

Snapshots are written with sorted keys and 2-space indentation so that a
snapshot always serialises to the same bytes and stays easy to inspect by
hand.  Loading performs structural decoding only: a document that is not
valid JSON, or that lacks a required field such as ``target_hashes``, raises
:class:`MalformedSnapshot` rather than producing a partially defaulted
snapshot.  Duplicate keys resolve as the last occurrence.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import IO

from pydantic import ValidationError

from hash_engine.errors import MalformedSnapshot, ReadFailure, WriteFailure
from hash_engine.models.snapshot import Snapshot

logger = logging.getLogger(__name__)


def _format_validation_errors(exc: ValidationError) -> list[str]:
    return [
        f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" if err.get("loc") else err["msg"]
        for err in exc.errors()
    ]


def serialize_snapshot(snapshot: Snapshot) -> str:
    """Serialize *snapshot* to a deterministic JSON string."""
    raw = snapshot.model_dump(mode="json")
    return json.dumps(raw, indent=2, sort_keys=True, ensure_ascii=False)


def deserialize_snapshot(text: str, *, path: str | None = None) -> Snapshot:
    """Decode a JSON document into a :class:`Snapshot`.

    Raises
    ------
    MalformedSnapshot
        If *text* is not valid JSON or does not match the snapshot schema.
    """
    try:
        raw = json.loads(text)
    except ValueError as exc:
        raise MalformedSnapshot(f"invalid JSON: {exc}", operation="load snapshot", path=path) from exc

    try:
        return Snapshot.model_validate(raw)
    except ValidationError as exc:
        errors = _format_validation_errors(exc)
        raise MalformedSnapshot(
            "; ".join(errors),
            operation="load snapshot",
            path=path,
            errors=errors,
        ) from exc


def save_snapshot(snapshot: Snapshot, sink: IO[str], *, path: str | None = None) -> None:
    """Write *snapshot* to a text *sink*.

    Raises
    ------
    WriteFailure
        If the sink rejects the write (closed, read-only, disk full...).
    """
    try:
        sink.write(serialize_snapshot(snapshot) + "\n")
        sink.flush()
    except (OSError, ValueError) as exc:
        raise WriteFailure(str(exc), operation="save snapshot", path=path) from exc


def load_snapshot(source: IO[str], *, path: str | None = None) -> Snapshot:
    """Read and decode a snapshot from a text *source*.

    Raises
    ------
    ReadFailure
        If the source cannot be read.
    MalformedSnapshot
        If the content is not valid UTF-8 or does not decode into a
        valid snapshot.
    """
    try:
        text = source.read()
    except UnicodeDecodeError as exc:
        raise MalformedSnapshot(f"not valid UTF-8: {exc}", operation="load snapshot", path=path) from exc
    except OSError as exc:
        raise ReadFailure(str(exc), operation="load snapshot", path=path) from exc
    return deserialize_snapshot(text, path=path)


def save_snapshot_file(snapshot: Snapshot, path: Path) -> None:
    """Write *snapshot* to *path*, creating parent directories as needed."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = path.open("w", encoding="utf-8")
    except OSError as exc:
        raise WriteFailure(str(exc), operation="save snapshot", path=str(path)) from exc

    with fh:
        save_snapshot(snapshot, fh, path=str(path))
    logger.debug("Saved snapshot for %s to %s", snapshot.git_commit_sha, path)


def load_snapshot_file(path: Path) -> Snapshot:
    """Load a snapshot previously written by :func:`save_snapshot_file`."""
    try:
        fh = path.open("r", encoding="utf-8")
    except OSError as exc:
        raise ReadFailure(str(exc), operation="load snapshot", path=str(path)) from exc

    with fh:
        snapshot = load_snapshot(fh, path=str(path))
    logger.debug(
        "Loaded snapshot for %s from %s (%d targets)",
        snapshot.git_commit_sha,
        path,
        len(snapshot.target_hashes),
    )
    return snapshot
