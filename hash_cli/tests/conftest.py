"""Shared fixtures for CLI tests.

Snapshot files are written with the real store so that every CLI test also
exercises the persisted format.  Environment overrides that would change
CLI defaults are cleared for every test.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from hash_engine.models.snapshot import Snapshot
from hash_engine.store import save_snapshot_file

WriteSnapshot = Callable[[str, str, dict[str, dict[str, str]]], Path]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in (
        "HASHDIFF_DEFAULT_FORMAT",
        "HASHDIFF_INCLUDE_REMOVED",
        "HASHDIFF_VERBOSE",
        "HASHDIFF_STRUCTURED_LOGGING",
        "HASHDIFF_METRICS_FILE",
        "HASHDIFF_JSON_INDENT",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def _reset_cli_logging() -> Iterator[None]:
    """Detach the stderr handler a CLI invocation leaves on the root logger."""
    root_logger = logging.getLogger()
    level = root_logger.level
    yield
    from hash_cli import app as cli_app

    if cli_app._log_handler is not None:
        root_logger.removeHandler(cli_app._log_handler)
        cli_app._log_handler = None
    root_logger.setLevel(level)


@pytest.fixture
def write_snapshot(tmp_path: Path) -> WriteSnapshot:
    """Return a factory writing a snapshot file and returning its path."""

    def _write(name: str, sha: str, target_hashes: dict[str, dict[str, str]]) -> Path:
        path = tmp_path / name
        save_snapshot_file(Snapshot(git_commit_sha=sha, target_hashes=target_hashes), path)
        return path

    return _write


@pytest.fixture
def snapshot_pair(write_snapshot: WriteSnapshot) -> tuple[Path, Path]:
    """A before/after pair with one change, one addition and one removed target."""
    before = write_snapshot(
        "before.json",
        "before_sha",
        {"//a:x": {"c1": "aaa"}, "//gone:lib": {"c1": "g1", "c2": "g2"}},
    )
    after = write_snapshot(
        "after.json",
        "after_sha",
        {"//a:x": {"c1": "bbb"}, "//b:y": {"c1": "ccc"}},
    )
    return before, after
