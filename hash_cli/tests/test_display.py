"""Tests for hash_cli/display.py -- Rich output formatting.

Rendered output is captured via a Console writing to a StringIO buffer
rather than stderr.
"""

from __future__ import annotations

import io
from datetime import UTC, datetime

from rich.console import Console

from hash_cli.display import (
    _STATUS_COLOURS,
    _coloured_status,
    display_comparison,
    display_snapshot_summary,
)
from hash_engine.diff import compare_snapshots
from hash_engine.models.snapshot import Snapshot, SnapshotMetadata

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _capture_console() -> tuple[Console, io.StringIO]:
    """Create a Console that writes plain text to a StringIO buffer."""
    buf = io.StringIO()
    console = Console(file=buf, no_color=True, highlight=False, width=120)
    return console, buf


def _snap(sha: str, hashes: dict[str, dict[str, str]]) -> Snapshot:
    return Snapshot(git_commit_sha=sha, target_hashes=hashes)


# ---------------------------------------------------------------------------
# Status colours
# ---------------------------------------------------------------------------


class TestColouredStatus:
    def test_known_statuses(self):
        for status, colour in _STATUS_COLOURS.items():
            assert _coloured_status(status) == f"[{colour}]{status}[/{colour}]"

    def test_unknown_status(self):
        assert _coloured_status("weird") == "[white]weird[/white]"


# ---------------------------------------------------------------------------
# display_comparison
# ---------------------------------------------------------------------------


class TestDisplayComparison:
    def test_header_and_rows(self):
        result = compare_snapshots(
            _snap("before_sha", {"//a:x": {"cfg1": "aaaa"}}),
            _snap("after_sha", {"//a:x": {"cfg1": "bbbb"}, "//b:y": {"cfg1": "cccc"}}),
        )
        console, buf = _capture_console()
        display_comparison(console, result)
        output = buf.getvalue()

        assert "Hash Comparison" in output
        assert "before_sha" in output
        assert "after_sha" in output
        assert "//a:x" in output
        assert "//b:y" in output
        assert "changed" in output
        assert "added" in output

    def test_no_differences(self):
        result = compare_snapshots(_snap("a", {}), _snap("b", {}))
        console, buf = _capture_console()
        display_comparison(console, result)
        assert "No differences." in buf.getvalue()

    def test_truncates_long_tables(self):
        after = {f"//pkg:t{i:02d}": {"c": "h"} for i in range(10)}
        result = compare_snapshots(_snap("a", {}), _snap("b", after))
        console, buf = _capture_console()
        display_comparison(console, result, max_rows=3)
        output = buf.getvalue()
        assert "... and 7 more difference(s)" in output
        assert "//pkg:t02" in output
        assert "//pkg:t03" not in output


# ---------------------------------------------------------------------------
# display_snapshot_summary
# ---------------------------------------------------------------------------


class TestDisplaySnapshotSummary:
    def test_fields(self):
        snapshot = Snapshot(
            git_commit_sha="abc123",
            timestamp=datetime(2026, 1, 1, tzinfo=UTC),
            bazel_release="release 7.1.1",
            target_hashes={"//a:x": {"c1": "h1", "c2": "h2"}},
            metadata=SnapshotMetadata(targets_pattern="//...", total_targets=2),
        )
        console, buf = _capture_console()
        display_snapshot_summary(console, snapshot)
        output = buf.getvalue()
        assert "abc123" in output
        assert "release 7.1.1" in output
        assert "//..." in output
        assert "2026-01-01" in output
