"""hashdiff CLI application -- Typer-based developer interface.

Provides ``compare`` (diff two persisted hash snapshots) and ``persist``
(wrap externally computed target hashes into a snapshot for a commit).
Human-readable output goes to *stderr* via Rich; machine-readable output
(comparison JSON, label lists) goes to stdout or to the requested file so
that pipelines can compose cleanly.
"""

from __future__ import annotations

import json
import logging
import time
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

from hash_cli.display import display_comparison, display_snapshot_summary

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App & global state
# ---------------------------------------------------------------------------

app = typer.Typer(
    name="hashdiff",
    help="Compare persisted build-target hash snapshots between revisions.",
    no_args_is_help=True,
)
console = Console(stderr=True)

# Mutable global options populated by the Typer callback.
_metrics_file: Path | None = None
_log_json: bool = False
_log_handler: logging.Handler | None = None

_LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"


# ---------------------------------------------------------------------------
# Callback -- global options
# ---------------------------------------------------------------------------


@app.callback()
def _global_options(
    metrics_file: Path | None = typer.Option(
        None,
        "--metrics-file",
        help="Write metrics events to this file (JSONL).",
        envvar="HASHDIFF_METRICS_FILE",
    ),
    log_json: bool = typer.Option(
        False,
        "--log-json/--no-log-json",
        help="Emit log records as single-line JSON on stderr.",
        envvar="HASHDIFF_STRUCTURED_LOGGING",
    ),
) -> None:
    """Global options applied to every command."""
    global _metrics_file, _log_json  # noqa: PLW0603
    _metrics_file = metrics_file
    _log_json = log_json


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _configure_logging(verbose: bool, structured: bool) -> None:
    """Configure the root logger for this invocation.

    The stderr handler installed by a previous invocation in the same
    process is replaced, so switching between plain and JSON output takes
    effect every time.  Handlers installed by anyone else are left alone.
    """
    global _log_handler  # noqa: PLW0603
    level = logging.INFO if verbose else logging.WARNING
    root_logger = logging.getLogger()
    if _log_handler is not None:
        root_logger.removeHandler(_log_handler)

    handler = logging.StreamHandler()
    if structured:
        from hash_cli.json_formatter import JSONFormatter

        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    _log_handler = handler


def _emit_metrics(event: str, data: dict[str, Any]) -> None:
    """Append a timestamped metrics event to the metrics file, if configured.

    Failures are logged but never propagate; metrics emission must never
    break the main command execution.
    """
    if _metrics_file is None:
        return
    record = {
        "event": event,
        "timestamp": datetime.now(UTC).isoformat(),
        "data": data,
    }
    try:
        with _metrics_file.open("a", encoding="utf-8") as fh:
            fh.write(json.dumps(record, sort_keys=True, default=str) + "\n")
    except OSError as exc:
        logger.warning("Could not write metrics to %s: %s", _metrics_file, exc)


# ---------------------------------------------------------------------------
# compare
# ---------------------------------------------------------------------------


@app.command()
def compare(
    before: Path = typer.Argument(
        ...,
        help="Snapshot file of the before revision.",
        exists=True,
        dir_okay=False,
    ),
    after: Path = typer.Argument(
        ...,
        help="Snapshot file of the after revision.",
        exists=True,
        dir_okay=False,
    ),
    output_format: str | None = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format: json, targets, or summary. Defaults to targets.",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file (default: stdout).",
    ),
    include_removed: bool = typer.Option(
        False,
        "--include-removed",
        help="Include targets that no longer exist in the after snapshot (targets format only).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging.",
    ),
) -> None:
    """Compare two persisted hash snapshots and report the affected targets.

    Examples::

        hashdiff compare before.json after.json
        hashdiff compare before.json after.json --format summary
        hashdiff compare before.json after.json -f json -o diff.json
    """
    from hash_engine.config import load_settings
    from hash_engine.diff import compare_snapshots
    from hash_engine.errors import HashDifferError
    from hash_engine.projections import parse_output_form, render, write_output
    from hash_engine.store import load_snapshot_file

    settings = load_settings()
    verbose = verbose or settings.verbose
    _configure_logging(verbose, _log_json or settings.structured_logging)
    include_removed = include_removed or settings.include_removed

    start_time = time.monotonic()
    try:
        form = parse_output_form(output_format or settings.default_format)

        logger.info("Comparing hash files: %s vs %s", before, after)
        before_snapshot = load_snapshot_file(before)
        after_snapshot = load_snapshot_file(after)

        result = compare_snapshots(before_snapshot, after_snapshot)

        stats = {
            "before_commit": result.before_commit,
            "after_commit": result.after_commit,
            "total_differences": result.total_differences,
            "total_changed": result.summary.total_changed,
            "total_added": result.summary.total_added,
            "total_removed": result.summary.total_removed,
            "affected_targets": len(result.summary.affected_targets),
        }
        logger.info(
            "Comparison complete: %d differences (%d changed, %d added, %d removed), %d affected targets",
            result.total_differences,
            result.summary.total_changed,
            result.summary.total_added,
            result.summary.total_removed,
            len(result.summary.affected_targets),
            extra={"comparison": stats},
        )
        if verbose:
            display_comparison(console, result)

        text = render(
            result,
            form,
            include_removed=include_removed,
            indent=settings.json_indent,
            after=after_snapshot,
        )
        write_output(text, output)
        logger.info("Results written to %s", output if output is not None else "stdout")
    except HashDifferError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        _emit_metrics("compare.error", {"error": str(exc), "operation": exc.operation})
        raise typer.Exit(code=1) from exc

    stats["elapsed_ms"] = int((time.monotonic() - start_time) * 1000)
    stats["format"] = form.value
    _emit_metrics("compare.complete", stats)


# ---------------------------------------------------------------------------
# persist
# ---------------------------------------------------------------------------


@app.command()
def persist(
    commit: str = typer.Argument(
        ...,
        help="Git commit (SHA or ref) the hashes were computed for.",
    ),
    output: Path = typer.Option(
        ...,
        "--output",
        "-o",
        help="Output file path for the persisted snapshot.",
    ),
    hashes: Path = typer.Option(
        ...,
        "--hashes",
        help="JSON file of label -> configuration -> hash produced by the target hasher.",
        exists=True,
        dir_okay=False,
    ),
    repo: Path = typer.Option(
        Path("."),
        "--repo",
        help="Path to the git workspace the hashes were computed in.",
        exists=True,
        file_okay=False,
        resolve_path=True,
    ),
    targets: str | None = typer.Option(
        None,
        "--targets",
        help="Target pattern the hashes were computed for. Defaults to //...",
    ),
    bazel_release: str = typer.Option(
        "",
        "--bazel-release",
        help="Build tool release used to compute the hashes.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging.",
    ),
) -> None:
    """Persist externally computed target hashes as a snapshot for COMMIT."""
    from hash_engine.config import load_settings
    from hash_engine.errors import HashDifferError
    from hash_engine.git import GitClientError, resolve_commit, validate_repo
    from hash_engine.persist import MappingHasher, capture_snapshot
    from hash_engine.store import save_snapshot_file

    settings = load_settings()
    verbose = verbose or settings.verbose
    _configure_logging(verbose, _log_json or settings.structured_logging)

    try:
        validate_repo(repo)
        commit_sha = resolve_commit(repo, commit)
        hasher = MappingHasher.from_file(hashes, bazel_release=bazel_release)
        snapshot = capture_snapshot(
            hasher,
            commit_sha,
            targets_pattern=targets or settings.default_targets_pattern,
            workspace_path=str(repo),
        )
        logger.info("Persisting hashes to %s", output)
        save_snapshot_file(snapshot, output)
    except (GitClientError, HashDifferError) as exc:
        console.print(f"[red]Failed to persist hashes: {escape(str(exc))}[/red]")
        _emit_metrics("persist.error", {"error": str(exc)})
        raise typer.Exit(code=1) from exc

    if verbose:
        display_snapshot_summary(console, snapshot)
    logger.info(
        "Successfully persisted hashes for %d targets to %s",
        len(snapshot.target_hashes),
        output,
    )
    _emit_metrics(
        "persist.complete",
        {
            "commit": commit_sha,
            "targets": len(snapshot.target_hashes),
            "hashes": snapshot.metadata.total_targets,
        },
    )
