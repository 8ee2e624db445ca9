"""Rich output formatting for the hashdiff CLI.

All functions write to a :class:`rich.console.Console` instance (typically
bound to *stderr*) so that machine-readable output on *stdout* is never
polluted with human-readable decoration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
    from rich.console import Console

    from hash_engine.models.diff import ComparisonResult
    from hash_engine.models.snapshot import Snapshot


# ---------------------------------------------------------------------------
# Status colour mapping
# ---------------------------------------------------------------------------

_STATUS_COLOURS: dict[str, str] = {
    "added": "green",
    "removed": "red",
    "changed": "yellow",
}


def _coloured_status(status: str) -> str:
    """Return a Rich markup string with the status colour-coded."""
    colour = _STATUS_COLOURS.get(status, "white")
    return f"[{colour}]{status}[/{colour}]"


def _short_hash(value: str | None, width: int = 12) -> str:
    if value is None:
        return "-"
    return value[:width]


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------


def display_comparison(console: Console, result: ComparisonResult, *, max_rows: int = 50) -> None:
    """Render a comparison overview and a table of differences.

    Parameters
    ----------
    console:
        Rich console to write to (typically stderr).
    result:
        The comparison to display.
    max_rows:
        Maximum number of difference rows before the table is truncated.
    """
    summary = result.summary
    header_lines = [
        f"[bold]Before:[/bold]   {result.before_commit or '(none)'}",
        f"[bold]After:[/bold]    {result.after_commit or '(none)'}",
        f"[bold]Changed:[/bold]  {summary.total_changed}",
        f"[bold]Added:[/bold]    {summary.total_added}",
        f"[bold]Removed:[/bold]  {summary.total_removed}",
        f"[bold]Affected:[/bold] {len(summary.affected_targets)} target(s)",
    ]
    console.print(
        Panel(
            "\n".join(header_lines),
            title="Hash Comparison",
            border_style="blue",
        )
    )

    if not result.differences:
        console.print("[dim]No differences.[/dim]")
        return

    table = Table(
        title="Differences",
        show_lines=False,
        pad_edge=True,
        expand=False,
    )
    table.add_column("Label", style="bold")
    table.add_column("Configuration", style="dim")
    table.add_column("Status")
    table.add_column("Before")
    table.add_column("After")

    for diff in result.differences[:max_rows]:
        table.add_row(
            diff.label,
            _short_hash(diff.configuration),
            _coloured_status(diff.status.value),
            _short_hash(diff.before_hash),
            _short_hash(diff.after_hash),
        )

    console.print(table)

    hidden = len(result.differences) - max_rows
    if hidden > 0:
        console.print(f"[dim]... and {hidden} more difference(s)[/dim]")


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------


def display_snapshot_summary(console: Console, snapshot: Snapshot) -> None:
    """Render the provenance of a freshly persisted snapshot."""
    lines = [
        f"[bold]Commit:[/bold]    {snapshot.git_commit_sha}",
        f"[bold]Release:[/bold]   {snapshot.bazel_release or '(unknown)'}",
        f"[bold]Pattern:[/bold]   {snapshot.metadata.targets_pattern or '(none)'}",
        f"[bold]Targets:[/bold]   {len(snapshot.target_hashes)}",
        f"[bold]Hashes:[/bold]    {snapshot.metadata.total_targets}",
        f"[bold]Computed:[/bold]  {snapshot.timestamp.isoformat()}",
    ]
    console.print(
        Panel(
            "\n".join(lines),
            title="Snapshot",
            border_style="green",
        )
    )
