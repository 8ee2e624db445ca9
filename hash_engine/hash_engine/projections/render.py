"""Dispatch a comparison result to one of its output forms."""

from __future__ import annotations

import logging
import sys
from enum import Enum
from pathlib import Path

from hash_engine.errors import UnsupportedOutputForm, WriteFailure
from hash_engine.models.diff import ComparisonResult
from hash_engine.models.snapshot import Snapshot
from hash_engine.projections.exporter import serialize_comparison
from hash_engine.projections.label_list import render_label_list
from hash_engine.projections.summary_report import render_summary

logger = logging.getLogger(__name__)


class OutputForm(str, Enum):
    """Projection forms understood by :func:`render`."""

    JSON = "json"
    TARGETS = "targets"
    SUMMARY = "summary"


def parse_output_form(value: str | OutputForm) -> OutputForm:
    """Coerce *value* into an :class:`OutputForm`.

    Raises
    ------
    UnsupportedOutputForm
        If *value* names no known form.
    """
    if isinstance(value, OutputForm):
        return value
    try:
        return OutputForm(value)
    except ValueError as exc:
        raise UnsupportedOutputForm(str(value)) from exc


def render(
    result: ComparisonResult,
    form: str | OutputForm,
    *,
    include_removed: bool = False,
    indent: int = 2,
    after: Snapshot | None = None,
) -> str:
    """Render *result* in the requested *form*.

    ``include_removed`` and ``after`` only affect the ``targets`` form;
    ``indent`` only affects the ``json`` form.
    """
    output_form = parse_output_form(form)
    if output_form is OutputForm.JSON:
        return serialize_comparison(result, indent=indent) + "\n"
    if output_form is OutputForm.TARGETS:
        return render_label_list(result, include_removed=include_removed, after=after)
    return render_summary(result)


def write_output(text: str, path: Path | None = None) -> None:
    """Write rendered output to *path*, or to stdout when *path* is None.

    Raises
    ------
    WriteFailure
        If the destination cannot be written.
    """
    destination = str(path) if path is not None else "<stdout>"
    try:
        if path is None:
            sys.stdout.write(text)
            sys.stdout.flush()
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
    except (OSError, ValueError) as exc:
        raise WriteFailure(str(exc), operation="write output", path=destination) from exc
    logger.debug("Results written to %s", destination)
