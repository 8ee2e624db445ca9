"""Read-only views over a comparison result."""

from hash_engine.projections.exporter import deserialize_comparison, serialize_comparison, validate_comparison_schema
from hash_engine.projections.label_list import render_label_list, select_labels
from hash_engine.projections.render import OutputForm, parse_output_form, render, write_output
from hash_engine.projections.summary_report import render_summary

__all__ = [
    "OutputForm",
    "deserialize_comparison",
    "parse_output_form",
    "render",
    "render_label_list",
    "render_summary",
    "select_labels",
    "serialize_comparison",
    "validate_comparison_schema",
    "write_output",
]
