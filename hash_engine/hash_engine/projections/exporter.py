"""Deterministic JSON export of comparison results.

Ensures that a :class:`ComparisonResult` can be round-tripped through JSON
without losing any difference record or summary count, and that identical
results serialise to byte-identical JSON (sorted keys, stable indentation).
Absent hashes are omitted rather than written as ``null``.
"""

from __future__ import annotations

import json

from pydantic import ValidationError

from hash_engine.models.diff import ComparisonResult


def serialize_comparison(result: ComparisonResult, *, indent: int = 2) -> str:
    """Serialize *result* to the comparison export format.

    Parameters
    ----------
    result:
        The comparison to export.
    indent:
        Indentation width of the emitted JSON.

    Returns
    -------
    str
        A pretty-printed JSON string with sorted keys.
    """
    # ``model_dump_json`` does not support ``sort_keys``, so go through a
    # plain dict first.
    raw = result.model_dump(mode="json", exclude_none=True)
    return json.dumps(raw, indent=indent, sort_keys=True, ensure_ascii=False)


def deserialize_comparison(json_str: str) -> ComparisonResult:
    """Deserialize an exported comparison back into a :class:`ComparisonResult`.

    ``summary.surviving_targets`` is not part of the export and comes back
    as None, so a label list of the restored result must either include
    removed targets or be given the after snapshot.

    Raises
    ------
    pydantic.ValidationError
        If the JSON does not conform to the export schema.
    """
    return ComparisonResult.model_validate_json(json_str)


def validate_comparison_schema(json_str: str) -> list[str]:
    """Validate *json_str* against the export schema without raising.

    Returns
    -------
    list[str]
        Human-readable validation errors; empty when the document is valid.
    """
    try:
        ComparisonResult.model_validate_json(json_str)
    except ValidationError as exc:
        return [
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" if err.get("loc") else err["msg"]
            for err in exc.errors()
        ]
    except (ValueError, TypeError) as exc:
        return [f"Invalid JSON: {exc}"]

    return []
