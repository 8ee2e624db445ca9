"""JSON log formatter for CI log aggregation.

Emits each log record as a single-line JSON object so that CI systems can
index hashdiff logs without regex parsing.  Enabled with ``--log-json`` or
``HASHDIFF_STRUCTURED_LOGGING=true``.

Output schema per line::

    {
        "timestamp": "2026-05-15T12:34:56.789012+00:00",
        "level": "INFO",
        "logger": "hash_cli.app",
        "message": "Comparing hash files",
        "comparison": { ... },      // present when passed via extra=
        "exc_info": "Traceback ..."  // present only on exceptions
    }
"""

from __future__ import annotations

import json
import logging
import traceback
from datetime import UTC, datetime
from typing import Any


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        """Render *record* as a single JSON line."""
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Structured comparison statistics emitted via
        # ``extra={"comparison": ...}``.
        comparison = getattr(record, "comparison", None)
        if comparison is not None:
            payload["comparison"] = comparison

        if record.exc_info and record.exc_info[0] is not None:
            payload["exc_info"] = "".join(traceback.format_exception(*record.exc_info))

        return json.dumps(payload, default=str, ensure_ascii=False)
