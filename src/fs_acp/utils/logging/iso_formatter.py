"""JSONL formatter for the decision log.

Each DecisionEvent is handed to the logger as a dict (with 'time'
excluded); this formatter stamps it and writes one JSON object per line
of decisions.jsonl.
"""

from __future__ import annotations

__all__ = ["ISO8601Formatter"]

import json
import logging
from datetime import datetime, timezone


def _utc_timestamp(created: float) -> str:
    """Millisecond UTC timestamp with a 'Z' suffix (2026-10-18T10:48:37.123Z)."""
    moment = datetime.fromtimestamp(created, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ISO8601Formatter(logging.Formatter):
    """Render a record as one JSON line led by its 'time' field.

    Dict messages (decision events) keep their keys; any other message is
    stored under 'message'.
    """

    def format(self, record: logging.LogRecord) -> str:
        fields = record.msg if isinstance(record.msg, dict) else {"message": record.getMessage()}
        return json.dumps({"time": _utc_timestamp(record.created), **fields})
