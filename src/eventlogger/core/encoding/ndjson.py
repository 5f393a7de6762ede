"""NDJSON encoder for log entries."""

import json
from collections.abc import Iterable

from eventlogger.core.models import LogEntry


def encode_entry(entry: LogEntry) -> str:
    """Encode a single log entry as one JSON line without a trailing newline."""
    obj = {
        "timestamp": entry.timestamp,
        "level": entry.level,
        "message": entry.message,
        "attributes": entry.attributes,
    }
    return json.dumps(obj, default=str)


def encode_logs(entries: Iterable[LogEntry]) -> str:
    """Encode log entries to newline-delimited JSON.

    Args:
        entries: An iterable of LogEntry objects.

    Returns:
        NDJSON string with one JSON object per line.
        Empty string if no entries.
    """
    lines = [encode_entry(entry) for entry in entries]

    if not lines:
        return ""

    return "\n".join(lines) + "\n"
