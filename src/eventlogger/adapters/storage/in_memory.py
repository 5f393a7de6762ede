"""In-memory storage adapter for logs."""

from collections.abc import Iterable

from eventlogger.core.models import LogEntry


def _select(
    entries: Iterable[LogEntry], since: float, level: str | None
) -> list[LogEntry]:
    """Filter by timestamp and optional level, ordered by timestamp ascending."""
    selected = [
        e
        for e in entries
        if e.timestamp > since and (level is None or e.level.upper() == level.upper())
    ]
    return sorted(selected, key=lambda e: e.timestamp)


class InMemoryLogStorage:
    """In-memory implementation of LogStoragePort.

    Stores log entries in a list. Suitable for testing and
    low-volume applications where persistence is not required.
    """

    def __init__(self) -> None:
        self._entries: list[LogEntry] = []

    def write(self, entry: LogEntry) -> None:
        """Write a log entry to storage."""
        self._entries.append(entry)

    def read(self, since: float = 0, level: str | None = None) -> Iterable[LogEntry]:
        """Read log entries since the given timestamp.

        Returns entries with timestamp > since, ordered by timestamp ascending.
        If level is provided, only entries with that level (case-insensitive)
        are returned.
        """
        yield from _select(self._entries, since, level)

    def clear(self) -> None:
        """Remove all stored entries."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
