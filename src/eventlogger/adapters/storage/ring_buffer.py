"""Ring buffer storage adapter for logs.

Provides bounded in-memory storage that automatically evicts oldest
entries when the buffer is full. Used when the processor is embedded in
another program that inspects its own log in-process; see
``examples/capture_events.py``.
"""

from collections import deque
from collections.abc import Iterable

from eventlogger.adapters.storage.in_memory import _select
from eventlogger.core.models import LogEntry


class RingBufferLogStorage:
    """Ring buffer implementation of LogStoragePort.

    Stores log entries in a fixed-size circular buffer. When the buffer
    is full, the oldest entry is automatically evicted to make room for
    new entries.

    Args:
        max_size: Maximum number of entries to store.
    """

    def __init__(self, max_size: int) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self._buffer: deque[LogEntry] = deque(maxlen=max_size)

    def write(self, entry: LogEntry) -> None:
        """Write a log entry to storage."""
        self._buffer.append(entry)

    def read(self, since: float = 0, level: str | None = None) -> Iterable[LogEntry]:
        """Read log entries since the given timestamp.

        Returns entries with timestamp > since, ordered by timestamp ascending.
        """
        yield from _select(self._buffer, since, level)

    def __len__(self) -> int:
        return len(self._buffer)
