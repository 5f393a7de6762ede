"""Stream storage adapter that writes log entries as NDJSON lines."""

import sys
import threading
from collections.abc import Iterable
from typing import TextIO

from eventlogger.core.encoding.ndjson import encode_entry
from eventlogger.core.models import LogEntry


class StreamLogStorage:
    """Write-only LogStoragePort that emits one JSON object per line.

    Each entry is written and flushed under a lock, so lines from
    concurrent writers never interleave. Entries are not retained;
    ``read`` yields nothing.

    Example:
        ```python
        storage = StreamLogStorage(sys.stdout)
        logging.getLogger("eventlogger").addHandler(EventLogHandler(storage))
        ```
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        """Initialize with a text stream.

        Args:
            stream: Destination stream. Defaults to ``sys.stdout`` resolved
                at write time.
        """
        self._stream = stream
        self._lock = threading.Lock()

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def write(self, entry: LogEntry) -> None:
        """Write a log entry as a single NDJSON line."""
        line = encode_entry(entry) + "\n"
        with self._lock:
            stream = self.stream
            stream.write(line)
            stream.flush()

    def read(self, since: float = 0, level: str | None = None) -> Iterable[LogEntry]:
        """Stream storage keeps nothing to read back."""
        return iter(())

    def flush(self) -> None:
        with self._lock:
            self.stream.flush()
