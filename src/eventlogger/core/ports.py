"""Port interfaces for event sources and log storage.

These protocols define the contracts the processor and logging handler
depend on. The core depends only on these interfaces, not concrete
implementations.
"""

from collections.abc import Iterable, Sequence
from typing import Protocol, TypeVar, runtime_checkable

from eventlogger.core.models import Event, LogEntry

T = TypeVar("T")


class RandomSource(Protocol):
    """The subset of ``random.Random`` the event generator draws from."""

    def choice(self, seq: Sequence[T]) -> T: ...

    def randrange(self, start: int, stop: int | None = None, step: int = 1) -> int: ...


@runtime_checkable
class EventSourcePort(Protocol):
    """Port for anything that can produce synthetic events.

    Examples: EventGenerator, or a scripted fake in tests.
    """

    def generate(self) -> Event:
        """Produce one new event."""
        ...


@runtime_checkable
class LogStoragePort(Protocol):
    """Port for log storage operations.

    Adapters implementing this protocol can store and retrieve log entries.
    Examples: InMemoryLogStorage, RingBufferLogStorage, StreamLogStorage.
    """

    def write(self, entry: LogEntry) -> None:
        """Write a log entry to storage."""
        ...

    def read(self, since: float = 0, level: str | None = None) -> Iterable[LogEntry]:
        """Read log entries since the given timestamp.

        Args:
            since: Unix timestamp. Returns entries with timestamp > since.
                   Default 0 returns all entries.
            level: Optional level name filter (case-insensitive).

        Returns:
            Iterable of LogEntry objects, ordered by timestamp ascending.
        """
        ...
