"""Test doubles shared across unit, integration and feature tests."""

from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from typing import Any

from eventlogger.core.models import Event, EventType, LogEntry, Severity

FIXED_TIME = datetime(2024, 1, 15, 12, 30, 0, tzinfo=timezone.utc)

FIXED_METADATA: dict[str, str | int] = {
    "process_id": 4321,
    "machine_name": "test-host",
    "thread_id": 77,
    "random_id": 1234,
}


class ScriptedRandom:
    """Random source that replays scripted values.

    ``choice`` returns the next scripted choice (which must be a member of
    the sequence offered), ``randrange`` the next scripted integer.
    Every call is recorded in ``calls``.
    """

    def __init__(
        self, choices: Sequence[Any] = (), integers: Sequence[int] = ()
    ) -> None:
        self._choices = list(choices)
        self._integers = list(integers)
        self.calls: list[tuple[str, Any]] = []

    def choice(self, seq: Sequence[Any]) -> Any:
        value = self._choices.pop(0)
        assert value in seq, f"{value!r} not offered in {seq!r}"
        self.calls.append(("choice", tuple(seq)))
        return value

    def randrange(self, start: int, stop: int | None = None, step: int = 1) -> int:
        value = self._integers.pop(0)
        assert stop is None or start <= value < stop, (
            f"{value} not in [{start}, {stop})"
        )
        self.calls.append(("randrange", (start, stop)))
        return value


class ScriptedEventSource:
    """Event source that returns prepared events and counts calls.

    Args:
        events: Events to hand out in order; the last one repeats.
        on_generate: Optional callback invoked with the call count.
    """

    def __init__(
        self,
        events: Sequence[Event],
        on_generate: Callable[[int], None] | None = None,
    ) -> None:
        self._events = list(events)
        self._on_generate = on_generate
        self.calls = 0

    def generate(self) -> Event:
        self.calls += 1
        if self._on_generate is not None:
            self._on_generate(self.calls)
        return self._events[min(self.calls, len(self._events)) - 1]


class FailingEventSource:
    """Event source whose every call raises the given exception."""

    def __init__(self, exc: Exception) -> None:
        self._exc = exc

    def generate(self) -> Event:
        raise self._exc


class FailingLogStorage:
    """LogStoragePort whose writes fail once ``fail_after`` entries are stored."""

    def __init__(self, fail_after: int = 0) -> None:
        self.entries: list[LogEntry] = []
        self._fail_after = fail_after

    def write(self, entry: LogEntry) -> None:
        if len(self.entries) >= self._fail_after:
            raise OSError("log sink unavailable")
        self.entries.append(entry)

    def read(self, since: float = 0, level: str | None = None) -> list[LogEntry]:
        return list(self.entries)


def make_event(
    severity: Severity | str = Severity.INFO,
    event_type: EventType = EventType.DATA_SYNC,
    message: str = "Synchronized 42 records",
    metadata: dict[str, str | int] | None = None,
) -> Event:
    """Build an Event with predictable values."""
    return Event(
        event_type=event_type,
        message=message,
        timestamp=FIXED_TIME,
        severity=severity,  # type: ignore[arg-type]
        metadata=dict(FIXED_METADATA) if metadata is None else metadata,
    )
