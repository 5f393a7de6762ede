"""Random generation of synthetic application events."""

import os
import random
import socket
import threading
from collections.abc import Callable
from datetime import datetime, timezone

from eventlogger.core.models import Event, EventType, MetadataValue, Severity
from eventlogger.core.ports import RandomSource

EVENT_TYPES: tuple[EventType, ...] = tuple(EventType)

# Info appears three times, so P(Info)=0.6, P(Warning)=P(Error)=0.2
SEVERITY_WEIGHTS: tuple[Severity, ...] = (
    Severity.INFO,
    Severity.INFO,
    Severity.INFO,
    Severity.WARNING,
    Severity.ERROR,
)

API_ENDPOINTS = ("users", "orders", "products", "payments", "reports")

UNKNOWN_EVENT_MESSAGE = "Unknown event occurred"

RANDOM_ID_RANGE = (1000, 9999)

MessageFormatter = Callable[[RandomSource], str]


def _user_login(rng: RandomSource) -> str:
    return f"User user{rng.randrange(1, 100)} logged in successfully"


def _order_processed(rng: RandomSource) -> str:
    return f"Order #{rng.randrange(1000, 9999)} processed"


def _data_sync(rng: RandomSource) -> str:
    return f"Synchronized {rng.randrange(10, 500)} records"


def _payment_received(rng: RandomSource) -> str:
    return f"Payment of ${rng.randrange(10, 1000)} received"


def _email_sent(rng: RandomSource) -> str:
    return f"Email sent to customer{rng.randrange(1, 50)}@example.com"


def _cache_refresh(rng: RandomSource) -> str:
    return f"Cache refreshed for {rng.randrange(5, 50)} keys"


def _backup_completed(rng: RandomSource) -> str:
    return f"Backup completed: {rng.randrange(100, 500)}MB"


def _api_request(rng: RandomSource) -> str:
    return f"API endpoint /{rng.choice(API_ENDPOINTS)} called"


_MESSAGE_FORMATTERS: dict[EventType, MessageFormatter] = {
    EventType.USER_LOGIN: _user_login,
    EventType.ORDER_PROCESSED: _order_processed,
    EventType.DATA_SYNC: _data_sync,
    EventType.PAYMENT_RECEIVED: _payment_received,
    EventType.EMAIL_SENT: _email_sent,
    EventType.CACHE_REFRESH: _cache_refresh,
    EventType.BACKUP_COMPLETED: _backup_completed,
    EventType.API_REQUEST: _api_request,
}


def describe(event_type: EventType | str, rng: RandomSource) -> str:
    """Build the message for an event type.

    Each formatter draws its own parameters from ``rng``. Strings that are
    not a known event type map to ``UNKNOWN_EVENT_MESSAGE`` without
    consuming any randomness.

    Args:
        event_type: An EventType or its string value.
        rng: Random source for the message parameters.

    Returns:
        The formatted message.
    """
    try:
        formatter = _MESSAGE_FORMATTERS[EventType(event_type)]
    except ValueError:
        return UNKNOWN_EVENT_MESSAGE
    return formatter(rng)


def runtime_metadata(rng: RandomSource) -> dict[str, MetadataValue]:
    """Capture process, host and thread details plus a random correlation id.

    Values are read on every call so they reflect the caller's current
    process and thread.
    """
    return {
        "process_id": os.getpid(),
        "machine_name": socket.gethostname(),
        "thread_id": threading.get_ident(),
        "random_id": rng.randrange(*RANDOM_ID_RANGE),
    }


class EventGenerator:
    """Produces independent synthetic events from a random source.

    The generator keeps no state between calls other than its random
    source. Each instance created without an explicit ``rng`` gets its own
    independently seeded ``random.Random``, so generators running side by
    side never share a sequence.

    Example:
        ```python
        generator = EventGenerator(random.Random(42))
        event = generator.generate()
        ```
    """

    def __init__(
        self,
        rng: RandomSource | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            rng: Random source. Defaults to a freshly seeded random.Random.
            clock: Returns the capture time. Defaults to the current UTC time.
        """
        self._rng = rng if rng is not None else random.Random()
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def generate(self) -> Event:
        """Generate one random event.

        Randomness is drawn in a fixed order: event type, severity,
        message parameters, then the correlation id.
        """
        event_type = self._rng.choice(EVENT_TYPES)
        severity = self._rng.choice(SEVERITY_WEIGHTS)
        message = describe(event_type, self._rng)
        return Event(
            event_type=event_type,
            message=message,
            timestamp=self._clock(),
            severity=severity,
            metadata=runtime_metadata(self._rng),
        )
