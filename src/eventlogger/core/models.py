"""Core domain models for synthetic events and log records."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType


class EventType(str, Enum):
    """Kinds of application event the generator can synthesize."""

    USER_LOGIN = "UserLogin"
    ORDER_PROCESSED = "OrderProcessed"
    DATA_SYNC = "DataSync"
    PAYMENT_RECEIVED = "PaymentReceived"
    EMAIL_SENT = "EmailSent"
    CACHE_REFRESH = "CacheRefresh"
    BACKUP_COMPLETED = "BackupCompleted"
    API_REQUEST = "APIRequest"

    def __str__(self) -> str:
        return self.value


class Severity(str, Enum):
    """Severity attached to a synthetic event."""

    INFO = "Info"
    WARNING = "Warning"
    ERROR = "Error"

    def __str__(self) -> str:
        return self.value


# Metadata values keep their structured type (never flattened to str)
MetadataValue = str | int


@dataclass(frozen=True)
class Event:
    """A synthetic application event.

    Attributes:
        event_type: Kind of event.
        message: Human-readable description derived from the event type.
        timestamp: Capture time (UTC).
        severity: Event severity.
        metadata: Runtime details captured at generation time. Stored as a
            read-only copy of the mapping passed in.
    """

    event_type: EventType
    message: str
    timestamp: datetime
    severity: Severity
    metadata: Mapping[str, MetadataValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))


@dataclass(frozen=True)
class LogEntry:
    """A structured log entry.

    Attributes:
        timestamp: Unix timestamp in seconds.
        level: Log level (e.g., INFO, ERROR, DEBUG).
        message: The rendered log message.
        attributes: Additional structured fields.
    """

    timestamp: float
    level: str
    message: str
    attributes: dict[str, str | int | float | bool] = field(default_factory=dict)
