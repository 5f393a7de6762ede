"""Synthetic application event generator that logs to a structured sink."""

from eventlogger.adapters.logging import (
    EventLogHandler,
    configure_logging,
    shutdown_logging,
)
from eventlogger.adapters.storage import (
    InMemoryLogStorage,
    RingBufferLogStorage,
    StreamLogStorage,
)
from eventlogger.config import (
    EventProcessorSettings,
    LoggingSettings,
    Settings,
    load_settings,
)
from eventlogger.core import (
    Event,
    EventGenerator,
    EventProcessor,
    EventType,
    LogEntry,
    ProcessorSettings,
    ProcessorState,
    RunOutcome,
    Severity,
    level_for_severity,
)
from eventlogger.errors import (
    ConfigurationError,
    ConfigurationWarning,
    EventLoggerError,
)

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "ConfigurationWarning",
    "Event",
    "EventGenerator",
    "EventLogHandler",
    "EventLoggerError",
    "EventProcessor",
    "EventProcessorSettings",
    "EventType",
    "InMemoryLogStorage",
    "LogEntry",
    "LoggingSettings",
    "ProcessorSettings",
    "ProcessorState",
    "RingBufferLogStorage",
    "RunOutcome",
    "Settings",
    "Severity",
    "StreamLogStorage",
    "configure_logging",
    "level_for_severity",
    "load_settings",
    "shutdown_logging",
]
