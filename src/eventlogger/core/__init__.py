"""Core event generation and processing, independent of any log backend."""

from eventlogger.core.generator import EventGenerator, describe
from eventlogger.core.models import Event, EventType, LogEntry, Severity
from eventlogger.core.processor import (
    EventProcessor,
    ProcessorSettings,
    ProcessorState,
    RunOutcome,
    level_for_severity,
)

__all__ = [
    "Event",
    "EventGenerator",
    "EventProcessor",
    "EventType",
    "LogEntry",
    "ProcessorSettings",
    "ProcessorState",
    "RunOutcome",
    "Severity",
    "describe",
    "level_for_severity",
]
