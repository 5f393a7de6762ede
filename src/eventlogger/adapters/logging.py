"""Python logging handler adapter for eventlogger.

This adapter bridges Python's standard library logging module to the
LogStoragePort, so every record carries its message template and its
``extra`` fields as independently indexable attributes.
"""

import logging
import sys
import traceback
from typing import TextIO

from eventlogger.adapters.storage.stream import StreamLogStorage
from eventlogger.config import LoggingSettings
from eventlogger.core.models import LogEntry
from eventlogger.core.ports import LogStoragePort

ROOT_LOGGER_NAME = "eventlogger"

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Standard LogRecord attributes that should not be treated as extra fields
_STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)

# Default attributes to extract from LogRecord
_DEFAULT_INCLUDE_ATTRS = ["logger", "template"]


class EventLogHandler(logging.Handler):
    """Logging handler that writes log records to a LogStoragePort.

    Example:
        ```python
        storage = InMemoryLogStorage()
        handler = EventLogHandler(storage)
        logging.getLogger("eventlogger").addHandler(handler)
        ```
    """

    def __init__(
        self,
        storage: LogStoragePort,
        include_attrs: list[str] | None = None,
        level: int = logging.NOTSET,
    ) -> None:
        """Initialize the handler with a log storage backend.

        Args:
            storage: Storage adapter implementing LogStoragePort.
            include_attrs: LogRecord details to include as attributes. Any of
                "logger", "template", "module", "funcName", "lineno",
                "pathname", "thread". Defaults to ["logger", "template"].
            level: Minimum level handled.
        """
        super().__init__(level)
        self._storage = storage
        self._include_attrs = (
            include_attrs if include_attrs is not None else _DEFAULT_INCLUDE_ATTRS
        )

    @property
    def storage(self) -> LogStoragePort:
        return self._storage

    def to_entry(self, record: logging.LogRecord) -> LogEntry:
        """Convert a LogRecord into a LogEntry."""
        attr_mapping: dict[str, str | int | float | bool] = {
            "logger": record.name,
            "template": str(record.msg),
            "module": record.module,
            "funcName": record.funcName or "",
            "lineno": record.lineno,
            "pathname": record.pathname,
            "thread": record.thread or 0,
        }

        attributes: dict[str, str | int | float | bool] = {
            key: attr_mapping[key] for key in self._include_attrs if key in attr_mapping
        }

        # Add any extra attributes passed via logging call
        for key, value in record.__dict__.items():
            if key not in _STANDARD_LOGRECORD_ATTRS and isinstance(
                value, (str, int, float, bool)
            ):
                attributes[key] = value

        if record.exc_info:
            exc_type, exc_value, exc_tb = record.exc_info
            if exc_type is not None:
                attributes["exc_type"] = exc_type.__name__
            if exc_value is not None:
                attributes["exc_message"] = str(exc_value)
            if exc_tb is not None:
                attributes["exc_traceback"] = "".join(
                    traceback.format_exception(exc_type, exc_value, exc_tb)
                )

        return LogEntry(
            timestamp=record.created,
            level=record.levelname,
            message=record.getMessage(),
            attributes=attributes,
        )

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a log record to the storage backend.

        Storage failures propagate to the logging call site.

        Args:
            record: The log record to emit.
        """
        self._storage.write(self.to_entry(record))

    def flush(self) -> None:
        flush = getattr(self._storage, "flush", None)
        if flush is not None:
            with self.lock:
                flush()


class TextStreamHandler(logging.StreamHandler):
    """Plain-text StreamHandler whose write failures propagate.

    Errors caught in ``emit`` are re-raised from ``handleError`` instead of
    being printed to stderr, matching EventLogHandler.
    """

    def handleError(self, record: logging.LogRecord) -> None:  # noqa: N802
        exc = sys.exc_info()[1]
        if exc is None:
            super().handleError(record)
            return
        raise exc


def configure_logging(
    settings: LoggingSettings | None = None,
    stream: TextIO | None = None,
    storage: LogStoragePort | None = None,
) -> logging.Handler:
    """Attach a single handler to the ``eventlogger`` logger.

    Any handler installed by a previous call is detached and closed first.

    Args:
        settings: Level and output format. Defaults to DEBUG, ndjson.
        stream: Output stream for ``ndjson`` and ``text`` formats.
            Defaults to stdout.
        storage: Explicit storage backend. Takes precedence over the
            format setting.

    Returns:
        The installed handler.
    """
    if settings is None:
        settings = LoggingSettings()
    logger = logging.getLogger(ROOT_LOGGER_NAME)

    for existing in list(logger.handlers):
        if getattr(existing, "_eventlogger_managed", False):
            shutdown_logging(existing)

    handler: logging.Handler
    if storage is not None:
        handler = EventLogHandler(storage)
    elif settings.format == "text":
        handler = TextStreamHandler(stream or sys.stdout)
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    else:
        handler = EventLogHandler(StreamLogStorage(stream))

    handler._eventlogger_managed = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(settings.level)
    return handler


def shutdown_logging(handler: logging.Handler) -> None:
    """Flush, detach and close a handler installed by configure_logging."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    handler.flush()
    logger.removeHandler(handler)
    handler.close()
