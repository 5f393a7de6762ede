"""Shared test fixtures for all test modules."""

import logging
from collections.abc import Callable, Iterator

import pytest

from eventlogger.adapters.logging import ROOT_LOGGER_NAME, EventLogHandler
from eventlogger.adapters.storage.in_memory import InMemoryLogStorage
from eventlogger.core.models import LogEntry


@pytest.fixture
def log_storage() -> InMemoryLogStorage:
    """Provide an empty in-memory log storage."""
    return InMemoryLogStorage()


@pytest.fixture
def capture_logger(log_storage: InMemoryLogStorage) -> Iterator[logging.Logger]:
    """Logger at DEBUG that writes every record into ``log_storage``."""
    logger = logging.getLogger("eventlogger.tests.capture")
    logger.handlers.clear()
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    handler = EventLogHandler(log_storage)
    logger.addHandler(handler)
    yield logger
    logger.removeHandler(handler)
    handler.close()


@pytest.fixture
def read_logs(log_storage: InMemoryLogStorage) -> Callable[..., list[LogEntry]]:
    """Return a helper that lists stored entries, optionally excluding DEBUG."""

    def _read(include_debug: bool = True) -> list[LogEntry]:
        entries = list(log_storage.read())
        if include_debug:
            return entries
        return [e for e in entries if e.level != "DEBUG"]

    return _read


@pytest.fixture
def clean_app_logger() -> Iterator[logging.Logger]:
    """Restore the ``eventlogger`` logger after tests that configure it."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    saved_handlers = list(logger.handlers)
    saved_level = logger.level
    yield logger
    for handler in list(logger.handlers):
        if handler not in saved_handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(saved_level)
