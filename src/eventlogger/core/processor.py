"""Bounded event loop that routes generated events to a logger.

Each iteration asks an event source for one event, logs it at a level
derived from its severity, logs its metadata at DEBUG, then waits before
the next iteration. The wait can be interrupted through an asyncio.Event.
"""

import asyncio
import enum
import logging
from dataclasses import dataclass

from eventlogger.core.models import Event, Severity
from eventlogger.core.ports import EventSourcePort

DEFAULT_ITERATIONS = 20
DEFAULT_DELAY_MS = 1000

EVENT_TEMPLATE = "[%d/%d] %s: %s"
METADATA_TEMPLATE = "Metadata: %s=%s"

_SEVERITY_LEVELS = {
    Severity.ERROR: logging.ERROR,
    Severity.WARNING: logging.WARNING,
    Severity.INFO: logging.INFO,
}


@dataclass(frozen=True)
class ProcessorSettings:
    """Loop parameters for EventProcessor.

    Attributes:
        iterations: Number of events to generate. Zero skips the loop.
        delay_ms: Pause between iterations in milliseconds.
    """

    iterations: int = DEFAULT_ITERATIONS
    delay_ms: int = DEFAULT_DELAY_MS


class ProcessorState(enum.Enum):
    """Lifecycle of a processor run."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


class RunOutcome(enum.Enum):
    """How a run ended when it returned normally."""

    COMPLETED = "completed"
    CANCELLED = "cancelled"


def level_for_severity(severity: Severity | str) -> int:
    """Map an event severity to a logging level.

    ``Error`` maps to ERROR and ``Warning`` to WARNING. Everything else,
    including strings that are not a Severity value, maps to INFO.

    Args:
        severity: A Severity or its string value.

    Returns:
        The ``logging`` level number.
    """
    try:
        return _SEVERITY_LEVELS[Severity(severity)]
    except ValueError:
        return logging.INFO


class EventProcessor:
    """Drives a bounded loop of event generation and logging.

    Example:
        ```python
        processor = EventProcessor(EventGenerator(), ProcessorSettings(5, 100))
        outcome = asyncio.run(processor.run())
        ```
    """

    def __init__(
        self,
        generator: EventSourcePort,
        settings: ProcessorSettings | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the processor.

        Args:
            generator: Source of events, one per iteration.
            settings: Loop parameters. Defaults to 20 iterations, 1000ms apart.
            logger: Destination for event logs. Defaults to this module's logger.
        """
        self._generator = generator
        self._settings = settings or ProcessorSettings()
        self._logger = logger or logging.getLogger(__name__)
        self.state = ProcessorState.IDLE
        self.events_generated = 0

    @property
    def settings(self) -> ProcessorSettings:
        return self._settings

    async def run(self, cancel: asyncio.Event | None = None) -> RunOutcome:
        """Run the loop once.

        Args:
            cancel: Set this event to stop the loop. It is checked before
                each iteration and interrupts the wait between iterations.

        Returns:
            RunOutcome.COMPLETED after all iterations, or
            RunOutcome.CANCELLED if ``cancel`` was set first.

        Raises:
            RuntimeError: If this processor has already been run.
        """
        if self.state is not ProcessorState.IDLE:
            raise RuntimeError(f"processor already {self.state.value}")
        if cancel is None:
            cancel = asyncio.Event()
        self.state = ProcessorState.RUNNING
        try:
            outcome = await self._run_loop(cancel)
        except asyncio.CancelledError:
            self.state = ProcessorState.CANCELLED
            raise
        except Exception:
            self.state = ProcessorState.FAILED
            raise
        self.state = (
            ProcessorState.COMPLETED
            if outcome is RunOutcome.COMPLETED
            else ProcessorState.CANCELLED
        )
        return outcome

    async def _run_loop(self, cancel: asyncio.Event) -> RunOutcome:
        iterations = self._settings.iterations
        delay_ms = self._settings.delay_ms
        self._logger.info(
            "Event Processor started. Iterations: %d, Delay: %dms",
            iterations,
            delay_ms,
            extra={"iterations": iterations, "delay_ms": delay_ms},
        )

        for iteration in range(1, iterations + 1):
            if cancel.is_set():
                return RunOutcome.CANCELLED

            event = self._generator.generate()
            self.events_generated += 1
            self._log_event(event, iteration, iterations)

            if iteration < iterations and await self._wait_for_cancel(
                cancel, delay_ms
            ):
                return RunOutcome.CANCELLED

        self._logger.info(
            "Event Processor completed all %d iterations",
            iterations,
            extra={"iterations": iterations},
        )
        return RunOutcome.COMPLETED

    async def _wait_for_cancel(self, cancel: asyncio.Event, delay_ms: int) -> bool:
        """Wait up to ``delay_ms``; return True if cancelled meanwhile."""
        try:
            await asyncio.wait_for(cancel.wait(), timeout=delay_ms / 1000)
        except asyncio.TimeoutError:
            return False
        return True

    def _log_event(self, event: Event, iteration: int, total: int) -> None:
        event_type = str(event.event_type)
        self._logger.log(
            level_for_severity(event.severity),
            EVENT_TEMPLATE,
            iteration,
            total,
            event_type,
            event.message,
            extra={
                "iteration": iteration,
                "total": total,
                "event_type": event_type,
                "event_message": event.message,
                "severity": str(event.severity),
            },
        )
        for key, value in event.metadata.items():
            self._logger.debug(
                METADATA_TEMPLATE,
                key,
                value,
                extra={"metadata_key": key, "metadata_value": value},
            )
