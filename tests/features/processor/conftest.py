"""BDD step definitions for the event processing loop."""

import asyncio
import logging
from collections.abc import Iterator

import pytest
from pytest_bdd import given, parsers, then, when
from tests.features.processor.steps_helpers import ProcessorScenarioContext
from tests.helpers import ScriptedEventSource, make_event

from eventlogger.adapters.logging import EventLogHandler
from eventlogger.adapters.storage.in_memory import InMemoryLogStorage
from eventlogger.core.processor import EventProcessor, ProcessorSettings, RunOutcome


@pytest.fixture
def ctx() -> ProcessorScenarioContext:
    """Fresh scenario context for each test."""
    return ProcessorScenarioContext()


@pytest.fixture
def scenario_logger(ctx: ProcessorScenarioContext) -> Iterator[logging.Logger]:
    """Isolated DEBUG logger writing into the scenario's storage."""
    logger = logging.getLogger("eventlogger.tests.bdd")
    logger.handlers.clear()
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    handler = EventLogHandler(ctx.log_storage)
    logger.addHandler(handler)
    yield logger
    logger.removeHandler(handler)
    handler.close()


# === Background Steps ===
@given("in-memory log storage")
def step_log_storage(ctx: ProcessorScenarioContext) -> None:
    ctx.log_storage = InMemoryLogStorage()


# === Setup Steps ===
@given(
    parsers.parse(
        "a processor configured for {iterations:d} iterations with {delay:d}ms delay"
    )
)
def step_configure(ctx: ProcessorScenarioContext, iterations: int, delay: int) -> None:
    ctx.settings = ProcessorSettings(iterations=iterations, delay_ms=delay)


@given("the cancel signal is already set")
def step_cancel_set(ctx: ProcessorScenarioContext) -> None:
    ctx.cancel.set()


@given(parsers.parse('every event has severity "{severity}"'))
def step_severity(ctx: ProcessorScenarioContext, severity: str) -> None:
    ctx.source = ScriptedEventSource([make_event(severity=severity)])


# === Action Steps ===
@when("the processor runs")
def step_run(ctx: ProcessorScenarioContext, scenario_logger: logging.Logger) -> None:
    ctx.processor = EventProcessor(ctx.source, ctx.settings, scenario_logger)
    ctx.outcome = asyncio.run(ctx.processor.run(ctx.cancel))


# === Assertion Steps ===
@then(parsers.parse('the run outcome is "{outcome}"'))
def step_outcome(ctx: ProcessorScenarioContext, outcome: str) -> None:
    assert ctx.outcome is RunOutcome(outcome)


@then(parsers.parse("{n:d} events are generated"))
def step_events_generated(ctx: ProcessorScenarioContext, n: int) -> None:
    assert ctx.processor is not None
    assert ctx.processor.events_generated == n


@then(parsers.parse("{n:d} log lines above DEBUG are written"))
def step_line_count(ctx: ProcessorScenarioContext, n: int) -> None:
    assert len(ctx.entries(include_debug=False)) == n


@then(parsers.parse('the first log line is "{message}"'))
def step_first_line(ctx: ProcessorScenarioContext, message: str) -> None:
    assert ctx.entries()[0].message == message


@then(parsers.parse('the last log line is "{message}"'))
def step_last_line(ctx: ProcessorScenarioContext, message: str) -> None:
    assert ctx.entries()[-1].message == message


@then(parsers.parse("the event lines are numbered 1 to {n:d} out of {total:d}"))
def step_numbering(ctx: ProcessorScenarioContext, n: int, total: int) -> None:
    events = ctx.event_entries()
    assert [e.attributes["iteration"] for e in events] == list(range(1, n + 1))
    for entry in events:
        assert entry.message.startswith(f"[{entry.attributes['iteration']}/{total}] ")


@then(parsers.parse('the DEBUG lines list metadata keys "{keys}"'))
def step_metadata_keys(ctx: ProcessorScenarioContext, keys: str) -> None:
    debug = [e for e in ctx.entries() if e.level == "DEBUG"]
    assert [e.attributes["metadata_key"] for e in debug] == keys.split(",")
    assert all(e.message.startswith("Metadata: ") for e in debug)


@then(parsers.parse('every event line is logged at "{level}"'))
def step_event_level(ctx: ProcessorScenarioContext, level: str) -> None:
    events = ctx.event_entries()
    assert events
    assert {e.level for e in events} == {level}
