"""Command-line entry point: load settings, configure logging, run the loop.

Run with:
    python -m eventlogger --iterations 5 --delay-ms 250
"""

import argparse
import asyncio
import logging
import signal
import sys
from collections.abc import Sequence

from eventlogger.adapters.logging import configure_logging, shutdown_logging
from eventlogger.config import Settings, load_settings, with_overrides
from eventlogger.core.generator import EventGenerator
from eventlogger.core.ports import EventSourcePort
from eventlogger.core.processor import EventProcessor, RunOutcome
from eventlogger.errors import ConfigurationError

logger = logging.getLogger("eventlogger.app")

EXIT_OK = 0
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eventlogger",
        description="Generate random application events and write them to the log.",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="JSON settings file (default: ./appsettings.json if present)",
    )
    parser.add_argument("--iterations", type=int, help="number of events to generate")
    parser.add_argument(
        "--delay-ms", type=int, help="pause between events in milliseconds"
    )
    return parser


def _install_signal_handlers(
    loop: asyncio.AbstractEventLoop, cancel: asyncio.Event
) -> list[signal.Signals]:
    installed = []
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, cancel.set)
        except (NotImplementedError, RuntimeError, ValueError):
            # Not supported on this platform or outside the main thread
            continue
        installed.append(sig)
    return installed


async def run_processor(
    processor: EventProcessor, cancel: asyncio.Event | None = None
) -> RunOutcome:
    """Run the processor, cancelling it on SIGINT or SIGTERM."""
    cancel = cancel if cancel is not None else asyncio.Event()
    loop = asyncio.get_running_loop()
    installed = _install_signal_handlers(loop, cancel)
    try:
        return await processor.run(cancel)
    finally:
        for sig in installed:
            loop.remove_signal_handler(sig)


def run_application(
    settings: Settings, generator: EventSourcePort | None = None
) -> RunOutcome:
    """Run one processor to completion with logging already configured.

    Unexpected failures are logged at CRITICAL and re-raised.
    """
    processor = EventProcessor(
        generator or EventGenerator(),
        settings.processor,
        logging.getLogger("eventlogger.processor"),
    )
    try:
        logger.info("=== EventLogger Application Started ===")
        logger.info(
            "Environment: %s",
            settings.environment,
            extra={"environment": settings.environment},
        )
        for warning in settings.warnings:
            logger.warning("Configuration adjusted: %s", warning)

        outcome = asyncio.run(run_processor(processor))
    except Exception:
        logger.critical("Application terminated unexpectedly", exc_info=True)
        raise

    if outcome is RunOutcome.CANCELLED:
        logger.info(
            "Event Processor cancelled after %d events",
            processor.events_generated,
            extra={"events_generated": processor.events_generated},
        )
        logger.info("=== EventLogger Application Cancelled ===")
    else:
        logger.info("=== EventLogger Application Completed Successfully ===")
    return outcome


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point. Returns the process exit code.

    Configuration problems return 2. Any other failure is logged at
    CRITICAL and re-raised after the log sink is flushed.
    """
    args = build_parser().parse_args(argv)
    try:
        settings = with_overrides(
            load_settings(args.config), args.iterations, args.delay_ms
        )
    except ConfigurationError as exc:
        print(f"eventlogger: configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    handler = configure_logging(settings.logging)
    try:
        run_application(settings)
    finally:
        shutdown_logging(handler)
    return EXIT_OK


def run() -> None:
    """Console script wrapper around main()."""
    sys.exit(main())
