"""Run a short processor loop into a ring buffer and summarise it.

Run with:
    python examples/capture_events.py

The processor logs into an in-process RingBufferLogStorage instead of
stdout. Afterwards the captured entries are filtered by level and the
ERROR lines are written out as NDJSON.
"""

import asyncio
import logging
import sys
from collections import Counter

from eventlogger.adapters.logging import configure_logging, shutdown_logging
from eventlogger.adapters.storage.ring_buffer import RingBufferLogStorage
from eventlogger.core.encoding.ndjson import encode_logs
from eventlogger.core.generator import EventGenerator
from eventlogger.core.processor import EventProcessor, ProcessorSettings

storage = RingBufferLogStorage(max_size=500)


async def main() -> None:
    handler = configure_logging(storage=storage)
    try:
        processor = EventProcessor(
            EventGenerator(),
            ProcessorSettings(iterations=25, delay_ms=20),
            logging.getLogger("eventlogger.processor"),
        )
        await processor.run()
    finally:
        shutdown_logging(handler)

    levels = Counter(entry.level for entry in storage.read())
    for level, count in sorted(levels.items()):
        print(f"{level:<8} {count}")

    sys.stdout.write(encode_logs(storage.read(level="error")))


if __name__ == "__main__":
    asyncio.run(main())
