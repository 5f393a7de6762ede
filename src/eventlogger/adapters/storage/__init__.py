"""Storage adapters implementing LogStoragePort."""

from eventlogger.adapters.storage.in_memory import InMemoryLogStorage
from eventlogger.adapters.storage.ring_buffer import RingBufferLogStorage
from eventlogger.adapters.storage.stream import StreamLogStorage

__all__ = [
    "InMemoryLogStorage",
    "RingBufferLogStorage",
    "StreamLogStorage",
]
