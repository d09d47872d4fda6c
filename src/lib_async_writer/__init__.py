"""Asynchronous text writer: many producer threads, one batching consumer.

Producers call :meth:`AsyncStringWriter.enqueue` from any thread; a single
background thread drains the handoff queue into a capacity-bounded batch and
hands each batch to the caller-supplied sink. :meth:`AsyncStringWriter.dispose`
drains what is left and blocks until the consumer has exited.
"""

from __future__ import annotations

from .__init__conf__ import summary_info
from .adapters import (
    AsyncStringWriter,
    FileSink,
    FlushGate,
    HandoffQueue,
    RichConsoleSink,
    StreamSink,
    WakeSignal,
    WriterSnapshot,
)
from .config import WriterSettings
from .domain import BatchBuffer, WriterState
from .errors import WriterFailedError

__all__ = [
    "AsyncStringWriter",
    "BatchBuffer",
    "FileSink",
    "FlushGate",
    "HandoffQueue",
    "RichConsoleSink",
    "StreamSink",
    "WakeSignal",
    "WriterFailedError",
    "WriterSettings",
    "WriterSnapshot",
    "WriterState",
    "summary_info",
]
