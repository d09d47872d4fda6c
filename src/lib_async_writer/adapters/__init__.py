"""Concrete synchronisation primitives, the writer, and sinks."""

from __future__ import annotations

from .flush_gate import FlushGate
from .handoff import HandoffQueue, WakeSignal
from .sinks import FileSink, RichConsoleSink, StreamSink
from .writer import AsyncStringWriter, WriterSnapshot

__all__ = [
    "AsyncStringWriter",
    "FileSink",
    "FlushGate",
    "HandoffQueue",
    "RichConsoleSink",
    "StreamSink",
    "WakeSignal",
    "WriterSnapshot",
]
