"""Ready-made sinks for flushed batches."""

from __future__ import annotations

from .rich_console import RichConsoleSink
from .stream import FileSink, StreamSink

__all__ = ["FileSink", "RichConsoleSink", "StreamSink"]
