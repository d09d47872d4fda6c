"""Domain entities and value objects used by the asynchronous writer."""

from __future__ import annotations

from .batch_buffer import BatchBuffer
from .lifecycle import WriterState

__all__ = [
    "BatchBuffer",
    "WriterState",
]
