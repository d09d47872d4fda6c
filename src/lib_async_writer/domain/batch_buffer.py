"""Capacity-bounded text accumulator used by the consumer loop.

Purpose
-------
Collect dequeued lines into a single batch, joined by a line separator, and
tell the caller when the next line would push the batch past its capacity.

Contents
--------
* :class:`BatchBuffer` - separator-aware accumulator with overflow checks.

System Role
-----------
Owned exclusively by the consumer thread; producers never touch it. The
batching policy in :mod:`lib_async_writer.application.use_cases.drain`
decides when to flush based on :meth:`BatchBuffer.would_overflow`.
"""

from __future__ import annotations

import os


class BatchBuffer:
    """Accumulate lines into one batch of text.

    Capacity is measured in characters and includes separators. ``None``
    leaves the buffer unbounded. A single line longer than the capacity is
    still accepted into an empty buffer; capacity bounds batching
    granularity, not the length of an individual line.

    Examples
    --------
    >>> buffer = BatchBuffer(capacity=5, newline="\\n")
    >>> buffer.append("ab")
    >>> buffer.would_overflow("cd")
    False
    >>> buffer.append("cd")
    >>> buffer.text
    'ab\\ncd'
    >>> buffer.would_overflow("e")
    True
    """

    def __init__(self, *, capacity: int | None = None, newline: str = os.linesep) -> None:
        if capacity is not None and capacity <= 0:
            raise ValueError("capacity must be positive")
        if not newline:
            raise ValueError("newline must be a non-empty string")
        self._capacity = capacity
        self._newline = newline
        self._parts: list[str] = []
        self._length = 0

    @property
    def capacity(self) -> int | None:
        """Return the configured capacity, ``None`` when unbounded."""

        return self._capacity

    @property
    def newline(self) -> str:
        """Return the separator placed between consecutive lines."""

        return self._newline

    @property
    def text(self) -> str:
        """Return the accumulated batch."""

        return "".join(self._parts)

    def would_overflow(self, line: str) -> bool:
        """Return ``True`` when appending ``line`` plus one separator exceeds capacity."""

        if self._capacity is None:
            return False
        return self._length + len(self._newline) + len(line) > self._capacity

    def append(self, line: str) -> None:
        """Append ``line``, preceded by the separator when the buffer is not empty."""

        if self._parts:
            self._parts.append(self._newline)
            self._length += len(self._newline)
        self._parts.append(line)
        self._length += len(line)

    def clear(self) -> None:
        self._parts.clear()
        self._length = 0

    def __len__(self) -> int:
        return self._length

    def __bool__(self) -> bool:
        return bool(self._parts)


__all__ = ["BatchBuffer"]
