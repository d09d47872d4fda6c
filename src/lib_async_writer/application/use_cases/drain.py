"""Drain-cycle orchestration for the consumer loop.

Purpose
-------
Capture the batching policy of one drain cycle: move every pending line from
the handoff queue into the batch buffer, flush ahead of any append that would
overflow the buffer, and flush whatever remains once the queue runs dry.

Contents
--------
* :func:`create_drain_cycle` - factory returning the drain callable.

System Role
-----------
Called by :class:`lib_async_writer.adapters.writer.AsyncStringWriter` once per
wake-up. The factory only sees a dequeue callable, a buffer, and the sink, so
the policy can be exercised without threads.
"""

from __future__ import annotations

from typing import Callable

from lib_async_writer.application.ports.sink import SinkPort
from lib_async_writer.domain.batch_buffer import BatchBuffer


def create_drain_cycle(
    *,
    dequeue: Callable[[], str | None],
    buffer: BatchBuffer,
    sink: SinkPort,
    on_flush: Callable[[int], None] | None = None,
) -> Callable[[], int]:
    """Return a callable that performs one drain cycle.

    Parameters
    ----------
    dequeue:
        Returns the next pending line, or ``None`` once the queue is empty.
    buffer:
        Accumulator owned by the consumer thread.
    sink:
        Receives each flushed batch.
    on_flush:
        Optional observer called with the number of lines in each flushed
        batch, after the sink returned.

    Returns
    -------
    Callable[[], int]
        Drain callable returning how many lines the cycle processed.

    Examples
    --------
    >>> from collections import deque
    >>> pending = deque(["a", "b", "c"])
    >>> batches = []
    >>> drain = create_drain_cycle(
    ...     dequeue=lambda: pending.popleft() if pending else None,
    ...     buffer=BatchBuffer(capacity=3, newline="|"),
    ...     sink=batches.append,
    ... )
    >>> drain()
    3
    >>> batches
    ['a|b', 'c']
    """

    batch_lines = 0

    def flush() -> None:
        nonlocal batch_lines
        sink(buffer.text)
        buffer.clear()
        flushed, batch_lines = batch_lines, 0
        if on_flush is not None:
            on_flush(flushed)

    def drain() -> int:
        """Empty the queue into ``buffer`` and flush the end-of-cycle batch."""
        nonlocal batch_lines
        processed = 0
        while True:
            line = dequeue()
            if line is None:
                break
            processed += 1
            if buffer and buffer.would_overflow(line):
                flush()
            buffer.append(line)
            batch_lines += 1
        if processed:
            flush()
        return processed

    return drain


__all__ = ["create_drain_cycle"]
