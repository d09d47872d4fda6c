"""Thread-safe handoff between producer threads and the consumer.

Purpose
-------
Carry lines from any number of producers to the single consumer thread and
wake the consumer when there is something to do.

Contents
--------
* :class:`HandoffQueue` - unbounded FIFO of pending lines.
* :class:`WakeSignal` - coalescing auto-reset signal that also carries the
  shutdown request.

System Role
-----------
The only structures mutated from more than one thread. Everything else the
writer owns is touched by the consumer alone.
"""

from __future__ import annotations

import queue
import threading


class HandoffQueue:
    """Unbounded FIFO of lines awaiting the consumer.

    Examples
    --------
    >>> pending = HandoffQueue()
    >>> pending.enqueue("first")
    >>> pending.enqueue("second")
    >>> pending.try_dequeue(), pending.try_dequeue(), pending.try_dequeue()
    ('first', 'second', None)
    """

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue[str] = queue.SimpleQueue()

    def enqueue(self, line: str) -> None:
        """Append ``line`` to the tail; never blocks."""

        self._queue.put(line)

    def try_dequeue(self) -> str | None:
        """Remove and return the head, or ``None`` when the queue is empty.

        Only the consumer thread calls this.
        """

        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    @property
    def pending(self) -> int:
        """Return the approximate number of queued lines."""

        return self._queue.qsize()


class WakeSignal:
    """Binary set/wait signal whose pending wake-ups coalesce.

    Any number of :meth:`set` calls issued before the consumer reaches
    :meth:`wait` produce a single wake-up. :meth:`request_shutdown` records the
    lifecycle change under the same lock before waking the consumer, so the
    consumer observes the request together with the wake-up that carries it.

    Examples
    --------
    >>> signal = WakeSignal()
    >>> signal.set()
    >>> signal.set()
    >>> signal.wait()
    False
    >>> signal.is_set
    False
    >>> signal.request_shutdown()
    >>> signal.wait()
    True
    """

    def __init__(self) -> None:
        self._condition = threading.Condition(threading.Lock())
        self._pending = False
        self._shutdown = False

    def set(self) -> None:
        """Mark a wake-up as pending and release the waiting consumer."""

        with self._condition:
            self._pending = True
            self._condition.notify()

    def request_shutdown(self) -> None:
        """Record the shutdown request and wake the consumer."""

        with self._condition:
            self._shutdown = True
            self._pending = True
            self._condition.notify()

    def wait(self) -> bool:
        """Block until a wake-up is pending, consume it, and report shutdown.

        Returns
        -------
        bool
            ``True`` when shutdown had been requested at the time the wake-up
            was consumed.
        """

        with self._condition:
            self._condition.wait_for(lambda: self._pending)
            self._pending = False
            return self._shutdown

    @property
    def is_set(self) -> bool:
        """Return ``True`` while a wake-up is pending."""

        with self._condition:
            return self._pending

    @property
    def shutdown_requested(self) -> bool:
        with self._condition:
            return self._shutdown


__all__ = ["HandoffQueue", "WakeSignal"]
