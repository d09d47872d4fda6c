"""Observable "flush in progress" gate.

Purpose
-------
Let external code wait until the consumer is not in the middle of a drain
cycle, e.g. before reading side effects produced by the sink.

Contents
--------
* :class:`FlushGate` - two-state gate (idle / busy) backed by
  :class:`threading.Event`.

System Role
-----------
Closed and opened by the consumer loop only. Purely observable: nothing in
the writer schedules around it.
"""

from __future__ import annotations

import threading


class FlushGate:
    """Idle/busy gate for drain cycles; starts idle.

    Examples
    --------
    >>> gate = FlushGate()
    >>> gate.is_idle
    True
    >>> gate.close()
    >>> gate.wait(timeout=0.0)
    False
    >>> gate.open()
    >>> gate.wait(timeout=0.0)
    True
    """

    def __init__(self) -> None:
        self._idle = threading.Event()
        self._idle.set()

    @property
    def is_idle(self) -> bool:
        """Return ``True`` when no drain cycle is executing."""

        return self._idle.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the gate is idle or ``timeout`` elapses.

        Returns ``True`` when the gate was observed idle.
        """

        return self._idle.wait(timeout)

    def close(self) -> None:
        """Mark a drain cycle as in progress."""

        self._idle.clear()

    def open(self) -> None:
        """Mark the gate idle again."""

        self._idle.set()


__all__ = ["FlushGate"]
