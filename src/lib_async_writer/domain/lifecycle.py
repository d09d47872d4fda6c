"""Lifecycle states of an asynchronous writer.

Purpose
-------
Name the three phases a writer passes through so adapters, snapshots, and
tests speak the same vocabulary.

Contents
--------
* :class:`WriterState` enum with the predicate used by ``dispose``.

System Role
-----------
Owned by :class:`lib_async_writer.adapters.writer.AsyncStringWriter`; written
once by the disposing thread (RUNNING -> DISPOSING) and once by the consumer
thread (-> STOPPED).
"""

from __future__ import annotations

from enum import Enum


class WriterState(Enum):
    """Lifecycle of a writer, from construction to consumer exit."""

    RUNNING = "running"
    DISPOSING = "disposing"
    STOPPED = "stopped"

    @property
    def accepts_work(self) -> bool:
        """Return ``True`` while enqueued lines are still guaranteed to drain."""

        return self is WriterState.RUNNING


__all__ = ["WriterState"]
