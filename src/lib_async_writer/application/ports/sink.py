"""Sink port describing where flushed batches go.

Purpose
-------
Define the abstraction for callables that receive flushed batches of text,
so the consumer loop depends on a narrow protocol rather than on files,
sockets, or consoles.

Contents
--------
* :class:`SinkPort` - runtime-checkable protocol with a single ``__call__``.

System Role
-----------
Plain functions, bound methods, and the adapters in
:mod:`lib_async_writer.adapters.sinks` all satisfy this port.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class SinkPort(Protocol):
    """Receive one flushed batch of text."""

    def __call__(self, text: str) -> None:
        """Consume ``text``: lines joined by the writer's separator, no trailing separator."""


__all__ = ["SinkPort"]
