"""Port describing the producer-facing surface of an asynchronous writer."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TextWriterPort(Protocol):
    """Bridge between producer threads and the background consumer."""

    def enqueue(self, line: str) -> None:
        """Hand ``line`` to the consumer without blocking."""

    def dispose(self) -> None:
        """Stop the consumer after its final drain; idempotent."""


__all__ = ["TextWriterPort"]
