"""Exceptions raised by the asynchronous writer."""

from __future__ import annotations


class WriterFailedError(RuntimeError):
    """Raised by ``dispose`` when the sink terminated the consumer loop.

    The original sink exception is available as ``__cause__`` and through
    :attr:`lib_async_writer.adapters.writer.AsyncStringWriter.failure`.
    """


__all__ = ["WriterFailedError"]
