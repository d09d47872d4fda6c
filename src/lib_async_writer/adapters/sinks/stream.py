"""Sinks writing batches to text streams and files.

Purpose
-------
Ship the two most common destinations for flushed batches so callers do not
have to hand-roll them: an already-open text stream and an append-only file.

Contents
--------
* :class:`StreamSink` - write each batch to a text stream and flush it.
* :class:`FileSink` - append each batch to a file on disk.

System Role
-----------
Both satisfy :class:`lib_async_writer.application.ports.sink.SinkPort` and run
on the writer's consumer thread.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TextIO

from lib_async_writer.application.ports.sink import SinkPort


class StreamSink(SinkPort):
    """Write each batch followed by ``terminator`` to ``stream``.

    Examples
    --------
    >>> from io import StringIO
    >>> stream = StringIO()
    >>> sink = StreamSink(stream, terminator="\\n")
    >>> sink("a\\nb")
    >>> stream.getvalue()
    'a\\nb\\n'
    """

    def __init__(self, stream: TextIO, *, terminator: str = os.linesep) -> None:
        self._stream = stream
        self._terminator = terminator

    def __call__(self, text: str) -> None:
        self._stream.write(text)
        self._stream.write(self._terminator)
        self._stream.flush()


class FileSink(SinkPort):
    """Append each batch followed by ``terminator`` to ``path``.

    The file is opened per batch so no handle outlives the writer.
    """

    def __init__(self, path: Path | str, *, encoding: str = "utf-8", terminator: str = "\n") -> None:
        self._path = Path(path)
        self._encoding = encoding
        self._terminator = terminator

    @property
    def path(self) -> Path:
        return self._path

    def __call__(self, text: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("a", encoding=self._encoding, newline="") as fh:
            fh.write(text)
            fh.write(self._terminator)


__all__ = ["FileSink", "StreamSink"]
