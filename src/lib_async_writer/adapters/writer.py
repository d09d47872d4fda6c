"""Thread-based asynchronous string writer.

Purpose
-------
Decouple producers from a slow sink: producers enqueue lines from any thread
while one background consumer batches them and forwards each batch to the
sink.

Contents
--------
* :class:`AsyncStringWriter` - consumer loop and shutdown protocol.
* :class:`WriterSnapshot` - immutable view over a writer's progress.

System Role
-----------
Composes the handoff queue, wake signal, flush gate, batch buffer, and the
drain-cycle use case. ``dispose`` drains what producers handed over and blocks
until the consumer thread has exited.

Alignment Notes
---------------
A wake-up that carries the shutdown request still runs one drain cycle when
``final_drain`` is enabled (the default). With ``final_drain=False`` the
consumer exits as soon as it observes the request and lines it had not yet
drained are dropped.
"""

from __future__ import annotations

import asyncio
import logging
import os
import threading
from dataclasses import dataclass
from types import TracebackType
from typing import TYPE_CHECKING, Any, Callable

from lib_async_writer.adapters.flush_gate import FlushGate
from lib_async_writer.adapters.handoff import HandoffQueue, WakeSignal
from lib_async_writer.application.ports.sink import SinkPort
from lib_async_writer.application.ports.writer import TextWriterPort
from lib_async_writer.application.use_cases.drain import create_drain_cycle
from lib_async_writer.domain.batch_buffer import BatchBuffer
from lib_async_writer.domain.lifecycle import WriterState
from lib_async_writer.errors import WriterFailedError

if TYPE_CHECKING:
    from lib_async_writer.config import WriterSettings


LOGGER = logging.getLogger(__name__)

DiagnosticHook = Callable[[str, dict[str, Any]], None] | None


@dataclass(frozen=True)
class WriterSnapshot:
    """Point-in-time view over a writer."""

    state: WriterState
    pending: int
    lines_written: int
    batches_flushed: int
    flush_in_progress: bool
    failed: bool


class AsyncStringWriter(TextWriterPort):
    """Batch lines on a background thread and hand each batch to ``sink``.

    Examples
    --------
    >>> batches = []
    >>> writer = AsyncStringWriter(batches.append, newline="\\n")
    >>> for line in ("a", "b", "c"):
    ...     writer.enqueue(line)
    >>> writer.dispose()
    >>> "\\n".join(batches)
    'a\\nb\\nc'
    >>> writer.state
    <WriterState.STOPPED: 'stopped'>
    """

    def __init__(
        self,
        sink: SinkPort,
        *,
        capacity: int | None = None,
        newline: str = os.linesep,
        final_drain: bool = True,
        diagnostic: DiagnosticHook = None,
        thread_name: str | None = None,
    ) -> None:
        """Create the writer and start its consumer thread.

        Parameters
        ----------
        sink:
            Callable invoked on the consumer thread with each flushed batch.
        capacity:
            Maximum batch length in characters, separators included. ``None``
            flushes only at the end of each drain cycle.
        newline:
            Separator placed between lines of a batch.
        final_drain:
            When ``True`` the wake-up that carries the shutdown request still
            drains the queue before the consumer exits.
        diagnostic:
            Optional hook receiving named events (``writer_sink_error``,
            ``writer_already_disposed``) with a payload mapping.
        thread_name:
            Name of the consumer thread.
        """
        self._sink = sink
        self._buffer = BatchBuffer(capacity=capacity, newline=newline)
        self._queue = HandoffQueue()
        self._wake = WakeSignal()
        self._flush_gate = FlushGate()
        self._completed = threading.Event()
        self._dispose_lock = threading.Lock()
        self._dispose_requested = False
        self._state = WriterState.RUNNING
        self._final_drain = final_drain
        self._diagnostic = diagnostic
        self._failure: BaseException | None = None
        self._lines_written = 0
        self._batches_flushed = 0
        self._drain = create_drain_cycle(
            dequeue=self._queue.try_dequeue,
            buffer=self._buffer,
            sink=sink,
            on_flush=self._record_flush,
        )
        self._thread = threading.Thread(
            target=self._run,
            name=thread_name or f"{type(self).__name__}-consumer",
            daemon=True,
        )
        self._thread.start()

    @classmethod
    def from_settings(
        cls,
        sink: SinkPort,
        settings: "WriterSettings",
        *,
        diagnostic: DiagnosticHook = None,
    ) -> "AsyncStringWriter":
        """Build a writer from :class:`lib_async_writer.config.WriterSettings`."""

        return cls(
            sink,
            capacity=settings.capacity,
            newline=settings.newline,
            final_drain=settings.final_drain,
            diagnostic=diagnostic,
            thread_name=settings.thread_name,
        )

    def enqueue(self, line: str) -> None:
        """Hand ``line`` to the consumer.

        Never blocks and never raises. Lines enqueued after :meth:`dispose`
        returned are accepted but will not reach the sink.
        """
        self._queue.enqueue(line)
        self._wake.set()

    def dispose(self) -> None:
        """Request shutdown and block until the consumer finished its final drain.

        Only the first call waits; it returns once the consumer thread has
        exited. Later calls return immediately and log the repeated attempt.

        Raises
        ------
        RuntimeError
            When called on the consumer thread (from inside the sink), which
            would otherwise wait for itself forever.
        WriterFailedError
            When the sink raised and terminated the consumer loop.
        """
        if threading.current_thread() is self._thread:
            raise RuntimeError(f"{type(self).__name__}.dispose() cannot be called from the sink")

        with self._dispose_lock:
            already_disposed = self._dispose_requested
            self._dispose_requested = True
            if not already_disposed and self._state.accepts_work:
                self._state = WriterState.DISPOSING

        if already_disposed:
            LOGGER.debug("Attempting to dispose of already disposed %s", type(self).__name__)
            self._emit_diagnostic("writer_already_disposed", {"state": self._state.value})
            return

        self._wake.request_shutdown()
        self._completed.wait()
        self._thread.join()

        failure = self._failure
        if failure is not None:
            raise WriterFailedError(f"{type(self).__name__} sink failed: {failure!r}") from failure

    async def adispose(self) -> None:
        """Run :meth:`dispose` on a worker thread so the event loop stays responsive."""

        await asyncio.to_thread(self.dispose)

    def wait_until_idle(self, timeout: float | None = None) -> bool:
        """Block until no drain cycle is in progress or ``timeout`` elapses.

        Returns ``True`` when the flush gate was observed idle. An idle gate
        says nothing about lines still waiting for the consumer to wake.
        """

        return self._flush_gate.wait(timeout)

    @property
    def flush_gate(self) -> FlushGate:
        """Return the gate signalling whether a drain cycle is executing."""

        return self._flush_gate

    @property
    def state(self) -> WriterState:
        """Return the current lifecycle state."""

        return self._state

    @property
    def failure(self) -> BaseException | None:
        """Return the exception that terminated the consumer loop, if any."""

        return self._failure

    @property
    def capacity(self) -> int | None:
        return self._buffer.capacity

    @property
    def newline(self) -> str:
        return self._buffer.newline

    def snapshot(self) -> WriterSnapshot:
        """Return a read-only view over progress counters and state."""

        return WriterSnapshot(
            state=self._state,
            pending=self._queue.pending,
            lines_written=self._lines_written,
            batches_flushed=self._batches_flushed,
            flush_in_progress=not self._flush_gate.is_idle,
            failed=self._failure is not None,
        )

    def __enter__(self) -> "AsyncStringWriter":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Dispose the writer; an exception from the block wins over a sink failure.

        The sink failure was already logged by the consumer and stays
        available through :attr:`failure`.
        """
        try:
            self.dispose()
        except WriterFailedError:
            if exc_type is None:
                raise

    def _run(self) -> None:
        """Consumer loop: wait, drain, flush, until shutdown is observed."""
        try:
            while True:
                shutting_down = self._wake.wait()
                if shutting_down and not self._final_drain:
                    break
                self._flush_gate.close()
                self._drain()
                if shutting_down:
                    break
                self._flush_gate.open()
        except Exception as exc:  # noqa: BLE001
            self._failure = exc
            self._report_sink_exception(exc)
        finally:
            self._flush_gate.open()
            with self._dispose_lock:
                self._state = WriterState.STOPPED
            self._completed.set()

    def _record_flush(self, lines: int) -> None:
        self._lines_written += lines
        self._batches_flushed += 1

    def _report_sink_exception(self, exc: Exception) -> None:
        """Log and surface the sink failure that stopped the consumer."""

        LOGGER.error("Writer sink raised an exception; consumer stopped", exc_info=exc)
        self._emit_diagnostic(
            "writer_sink_error",
            {
                "exception": repr(exc),
                "pending": self._queue.pending,
                "batches_flushed": self._batches_flushed,
            },
        )

    def _emit_diagnostic(self, name: str, payload: dict[str, Any]) -> None:
        """Invoke the diagnostic hook while guarding against callback failures."""

        if self._diagnostic is None:
            return
        try:
            self._diagnostic(name, payload)
        except Exception as diagnostic_exc:  # noqa: BLE001
            LOGGER.error("Writer diagnostic hook raised while reporting %s", name, exc_info=diagnostic_exc)


__all__ = ["AsyncStringWriter", "WriterSnapshot"]
