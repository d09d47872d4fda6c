from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterable

import pytest

from lib_async_writer.application.use_cases.drain import create_drain_cycle
from lib_async_writer.domain.batch_buffer import BatchBuffer
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


def build_drain(lines: Iterable[str], *, capacity: int | None, newline: str = "\n") -> tuple[Callable[[], int], list[str], deque[str]]:
    pending: deque[str] = deque(lines)
    batches: list[str] = []
    drain = create_drain_cycle(
        dequeue=lambda: pending.popleft() if pending else None,
        buffer=BatchBuffer(capacity=capacity, newline=newline),
        sink=batches.append,
    )
    return drain, batches, pending


def test_single_batch_when_capacity_holds_everything() -> None:
    drain, batches, _ = build_drain(["a", "b", "c"], capacity=100)

    assert drain() == 3
    assert batches == ["a\nb\nc"]


def test_flushes_before_append_that_would_overflow() -> None:
    drain, batches, _ = build_drain(["a", "b"], capacity=2)

    drain()

    assert batches == ["a", "b"]


def test_exact_fit_stays_in_one_batch() -> None:
    drain, batches, _ = build_drain(["a", "b"], capacity=3)

    drain()

    assert batches == ["a\nb"]


def test_empty_queue_does_not_call_sink() -> None:
    drain, batches, _ = build_drain([], capacity=10)

    assert drain() == 0
    assert batches == []


def test_single_line_flushes_without_reaching_capacity() -> None:
    drain, batches, _ = build_drain(["only"], capacity=1_000)

    drain()

    assert batches == ["only"]


def test_oversized_line_is_flushed_alone() -> None:
    drain, batches, _ = build_drain(["ab", "0123456789", "cd"], capacity=5)

    drain()

    assert batches == ["ab", "0123456789", "cd"]


def test_oversized_first_line_does_not_produce_empty_batch() -> None:
    drain, batches, _ = build_drain(["0123456789"], capacity=3)

    drain()

    assert batches == ["0123456789"]


@pytest.mark.parametrize("capacity", [1, 4, 7, 16, 64])
def test_batches_respect_capacity_and_preserve_order(capacity: int) -> None:
    lines = [f"l{index}" for index in range(40)]
    drain, batches, _ = build_drain(lines, capacity=capacity)

    drain()

    assert [line for batch in batches for line in batch.split("\n")] == lines
    for batch in batches:
        assert len(batch) <= capacity or "\n" not in batch


def test_drain_reuses_buffer_across_cycles() -> None:
    drain, batches, pending = build_drain(["a"], capacity=10)

    drain()
    pending.extend(["b", "c"])
    drain()

    assert batches == ["a", "b\nc"]


def test_on_flush_reports_lines_per_batch() -> None:
    pending = deque(["a", "b", "c"])
    flushed: list[int] = []
    drain = create_drain_cycle(
        dequeue=lambda: pending.popleft() if pending else None,
        buffer=BatchBuffer(capacity=3, newline="\n"),
        sink=lambda text: None,
        on_flush=flushed.append,
    )

    drain()

    assert flushed == [2, 1]


def test_sink_failure_propagates_out_of_drain() -> None:
    def broken_sink(text: str) -> None:
        raise RuntimeError(f"cannot write {text}")

    pending = deque(["a"])
    drain = create_drain_cycle(
        dequeue=lambda: pending.popleft() if pending else None,
        buffer=BatchBuffer(newline="\n"),
        sink=broken_sink,
    )

    with pytest.raises(RuntimeError, match="cannot write a"):
        drain()
