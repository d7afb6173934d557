from __future__ import annotations

import threading
import time
from collections.abc import Sequence
from datetime import timedelta

import pytest

from lib_log_influx.application.use_cases.encode_point import PointEncoder
from lib_log_influx.application.use_cases.write_point import BufferedPointWriter, coerce_interval
from lib_log_influx.domain.errors import ConfigurationError, SinkWriteError
from lib_log_influx.domain.levels import LogLevel
from lib_log_influx.domain.points import LogPoint
from tests.doubles import RecordingSink, SteppingClock


def build_writer(sink, clock, *, interval: float = 60.0, capacity: int = 0, diagnostic=None) -> BufferedPointWriter:
    return BufferedPointWriter(
        sink=sink,
        encoder=PointEncoder(app_name="tests", host="localhost", proc_id="1"),
        clock=clock,
        flush_interval=interval,
        buffer_capacity=capacity,
        diagnostic=diagnostic,
    )


@pytest.mark.parametrize("interval, capacity", [(0, 5), (60.0, 0), (0, 0)])
def test_unbuffered_writes_send_one_point_per_call(sink: RecordingSink, clock: SteppingClock, interval: float, capacity: int) -> None:
    writer = build_writer(sink, clock, interval=interval, capacity=capacity)

    for index in range(3):
        writer.write(LogLevel.INFO, [f"msg-{index}"], None)

    assert not writer.buffering
    assert sink.messages == [["msg-0"], ["msg-1"], ["msg-2"]]
    assert writer.pending == 0


def test_capacity_three_flushes_once_after_fourth_write(sink: RecordingSink, clock: SteppingClock) -> None:
    writer = build_writer(sink, clock, capacity=3)

    for index in range(4):
        writer.write(LogLevel.INFO, [f"msg-{index}"], None)

    assert sink.messages == [["msg-0", "msg-1", "msg-2"]]
    assert writer.pending == 1


def test_buffered_points_keep_their_own_timestamps(sink: RecordingSink, clock: SteppingClock) -> None:
    writer = build_writer(sink, clock, capacity=2)
    for index in range(3):
        writer.write(LogLevel.INFO, [index], None)

    first, second = sink.batches[0]
    assert second.timestamp - first.timestamp == timedelta(seconds=1)


def test_unbuffered_sink_error_propagates_as_sink_write_error(clock: SteppingClock) -> None:
    sink = RecordingSink(fail_with=ConnectionError("influx down"))
    writer = build_writer(sink, clock, interval=0)

    with pytest.raises(SinkWriteError) as excinfo:
        writer.write(LogLevel.ERROR, ["boom"], None)

    assert excinfo.value.batch_size == 1
    assert isinstance(excinfo.value.__cause__, ConnectionError)


def test_failed_drain_drops_batch_and_does_not_push(clock: SteppingClock) -> None:
    sink = RecordingSink()
    events: list[tuple[str, dict]] = []
    writer = build_writer(sink, clock, capacity=2, diagnostic=lambda name, payload: events.append((name, payload)))
    writer.write(LogLevel.INFO, ["a"], None)
    writer.write(LogLevel.INFO, ["b"], None)

    sink.fail_with = TimeoutError("slow")
    with pytest.raises(SinkWriteError):
        writer.write(LogLevel.INFO, ["c"], None)

    assert writer.pending == 0
    assert [name for name, _ in events] == ["sink_write_failed", "batch_dropped"]
    assert events[1][1]["points"] == 2

    sink.fail_with = None
    writer.write(LogLevel.INFO, ["d"], None)
    assert writer.pending == 1


def test_sink_raised_write_error_is_reported_with_its_exception(clock: SteppingClock) -> None:
    sink = RecordingSink(fail_with=SinkWriteError("quota exceeded", batch_size=1))
    events: list[tuple[str, dict]] = []
    writer = build_writer(sink, clock, interval=0, diagnostic=lambda name, payload: events.append((name, payload)))

    with pytest.raises(SinkWriteError, match="quota exceeded"):
        writer.write(LogLevel.ERROR, ["x"], None)

    assert [name for name, _ in events] == ["sink_write_failed"]
    assert "quota exceeded" in events[0][1]["exception"]


def test_flush_writes_pending_points(sink: RecordingSink, clock: SteppingClock) -> None:
    writer = build_writer(sink, clock, capacity=5)
    writer.write(LogLevel.INFO, ["a"], None)
    writer.write(LogLevel.WARN, ["b"], None)

    assert writer.flush() == 2
    assert writer.flush() == 0
    assert sink.messages == [["a", "b"]]


def test_flush_without_buffer_is_noop(sink: RecordingSink, clock: SteppingClock) -> None:
    writer = build_writer(sink, clock, capacity=0)
    assert writer.flush() == 0
    assert sink.batches == []


@pytest.mark.parametrize("kwargs", [{"interval": -1.0}, {"capacity": -1}])
def test_invalid_configuration_is_rejected(sink: RecordingSink, clock: SteppingClock, kwargs: dict) -> None:
    with pytest.raises(ConfigurationError):
        build_writer(sink, clock, **kwargs)


def test_diagnostic_hook_failures_are_contained(sink: RecordingSink, clock: SteppingClock) -> None:
    def explode(name: str, payload: dict) -> None:
        raise RuntimeError("hook broke")

    writer = build_writer(sink, clock, capacity=1, diagnostic=explode)
    writer.write(LogLevel.INFO, ["a"], None)
    writer.write(LogLevel.INFO, ["b"], None)
    assert sink.messages == [["a"]]


def test_coerce_interval_accepts_seconds_and_timedelta() -> None:
    assert coerce_interval(2) == timedelta(seconds=2)
    assert coerce_interval(timedelta(milliseconds=5)) == timedelta(milliseconds=5)


class _ReentrancyCheckingSink:
    """Sink that fails the test when two batches overlap."""

    def __init__(self) -> None:
        self.batches: list[list[LogPoint]] = []
        self.overlaps = 0
        self._active = False
        self._guard = threading.Lock()

    def write_points(self, points: Sequence[LogPoint]) -> None:
        with self._guard:
            if self._active:
                self.overlaps += 1
            self._active = True
        time.sleep(0.002)
        self.batches.append(list(points))
        with self._guard:
            self._active = False

    def close(self) -> None:
        return None


def test_concurrent_buffered_writes_never_overlap(clock: SteppingClock) -> None:
    sink = _ReentrancyCheckingSink()
    capacity = 4
    writer = build_writer(sink, clock, capacity=capacity)
    threads_count = 8
    writes_per_thread = 25
    barrier = threading.Barrier(threads_count)

    def worker(thread_index: int) -> None:
        barrier.wait()
        for index in range(writes_per_thread):
            writer.write(LogLevel.INFO, [f"t{thread_index}-{index}"], None)

    threads = [threading.Thread(target=worker, args=(index,)) for index in range(threads_count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10)

    total = threads_count * writes_per_thread
    assert sink.overlaps == 0
    assert all(len(batch) == capacity for batch in sink.batches)
    written = sum(len(batch) for batch in sink.batches)
    assert written + writer.pending == total
    messages = [point.message for batch in sink.batches for point in batch]
    assert len(set(messages)) == len(messages)
