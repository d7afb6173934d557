"""Flush controller deciding between synchronous and buffered writes.

Purpose
-------
Encode every log call into a point and either write it straight to the sink
or park it in a :class:`RingBuffer` that is drained as one batch when it runs
full. A single lock serialises buffered writes so the sink never receives two
overlapping batches from this writer.

Contents
--------
* :class:`BufferedPointWriter` – the controller.
* :func:`coerce_interval` – normalises seconds/``timedelta`` inputs.
* :func:`create_point_writer` – factory used by the composition root.

System Role
-----------
Application-layer core shared by every :class:`InfluxLogger` derived from the
same runtime.

Alignment Notes
---------------
Buffered writes hold the lock across the capacity check, the drain-and-write
and the push, so no point slips in between a flush decision and its push.
Unbuffered writes bypass the lock; the sink must tolerate concurrent calls.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping, Sequence
from datetime import timedelta
from typing import Any

from lib_log_influx.application.ports.sink import PointSinkPort
from lib_log_influx.application.ports.time import ClockPort
from lib_log_influx.domain.errors import ConfigurationError, SinkWriteError
from lib_log_influx.domain.levels import LogLevel
from lib_log_influx.domain.points import LogPoint
from lib_log_influx.domain.ring_buffer import RingBuffer

from .encode_point import PointEncoder

LOGGER = logging.getLogger(__name__)

DiagnosticHook = Callable[[str, dict[str, Any]], None] | None


def coerce_interval(value: timedelta | float | int | None) -> timedelta:
    """Return ``value`` as a :class:`timedelta`; ``None`` means zero.

    Examples
    --------
    >>> coerce_interval(1.5)
    datetime.timedelta(seconds=1, microseconds=500000)
    >>> coerce_interval(None)
    datetime.timedelta(0)
    """
    if value is None:
        return timedelta(0)
    if isinstance(value, timedelta):
        return value
    return timedelta(seconds=float(value))


class BufferedPointWriter:
    """Write log-derived points to a sink, batching them when configured.

    Parameters
    ----------
    sink:
        Adapter implementing :class:`PointSinkPort`.
    encoder:
        :class:`PointEncoder` bound to the application identity.
    clock:
        Provider of timezone-aware timestamps.
    flush_interval:
        Zero disables buffering; negative values are rejected.
    buffer_capacity:
        Zero disables buffering; negative values are rejected.
    diagnostic:
        Optional callback receiving pipeline events.
    """

    def __init__(
        self,
        *,
        sink: PointSinkPort,
        encoder: PointEncoder,
        clock: ClockPort,
        flush_interval: timedelta | float | int | None = None,
        buffer_capacity: int = 0,
        diagnostic: DiagnosticHook = None,
    ) -> None:
        interval = coerce_interval(flush_interval)
        if interval < timedelta(0):
            raise ConfigurationError("invalid flush interval")
        if buffer_capacity < 0:
            raise ConfigurationError("buffer capacity must not be negative")
        self._sink = sink
        self._encoder = encoder
        self._clock = clock
        self._flush_interval = interval
        self._diagnostic = diagnostic
        self._buffer: RingBuffer[LogPoint] | None = None
        if buffer_capacity > 0:
            self._buffer = RingBuffer(capacity=buffer_capacity, full_policy="error")
        self._flush_lock = threading.Lock()

    @property
    def flush_interval(self) -> timedelta:
        return self._flush_interval

    @property
    def buffer_capacity(self) -> int:
        return self._buffer.capacity if self._buffer is not None else 0

    @property
    def buffering(self) -> bool:
        """Return ``True`` when writes are parked in the ring buffer."""

        return self._buffer is not None and self._flush_interval > timedelta(0)

    @property
    def pending(self) -> int:
        """Return the number of points waiting for the next flush."""

        if self._buffer is None:
            return 0
        with self._flush_lock:
            return len(self._buffer)

    @property
    def sink(self) -> PointSinkPort:
        return self._sink

    def write(self, level: LogLevel, args: Sequence[Any], fields: Mapping[str, Any] | None) -> None:
        """Encode one log call and write or buffer the resulting point.

        Raises
        ------
        SinkWriteError
            When the synchronous write or a forced drain fails.
        """
        point = self._encoder.encode(level, args, fields, self._clock.now())
        if not self.buffering:
            self._write_points([point])
            return
        self._write_buffered(point)

    def flush(self) -> int:
        """Drain pending points and write them as one batch.

        Returns the number of points written (zero when nothing was pending).
        """
        if self._buffer is None:
            return 0
        with self._flush_lock:
            return self._flush_buffer()

    def _write_buffered(self, point: LogPoint) -> None:
        buffer = self._buffer
        assert buffer is not None
        with self._flush_lock:
            if buffer.is_full:
                self._flush_buffer()
            buffer.push(point)

    def _flush_buffer(self) -> int:
        """Drain and write the buffer; caller must hold the flush lock."""
        buffer = self._buffer
        assert buffer is not None
        points = buffer.drain()
        if not points:
            return 0
        try:
            self._write_points(points)
        except SinkWriteError as exc:
            LOGGER.error("Dropping %d buffered points after sink failure", len(points), exc_info=exc)
            self._emit_diagnostic("batch_dropped", {"points": len(points), "exception": repr(exc.__cause__ or exc)})
            raise
        self._emit_diagnostic("buffer_flushed", {"points": len(points)})
        return len(points)

    def _write_points(self, points: list[LogPoint]) -> None:
        try:
            self._sink.write_points(points)
        except SinkWriteError as exc:
            self._emit_diagnostic("sink_write_failed", {"points": len(points), "exception": repr(exc)})
            raise
        except Exception as exc:
            self._emit_diagnostic("sink_write_failed", {"points": len(points), "exception": repr(exc)})
            raise SinkWriteError(f"failed to write {len(points)} point(s): {exc}", batch_size=len(points)) from exc

    def _emit_diagnostic(self, name: str, payload: dict[str, Any]) -> None:
        """Invoke the diagnostic hook while guarding against callback failures."""

        if self._diagnostic is None:
            return
        try:
            self._diagnostic(name, payload)
        except Exception as diagnostic_exc:  # noqa: BLE001
            LOGGER.error("Diagnostic hook raised while reporting %s", name, exc_info=diagnostic_exc)


def create_point_writer(
    *,
    sink: PointSinkPort,
    encoder: PointEncoder,
    clock: ClockPort,
    flush_interval: timedelta | float | int | None,
    buffer_capacity: int,
    diagnostic: DiagnosticHook = None,
) -> BufferedPointWriter:
    """Build the writer shared by every logger of one runtime."""

    return BufferedPointWriter(
        sink=sink,
        encoder=encoder,
        clock=clock,
        flush_interval=flush_interval,
        buffer_capacity=buffer_capacity,
        diagnostic=diagnostic,
    )


__all__ = ["BufferedPointWriter", "DiagnosticHook", "coerce_interval", "create_point_writer"]
