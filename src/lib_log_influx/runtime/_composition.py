"""Runtime composition helpers wiring domain, application, and adapters.

Purpose
-------
Translate :class:`RuntimeSettings` into the live :class:`LoggingRuntime`
singleton. The helpers here keep wiring small, declarative, and testable.

Contents
--------
* Sink selection (InfluxDB by default, injectable factory for tests/dry runs).
* Writer, scheduler and shutdown constructors.

System Role
-----------
Anchors the clean-architecture boundary: outer adapters are chosen here,
while :mod:`lib_log_influx.runtime` exposes only the façade.
"""

from __future__ import annotations

from datetime import timedelta

from lib_log_influx.adapters import FlushTicker, InfluxSinkAdapter, SystemClock
from lib_log_influx.application.ports import ClockPort, FlushSchedulerPort, PointSinkPort
from lib_log_influx.application.use_cases.encode_point import PointEncoder
from lib_log_influx.application.use_cases.shutdown import create_shutdown
from lib_log_influx.application.use_cases.write_point import BufferedPointWriter, create_point_writer

from ._logger import InfluxLogger
from ._settings import RuntimeSettings
from ._state import LoggingRuntime


__all__ = ["build_runtime", "build_writer"]


def build_runtime(settings: RuntimeSettings) -> LoggingRuntime:
    """Assemble the forwarding runtime from resolved settings."""

    writer = build_writer(settings)
    scheduler = _create_scheduler(writer, settings)
    shutdown_async = create_shutdown(writer=writer, scheduler=scheduler)
    if scheduler is not None:
        scheduler.start()

    return LoggingRuntime(
        writer=writer,
        root_logger=InfluxLogger(writer, termination=settings.termination),
        shutdown_async=shutdown_async,
        scheduler=scheduler,
        app_name=settings.app_name,
        host=settings.host,
        proc_id=settings.proc_id,
        measurement=settings.measurement,
    )


def build_writer(settings: RuntimeSettings, *, clock: ClockPort | None = None) -> BufferedPointWriter:
    """Create the sink, encoder and writer described by ``settings``.

    Raises
    ------
    ConfigurationError
        When the sink connection cannot be parsed or the client refuses it.
    """

    sink = _select_sink(settings)
    encoder = PointEncoder(
        app_name=settings.app_name,
        host=settings.host,
        proc_id=settings.proc_id,
        measurement=settings.measurement,
    )
    return create_point_writer(
        sink=sink,
        encoder=encoder,
        clock=clock or SystemClock(),
        flush_interval=settings.flush_interval,
        buffer_capacity=settings.buffer_size,
        diagnostic=settings.diagnostic_hook,
    )


def _select_sink(settings: RuntimeSettings) -> PointSinkPort:
    """Resolve the sink adapter, honouring an injected factory first."""

    if settings.sink_factory is not None:
        return settings.sink_factory(settings.connection)
    return InfluxSinkAdapter(settings.connection)


def _create_scheduler(writer: BufferedPointWriter, settings: RuntimeSettings) -> FlushSchedulerPort | None:
    """Build the periodic flusher when enabled and buffering is active."""

    if not settings.periodic_flush or not writer.buffering:
        return None
    if settings.flush_interval <= timedelta(0):
        return None
    return FlushTicker(
        flush=writer.flush,
        interval=settings.flush_interval.total_seconds(),
        diagnostic=settings.diagnostic_hook,
    )
