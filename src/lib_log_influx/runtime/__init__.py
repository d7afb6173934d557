"""Runtime façade that wires the InfluxDB forwarding pipeline.

Purpose
-------
Expose a stable entry point (`init`, `get`, `flush`, `shutdown`) that host
applications use instead of importing the inner layers directly, plus the
standalone constructors :func:`new_logger` and :func:`new_buffered_logger`
for callers that manage the logger lifetime themselves.

Contents
--------
* ``init`` – composition root installing the runtime singleton.
* ``get`` – root :class:`InfluxLogger`, optionally carrying fields.
* ``flush`` – write buffered points now.
* ``shutdown`` / ``shutdown_async`` – final flush and sink teardown.
* ``new_logger`` / ``new_buffered_logger`` – singleton-free constructors.
* ``summary_info`` – metadata banner for the CLI.

System Role
-----------
Forms the outer shell: host code depends on this module and on
:class:`InfluxLogger`, never on adapters or use cases.
"""

from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Mapping

from lib_log_influx.application.ports.termination import TerminationPort
from lib_log_influx.application.use_cases.write_point import coerce_interval
from lib_log_influx.domain import DEFAULT_MEASUREMENT, ConfigurationError

from ._composition import build_runtime, build_writer
from ._logger import Fields, InfluxLogger
from ._settings import DiagnosticHook, RuntimeSettings, SinkFactory, build_runtime_settings
from ._state import LoggingRuntime, clear_runtime, current_runtime, is_initialised, set_runtime


@dataclass(frozen=True)
class RuntimeSnapshot:
    """Immutable view over the active runtime."""

    app_name: str
    host: str
    proc_id: str
    measurement: str
    flush_interval: timedelta
    buffer_capacity: int
    buffering: bool
    pending: int
    periodic_flush: bool


def inspect_runtime() -> RuntimeSnapshot:
    """Return a read-only snapshot of the current runtime state."""

    runtime = current_runtime()
    writer = runtime.writer
    return RuntimeSnapshot(
        app_name=runtime.app_name,
        host=runtime.host,
        proc_id=runtime.proc_id,
        measurement=runtime.measurement,
        flush_interval=writer.flush_interval,
        buffer_capacity=writer.buffer_capacity,
        buffering=writer.buffering,
        pending=writer.pending,
        periodic_flush=runtime.scheduler is not None,
    )


__all__ = [
    "Fields",
    "InfluxLogger",
    "RuntimeSnapshot",
    "flush",
    "get",
    "init",
    "inspect_runtime",
    "is_initialised",
    "new_buffered_logger",
    "new_logger",
    "shutdown",
    "shutdown_async",
    "summary_info",
]


def init(
    *,
    connection: str | None = None,
    app_name: str,
    host: str | None = None,
    proc_id: str | None = None,
    measurement: str = DEFAULT_MEASUREMENT,
    flush_interval: timedelta | float | None = None,
    buffer_size: int = 0,
    periodic_flush: bool = False,
    diagnostic_hook: DiagnosticHook = None,
    sink_factory: SinkFactory | None = None,
    termination: TerminationPort | None = None,
) -> InfluxLogger:
    """Compose the forwarding runtime according to configuration inputs.

    Why
    ---
    Hosts call ``init`` once during startup. Centralising the composition here
    keeps downstream services independent of the InfluxDB client.

    Inputs
    ------
    connection:
        ``https://host:port?token=...&database=...``; ``LOG_INFLUX_CONNECTION``
        overrides it.
    app_name, host, proc_id:
        Identity written to every point (``appname``/``host``/``hostname``
        tags and ``procid`` field). ``host`` defaults to the machine hostname
        and ``proc_id`` to the current PID.
    flush_interval, buffer_size:
        Buffering is active only when both are positive. A negative interval
        raises :class:`ConfigurationError`.
    periodic_flush:
        Start a background thread draining the buffer every ``flush_interval``.
        Off by default: the buffer is then flushed only when it fills up, on
        :func:`flush`, and on :func:`shutdown`.
    diagnostic_hook:
        Callable receiving ``(event_name, payload)`` pipeline notifications.
    sink_factory / termination:
        Injection points for alternate sinks (tests, ``--dry-run``) and for the
        fatal/panic policy.

    Returns
    -------
    InfluxLogger
        Root logger without attached fields.

    Raises
    ------
    ConfigurationError
        Invalid interval/buffer values or an unusable connection string.
    RuntimeError
        When the runtime is already initialised.
    """

    if is_initialised():
        raise RuntimeError("lib_log_influx.init() called twice; call shutdown() first")
    settings = build_runtime_settings(
        connection=connection,
        app_name=app_name,
        host=host,
        proc_id=proc_id,
        measurement=measurement,
        flush_interval=flush_interval,
        buffer_size=buffer_size,
        periodic_flush=periodic_flush,
        diagnostic_hook=diagnostic_hook,
        sink_factory=sink_factory,
        termination=termination,
    )
    runtime = build_runtime(settings)
    set_runtime(runtime)
    return runtime.root_logger


def get(fields: Mapping[str, Any] | None = None) -> InfluxLogger:
    """Return the root logger, carrying ``fields`` when given."""

    root = current_runtime().root_logger
    return root.with_fields(fields) if fields else root


def flush() -> int:
    """Write every buffered point now; return how many were written."""

    return current_runtime().writer.flush()


def shutdown() -> None:
    """Flush pending points, close the sink, and clear runtime state synchronously.

    Raises :class:`RuntimeError` when invoked inside a running loop to steer
    callers to ``shutdown_async``.
    """

    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        pass
    else:
        if loop.is_running():
            raise RuntimeError(
                "lib_log_influx.shutdown() cannot run inside an active event loop; await lib_log_influx.shutdown_async() instead",
            )
    asyncio.run(shutdown_async())


async def shutdown_async() -> None:
    """Flush pending points, close the sink, and clear runtime state asynchronously."""

    runtime = current_runtime()
    try:
        await _perform_shutdown(runtime)
    finally:
        clear_runtime()


async def _perform_shutdown(runtime: LoggingRuntime) -> None:
    """Run the shutdown hook assembled by the composition root.

    Examples
    --------
    >>> import asyncio
    >>> class DummyRuntime:
    ...     def __init__(self) -> None:
    ...         self.calls = []
    ...     def shutdown_async(self):
    ...         self.calls.append('shutdown')
    ...         return None
    >>> runtime = DummyRuntime()
    >>> asyncio.run(_perform_shutdown(runtime))
    >>> runtime.calls
    ['shutdown']
    """
    result = runtime.shutdown_async()
    if inspect.isawaitable(result):
        await result


def new_logger(connection: str, app_name: str, host: str, proc_id: str) -> InfluxLogger:
    """Return an unbuffered logger: every call is one synchronous write."""

    return new_buffered_logger(connection, app_name, host, proc_id, 0, 0)


def new_buffered_logger(
    connection: str,
    app_name: str,
    host: str,
    proc_id: str,
    flush_interval: timedelta | float,
    buffer_limit: int,
    *,
    sink_factory: SinkFactory | None = None,
) -> InfluxLogger:
    """Return a logger whose points are batched in a ``buffer_limit`` ring buffer.

    No runtime singleton is installed and no background flush is started;
    call ``logger.writer.flush()`` before exiting to avoid losing points.

    Raises
    ------
    ConfigurationError
        Negative interval/limit or an unusable connection string.
    """

    interval = coerce_interval(flush_interval)
    if interval < timedelta(0):
        raise ConfigurationError("invalid flush interval")
    if buffer_limit < 0:
        raise ConfigurationError("buffer_limit must not be negative")
    settings = RuntimeSettings(
        connection=connection,
        app_name=app_name,
        host=host,
        proc_id=proc_id,
        flush_interval=interval,
        buffer_size=buffer_limit,
        sink_factory=sink_factory,
    )
    return InfluxLogger(build_writer(settings))


def summary_info() -> str:
    """Return the metadata banner used by the CLI entry point.

    Outputs
    -------
    str
        Multi-line banner ending with a newline.
    """

    from .. import __init__conf__

    lines: list[str] = []

    def _capture(text: str) -> None:
        lines.append(text)

    __init__conf__.print_info(writer=_capture)
    return "".join(lines)
