"""Structured-log forwarder writing leveled log calls to InfluxDB.

Host applications call :func:`init` once, log through the returned
:class:`InfluxLogger`, and call :func:`shutdown` before exiting so buffered
points are written.

>>> import lib_log_influx as log  # doctest: +SKIP
>>> logger = log.init(connection="https://influx:8181?token=t&database=logs", app_name="api", flush_interval=5, buffer_size=500)  # doctest: +SKIP
>>> logger.with_fields({"user": "alice"}).info("login ok")  # doctest: +SKIP
>>> log.shutdown()  # doctest: +SKIP
"""

from __future__ import annotations

from .domain import (
    BufferEmptyError,
    BufferFullError,
    ConfigurationError,
    LogInfluxError,
    LogLevel,
    LogPanic,
    LogPoint,
    SinkWriteError,
)
from .runtime import (
    Fields,
    InfluxLogger,
    RuntimeSnapshot,
    flush,
    get,
    init,
    inspect_runtime,
    is_initialised,
    new_buffered_logger,
    new_logger,
    shutdown,
    shutdown_async,
    summary_info,
)

__all__ = [
    "BufferEmptyError",
    "BufferFullError",
    "ConfigurationError",
    "Fields",
    "InfluxLogger",
    "LogInfluxError",
    "LogLevel",
    "LogPanic",
    "LogPoint",
    "RuntimeSnapshot",
    "SinkWriteError",
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
