"""Runtime settings resolved from keyword arguments and environment variables.

Environment variables take precedence over the arguments passed to
:func:`lib_log_influx.init`, mirroring how the CLI and containerised
deployments configure the forwarder:

``LOG_INFLUX_CONNECTION``, ``LOG_INFLUX_APP_NAME``, ``LOG_INFLUX_HOST``,
``LOG_INFLUX_PROC_ID``, ``LOG_INFLUX_MEASUREMENT``,
``LOG_INFLUX_FLUSH_INTERVAL`` (seconds), ``LOG_INFLUX_BUFFER_SIZE``,
``LOG_INFLUX_PERIODIC_FLUSH``.
"""

from __future__ import annotations

import os
import socket
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Callable

from lib_log_influx.application.ports.sink import PointSinkPort
from lib_log_influx.application.ports.termination import TerminationPort
from lib_log_influx.application.use_cases.write_point import coerce_interval
from lib_log_influx.domain.errors import ConfigurationError
from lib_log_influx.domain.points import DEFAULT_MEASUREMENT

DiagnosticHook = Callable[[str, dict[str, Any]], None] | None
SinkFactory = Callable[[str], PointSinkPort]


@dataclass(slots=True, frozen=True)
class RuntimeSettings:
    """Validated configuration consumed by :func:`build_runtime`."""

    connection: str
    app_name: str
    host: str
    proc_id: str
    measurement: str = DEFAULT_MEASUREMENT
    flush_interval: timedelta = timedelta(0)
    buffer_size: int = 0
    periodic_flush: bool = False
    diagnostic_hook: DiagnosticHook = None
    sink_factory: SinkFactory | None = None
    termination: TerminationPort | None = None


def build_runtime_settings(
    *,
    connection: str | None,
    app_name: str,
    host: str | None = None,
    proc_id: str | None = None,
    measurement: str = DEFAULT_MEASUREMENT,
    flush_interval: timedelta | float | int | None = None,
    buffer_size: int = 0,
    periodic_flush: bool = False,
    diagnostic_hook: DiagnosticHook = None,
    sink_factory: SinkFactory | None = None,
    termination: TerminationPort | None = None,
) -> RuntimeSettings:
    """Merge arguments with ``LOG_INFLUX_*`` overrides and validate the result.

    Raises
    ------
    ConfigurationError
        When the connection is missing, the interval is negative, or numeric
        environment values cannot be parsed.
    """
    connection = os.getenv("LOG_INFLUX_CONNECTION", connection or "")
    app_name = os.getenv("LOG_INFLUX_APP_NAME", app_name)
    host = os.getenv("LOG_INFLUX_HOST", host or socket.gethostname())
    proc_id = os.getenv("LOG_INFLUX_PROC_ID", proc_id or str(os.getpid()))
    measurement = os.getenv("LOG_INFLUX_MEASUREMENT", measurement)
    interval = _env_interval("LOG_INFLUX_FLUSH_INTERVAL", coerce_interval(flush_interval))
    buffer_size = _env_int("LOG_INFLUX_BUFFER_SIZE", buffer_size)
    periodic_flush = _env_bool("LOG_INFLUX_PERIODIC_FLUSH", periodic_flush)

    if not connection.strip():
        raise ConfigurationError("an InfluxDB connection string is required")
    if not app_name.strip():
        raise ConfigurationError("app_name must not be empty")
    if interval < timedelta(0):
        raise ConfigurationError("invalid flush interval")
    if buffer_size < 0:
        raise ConfigurationError("buffer_size must not be negative")

    return RuntimeSettings(
        connection=connection,
        app_name=app_name,
        host=host,
        proc_id=proc_id,
        measurement=measurement,
        flush_interval=interval,
        buffer_size=buffer_size,
        periodic_flush=periodic_flush,
        diagnostic_hook=diagnostic_hook,
        sink_factory=sink_factory,
        termination=termination,
    )


def _env_bool(name: str, default: bool) -> bool:
    """Return the boolean value of an environment variable with fallback.

    Examples
    --------
    >>> import os
    >>> _ = os.environ.pop('LOG_INFLUX_EXAMPLE_BOOL', None)
    >>> _env_bool('LOG_INFLUX_EXAMPLE_BOOL', default=True)
    True
    >>> os.environ['LOG_INFLUX_EXAMPLE_BOOL'] = '0'
    >>> _env_bool('LOG_INFLUX_EXAMPLE_BOOL', default=True)
    False
    """
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from exc


def _env_interval(name: str, default: timedelta) -> timedelta:
    """Parse a seconds value (``"2.5"``) from the environment."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return timedelta(seconds=float(value))
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number of seconds, got {value!r}") from exc


__all__ = ["DiagnosticHook", "RuntimeSettings", "SinkFactory", "build_runtime_settings"]
