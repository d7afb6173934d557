"""InfluxDB 3 sink adapter implementing :class:`PointSinkPort`.

Purpose
-------
Translate :class:`LogPoint` batches into ``influxdb_client_3`` points and
write them through :class:`influxdb_client_3.InfluxDBClient3`.

Contents
--------
* :class:`InfluxConnection` – parsed connection descriptor.
* :func:`parse_connection_string` – ``https://host:8181?token=..&database=..``.
* :class:`InfluxSinkAdapter` – the sink.

System Role
-----------
The production sink selected by the composition root. Construction fails
with :class:`ConfigurationError` when the descriptor is unusable so startup
stops before the first log call.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qs, urlsplit

from influxdb_client_3 import InfluxDBClient3, Point

from lib_log_influx.application.ports.sink import PointSinkPort
from lib_log_influx.domain.errors import ConfigurationError
from lib_log_influx.domain.points import LogPoint

ClientFactory = Callable[["InfluxConnection"], Any]

_SCALAR_TYPES = (str, int, float, bool)


@dataclass(slots=True, frozen=True)
class InfluxConnection:
    """Connection parameters extracted from a connection string."""

    host: str
    token: str
    database: str
    org: str | None = None
    auth_scheme: str | None = None

    def __repr__(self) -> str:
        return f"InfluxConnection(host={self.host!r}, database={self.database!r}, org={self.org!r})"


def parse_connection_string(connection: str) -> InfluxConnection:
    """Parse ``connection`` into an :class:`InfluxConnection`.

    ``bucket`` is accepted as an alias of ``database``.

    Examples
    --------
    >>> conn = parse_connection_string("https://influx.local:8181?token=abc&database=logs")
    >>> conn.host, conn.token, conn.database
    ('https://influx.local:8181', 'abc', 'logs')
    >>> parse_connection_string("influx.local")
    Traceback (most recent call last):
    ...
    lib_log_influx.domain.errors.ConfigurationError: connection string must use http or https: 'influx.local'
    """
    raw = connection.strip()
    parts = urlsplit(raw)
    if parts.scheme not in {"http", "https"}:
        raise ConfigurationError(f"connection string must use http or https: {connection!r}")
    if not parts.netloc:
        raise ConfigurationError(f"connection string has no host: {connection!r}")
    query = {key: values[-1] for key, values in parse_qs(parts.query).items() if values}
    token = query.get("token", "")
    database = query.get("database") or query.get("bucket", "")
    if not token:
        raise ConfigurationError("connection string is missing the 'token' parameter")
    if not database:
        raise ConfigurationError("connection string is missing the 'database' parameter")
    host = f"{parts.scheme}://{parts.netloc}{parts.path.rstrip('/')}"
    return InfluxConnection(
        host=host,
        token=token,
        database=database,
        org=query.get("org"),
        auth_scheme=query.get("authScheme"),
    )


def _default_client_factory(connection: InfluxConnection) -> InfluxDBClient3:
    kwargs: dict[str, Any] = {}
    if connection.auth_scheme:
        kwargs["auth_scheme"] = connection.auth_scheme
    return InfluxDBClient3(
        host=connection.host,
        token=connection.token,
        database=connection.database,
        org=connection.org,
        **kwargs,
    )


def _coerce_field(value: Any) -> Any:
    """Return ``value`` when the line protocol can carry it, else its ``str``."""
    if isinstance(value, _SCALAR_TYPES):
        return value
    return str(value)


def to_influx_point(point: LogPoint) -> Point:
    """Convert a domain point into an ``influxdb_client_3.Point``."""
    influx_point = Point(point.measurement)
    for key, value in point.tags.items():
        influx_point = influx_point.tag(key, value)
    for key, value in point.fields.items():
        if value is None:
            continue
        influx_point = influx_point.field(key, _coerce_field(value))
    return influx_point.time(point.timestamp)


class InfluxSinkAdapter(PointSinkPort):
    """Write point batches to InfluxDB 3."""

    def __init__(self, connection: str | InfluxConnection, *, client_factory: ClientFactory | None = None) -> None:
        """Parse ``connection`` and create the client.

        Raises
        ------
        ConfigurationError
            When the descriptor cannot be parsed or the client rejects it.
        """
        if isinstance(connection, str):
            connection = parse_connection_string(connection)
        self._connection = connection
        factory = client_factory or _default_client_factory
        try:
            self._client = factory(connection)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"cannot create InfluxDB client for {connection.host}: {exc}") from exc

    @property
    def connection(self) -> InfluxConnection:
        return self._connection

    def write_points(self, points: Sequence[LogPoint]) -> None:
        """Write ``points`` in a single request."""
        if not points:
            return
        self._client.write(record=[to_influx_point(point) for point in points])

    def close(self) -> None:
        self._client.close()


__all__ = ["InfluxConnection", "InfluxSinkAdapter", "parse_connection_string", "to_influx_point"]
