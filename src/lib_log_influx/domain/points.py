"""Domain value object describing one log event rendered for the sink.

Purpose
-------
Provide an immutable representation of a data point (measurement, tags,
fields, timestamp) so the buffer and the sink adapters manipulate plain data
instead of client-library objects.

Contents
--------
* :class:`LogPoint` dataclass.
* Wire-shape constants ``TAG_KEYS`` / ``FIELD_KEYS`` / ``FIELD_PREFIX``.
* :func:`format_rfc3339` for the ``timestamp`` field.

System Role
-----------
Sits in the domain layer between the point encoder and the sink port. The tag
and field names are persisted remotely and dashboards are built against them,
so they must not change.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping

DEFAULT_MEASUREMENT = "syslog"

TAG_KEYS: tuple[str, ...] = ("appname", "host", "hostname", "facility", "severity")
FIELD_KEYS: tuple[str, ...] = ("facility_code", "message", "procid", "severity_code", "timestamp", "version")
FIELD_PREFIX = "fields."


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` is timezone-aware and normalise to UTC."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    return ts.astimezone(timezone.utc)


def format_rfc3339(ts: datetime) -> str:
    """Render ``ts`` as a second-precision RFC3339 UTC string.

    Examples
    --------
    >>> format_rfc3339(datetime(2025, 9, 23, 12, 0, 1, 999, tzinfo=timezone.utc))
    '2025-09-23T12:00:01Z'
    """
    return _ensure_aware(ts).strftime("%Y-%m-%dT%H:%M:%SZ")


@dataclass(slots=True, frozen=True)
class LogPoint:
    """Immutable point handed to :class:`~lib_log_influx.application.ports.sink.PointSinkPort`.

    Attributes
    ----------
    measurement:
        Process-wide measurement name.
    tags:
        Indexed string dimensions (fixed per severity level).
    fields:
        Unindexed scalar attributes (message, codes, structured extras).
    timestamp:
        Event time in timezone-aware UTC.
    """

    measurement: str
    tags: Mapping[str, str]
    fields: Mapping[str, Any]
    timestamp: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp))
        object.__setattr__(self, "tags", MappingProxyType(dict(self.tags)))
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @property
    def message(self) -> str:
        """Return the rendered message field (empty when absent)."""

        return str(self.fields.get("message", ""))

    def structured_fields(self) -> dict[str, Any]:
        """Return caller-supplied fields with the ``fields.`` prefix stripped."""

        offset = len(FIELD_PREFIX)
        return {key[offset:]: value for key, value in self.fields.items() if key.startswith(FIELD_PREFIX)}


__all__ = [
    "DEFAULT_MEASUREMENT",
    "FIELD_KEYS",
    "FIELD_PREFIX",
    "LogPoint",
    "TAG_KEYS",
    "format_rfc3339",
]
