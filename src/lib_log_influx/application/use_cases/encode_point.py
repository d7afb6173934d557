"""Use case turning a log call into a sink-ready :class:`LogPoint`.

Purpose
-------
Render the message, prefix structured fields, overlay the static syslog
defaults and attach the tag set precomputed for the call's level.

Contents
--------
* :class:`PointEncoder` – stateless after construction.
* :func:`render_message` – concatenates message arguments without separators.

System Role
-----------
First stage of the write pipeline; invoked by
:class:`~lib_log_influx.application.use_cases.write_point.BufferedPointWriter`
for every log call.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime
from types import MappingProxyType
from typing import Any

from lib_log_influx.domain.levels import SEVERITY_CODES, SEVERITY_KEYWORDS, LogLevel
from lib_log_influx.domain.points import DEFAULT_MEASUREMENT, FIELD_PREFIX, LogPoint, format_rfc3339

_EMPTY_TAGS: Mapping[str, str] = MappingProxyType({})


def render_message(args: Sequence[Any]) -> str:
    """Concatenate the string form of ``args`` without added separators.

    Examples
    --------
    >>> render_message(["disk ", 93, "% full"])
    'disk 93% full'
    >>> render_message([])
    ''
    """
    return "".join(str(arg) for arg in args)


class PointEncoder:
    """Build :class:`LogPoint` objects for a fixed application identity.

    Examples
    --------
    >>> from datetime import timezone
    >>> encoder = PointEncoder(app_name="api", host="web-1", proc_id="42")
    >>> point = encoder.encode(LogLevel.WARN, ["slow ", "query"], {"ms": 812}, datetime(2025, 9, 23, 12, 0, tzinfo=timezone.utc))
    >>> point.tags["severity"], point.fields["severity_code"], point.fields["fields.ms"]
    ('warn', 4, 812)
    >>> point.fields["message"], point.fields["timestamp"]
    ('slow query', '2025-09-23T12:00:00Z')
    """

    def __init__(self, *, app_name: str, host: str, proc_id: str, measurement: str = DEFAULT_MEASUREMENT) -> None:
        self._measurement = measurement
        self._tags: Mapping[LogLevel, Mapping[str, str]] = MappingProxyType(
            {
                level: MappingProxyType(
                    {
                        "appname": app_name,
                        "host": host,
                        "hostname": host,
                        "facility": "user",
                        "severity": keyword,
                    }
                )
                for level, keyword in SEVERITY_KEYWORDS.items()
            }
        )
        self._defaults: Mapping[str, Any] = MappingProxyType(
            {
                "facility_code": 1,
                "message": "",
                "procid": proc_id,
                "severity_code": 7,
                "timestamp": 0,
                "version": 1,
            }
        )

    @property
    def measurement(self) -> str:
        return self._measurement

    def tags_for(self, level: LogLevel) -> Mapping[str, str]:
        """Return the precomputed tag set for ``level`` (empty when unknown)."""
        return self._tags.get(level, _EMPTY_TAGS)

    def encode(
        self,
        level: LogLevel,
        args: Sequence[Any],
        fields: Mapping[str, Any] | None,
        timestamp: datetime,
    ) -> LogPoint:
        """Return the point for one log call; never raises for unknown levels."""
        values: dict[str, Any] = {}
        if fields:
            for key, value in fields.items():
                values[FIELD_PREFIX + key] = value
        values.update(self._defaults)
        values["severity_code"] = SEVERITY_CODES.get(level)
        values["timestamp"] = format_rfc3339(timestamp)
        values["message"] = render_message(args)
        return LogPoint(
            measurement=self._measurement,
            tags=self.tags_for(level),
            fields=values,
            timestamp=timestamp,
        )


__all__ = ["PointEncoder", "render_message"]
