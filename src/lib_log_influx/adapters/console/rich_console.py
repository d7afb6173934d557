"""Rich-powered console sink implementing :class:`PointSinkPort`.

Purpose
-------
Let operators preview exactly which tags and fields a log call produces
without a reachable InfluxDB instance (``lib_log_influx send --dry-run``).

Contents
--------
* :data:`_STYLE_MAP` - default severity-keyword-to-style mapping.
* :class:`RichConsoleSink` - renders each batch as a Rich table.

System Role
-----------
Debug sink; the production path writes through
:class:`~lib_log_influx.adapters.influx.InfluxSinkAdapter`.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Mapping

from rich.console import Console
from rich.table import Table

from lib_log_influx.application.ports.sink import PointSinkPort
from lib_log_influx.domain.points import LogPoint


_STYLE_MAP: Mapping[str, str] = {
    "debug": "dim",
    "info": "cyan",
    "warn": "yellow",
    "err": "red",
    "alert": "bold red",
    "emerg": "bold white on red",
}

#: Default Rich styles keyed by severity keyword.


class RichConsoleSink(PointSinkPort):
    """Print point batches as tables.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from io import StringIO
    >>> console = Console(file=StringIO(), record=True, width=200)
    >>> point = LogPoint("syslog", {"severity": "info"}, {"message": "hello"}, datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc))
    >>> RichConsoleSink(console=console).write_points([point])
    >>> "hello" in console.export_text()
    True
    """

    def __init__(self, *, console: Console | None = None, no_color: bool = False) -> None:
        self._console = console if console is not None else Console(no_color=no_color)
        self._no_color = no_color
        self.batches = 0

    def write_points(self, points: Sequence[LogPoint]) -> None:
        """Render ``points`` as one table."""
        self.batches += 1
        table = Table(title=f"batch {self.batches} ({len(points)} point(s))", show_lines=False)
        table.add_column("timestamp")
        table.add_column("measurement")
        table.add_column("tags")
        table.add_column("fields")
        for point in points:
            style = "" if self._no_color else _STYLE_MAP.get(point.tags.get("severity", ""), "")
            table.add_row(
                point.timestamp.isoformat(),
                point.measurement,
                _format_pairs(point.tags),
                _format_pairs(point.fields),
                style=style,
            )
        self._console.print(table)

    def close(self) -> None:
        return None


def _format_pairs(values: Mapping[str, object]) -> str:
    """Return ``key=value`` pairs sorted by key, one per line."""
    return "\n".join(f"{key}={value}" for key, value in sorted(values.items()))


__all__ = ["RichConsoleSink"]
