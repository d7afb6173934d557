"""Concrete adapters plugged into the application ports."""

from __future__ import annotations

from .clock import SystemClock
from .console.rich_console import RichConsoleSink
from .influx import InfluxConnection, InfluxSinkAdapter, parse_connection_string
from .termination import ProcessTermination
from .ticker import FlushTicker

__all__ = [
    "FlushTicker",
    "InfluxConnection",
    "InfluxSinkAdapter",
    "ProcessTermination",
    "RichConsoleSink",
    "SystemClock",
    "parse_connection_string",
]
