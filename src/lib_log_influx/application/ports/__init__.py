"""Protocols separating the application layer from concrete adapters."""

from __future__ import annotations

from .scheduler import FlushSchedulerPort
from .sink import PointSinkPort
from .termination import TerminationPort
from .time import ClockPort

__all__ = ["ClockPort", "FlushSchedulerPort", "PointSinkPort", "TerminationPort"]
