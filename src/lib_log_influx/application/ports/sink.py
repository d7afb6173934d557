"""Sink port describing the batch point writer.

Purpose
-------
Define the only capability the pipeline needs from the remote time-series
store: accept an ordered, non-empty batch of points and persist it, or fail.

Contents
--------
* :class:`PointSinkPort` – runtime-checkable protocol with ``write_points`` and
  ``close``.

System Role
-----------
Keeps the flush controller independent of the InfluxDB client so tests and
the CLI dry-run path can plug in their own sinks.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from lib_log_influx.domain.points import LogPoint


@runtime_checkable
class PointSinkPort(Protocol):
    """Persist batches of points durably.

    ``write_points`` raises on any failure (network, auth, malformed point);
    the whole batch is either accepted or rejected.
    """

    def write_points(self, points: Sequence[LogPoint]) -> None:
        """Write ``points`` as one batch."""

    def close(self) -> None:
        """Release client resources."""


__all__ = ["PointSinkPort"]
