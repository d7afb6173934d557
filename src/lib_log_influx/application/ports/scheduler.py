"""Port describing the periodic flush scheduler."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class FlushSchedulerPort(Protocol):
    """Background task draining the buffer on a fixed interval."""

    def start(self) -> None:
        """Start the scheduler."""

    def stop(self, *, timeout: float | None = None) -> None:
        """Stop the scheduler and wait up to ``timeout`` seconds for it to exit."""


__all__ = ["FlushSchedulerPort"]
