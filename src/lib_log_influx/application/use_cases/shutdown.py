"""Shutdown orchestration for the forwarding pipeline.

Purpose
-------
Provide a unified shutdown routine that stops the periodic flusher, writes
whatever is still buffered, and closes the sink.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from lib_log_influx.application.ports.scheduler import FlushSchedulerPort
from lib_log_influx.domain.errors import SinkWriteError

from .write_point import BufferedPointWriter

LOGGER = logging.getLogger(__name__)


def create_shutdown(
    *,
    writer: BufferedPointWriter,
    scheduler: FlushSchedulerPort | None,
) -> Callable[[], Awaitable[None]]:
    """Return an async callable performing the shutdown sequence."""

    async def shutdown() -> None:
        """Stop the scheduler, flush pending points, and close the sink."""
        try:
            if scheduler is not None:
                _stop_scheduler(scheduler)
            writer.flush()
        except SinkWriteError as exc:
            LOGGER.warning("Final flush failed; %d point(s) lost", exc.batch_size)
        finally:
            writer.sink.close()

    return shutdown


def _stop_scheduler(scheduler: FlushSchedulerPort) -> None:
    """Stop the periodic flusher; a flusher stuck in a write is logged and left behind."""
    try:
        scheduler.stop()
    except RuntimeError as exc:
        LOGGER.error("Periodic flusher did not stop; continuing shutdown", exc_info=exc)


__all__ = ["create_shutdown"]
