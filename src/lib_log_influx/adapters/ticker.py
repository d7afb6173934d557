"""Thread-based periodic flusher for buffered points.

Purpose
-------
Drain the ring buffer every ``flush_interval`` so quiet applications do not
keep points parked until the buffer happens to fill up.

Contents
--------
* :class:`FlushTicker` - background worker implementing :class:`FlushSchedulerPort`.

System Role
-----------
Optional collaborator created by the composition root when periodic flushing
is enabled. It goes through :meth:`BufferedPointWriter.flush`, so it takes the
same lock as buffered writes and never overlaps another batch.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from lib_log_influx.application.ports.scheduler import FlushSchedulerPort

LOGGER = logging.getLogger(__name__)


class FlushTicker(FlushSchedulerPort):
    """Invoke ``flush`` on a daemon thread every ``interval`` seconds.

    Examples
    --------
    >>> calls = []
    >>> ticker = FlushTicker(flush=lambda: calls.append(1) or 0, interval=0.01)
    >>> ticker.start()
    >>> ticker.stop()
    >>> ticker.running
    False
    """

    def __init__(
        self,
        *,
        flush: Callable[[], int],
        interval: float,
        diagnostic: Callable[[str, dict[str, Any]], None] | None = None,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._flush = flush
        self._interval = interval
        self._diagnostic = diagnostic
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the background thread if it is not already running."""
        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="lib_log_influx-flush", daemon=True)
        self._thread.start()

    def stop(self, *, timeout: float | None = 5.0) -> None:
        """Signal the thread to exit and wait for it.

        Raises
        ------
        RuntimeError
            When the thread is still alive after ``timeout`` seconds.
        """
        thread = self._thread
        if thread is None:
            return
        self._stop_event.set()
        thread.join(timeout)
        if thread.is_alive():
            raise RuntimeError("Flush ticker failed to stop within the allotted timeout")
        self._thread = None

    def _run(self) -> None:
        """Flush until stopped; failures are reported and the loop keeps going."""
        while not self._stop_event.wait(self._interval):
            try:
                flushed = self._flush()
            except Exception as exc:  # noqa: BLE001
                LOGGER.error("Periodic flush raised an exception; continuing", exc_info=exc)
                self._emit_diagnostic("ticker_flush_failed", {"exception": repr(exc)})
            else:
                if flushed:
                    LOGGER.debug("Periodic flush wrote %d point(s)", flushed)

    def _emit_diagnostic(self, name: str, payload: dict[str, Any]) -> None:
        """Invoke the diagnostic hook while guarding against callback failures."""

        if self._diagnostic is None:
            return
        try:
            self._diagnostic(name, payload)
        except Exception as diagnostic_exc:  # noqa: BLE001
            LOGGER.error("Ticker diagnostic hook raised while reporting %s", name, exc_info=diagnostic_exc)


__all__ = ["FlushTicker"]
