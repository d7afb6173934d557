"""Termination adapter applying fatal/panic effects to the running process."""

from __future__ import annotations

import logging
import os
import sys
import threading

from lib_log_influx.application.ports.termination import TerminationPort
from lib_log_influx.domain.errors import LogPanic

LOGGER = logging.getLogger(__name__)


class ProcessTermination(TerminationPort):
    """Exit the process on ``fatal`` and raise :class:`LogPanic` on ``panic``.

    On the main thread ``terminate`` raises :class:`SystemExit`, so ``finally``
    blocks and interpreter exit handlers still run. Any other thread cannot
    end the process that way; there the standard streams are flushed and the
    process ends through :func:`os._exit` without further cleanup. Points
    still parked in a buffer are not written on either path.
    """

    def terminate(self, exit_code: int) -> None:
        LOGGER.debug("Fatal log call; exiting with status %d", exit_code)
        if threading.current_thread() is threading.main_thread():
            raise SystemExit(exit_code)
        _flush_standard_streams()
        os._exit(exit_code)

    def unwind(self, message: str) -> None:
        raise LogPanic(message)


def _flush_standard_streams() -> None:
    for stream in (sys.stdout, sys.stderr):
        if stream is None:
            continue
        try:
            stream.flush()
        except (OSError, ValueError):
            continue


__all__ = ["ProcessTermination"]
