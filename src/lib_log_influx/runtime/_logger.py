"""Logger facade implementing the leveled-logging contract.

Each :class:`InfluxLogger` is an immutable snapshot of a shared
:class:`BufferedPointWriter` plus the structured fields attached to it.
Deriving a logger (``with_fields`` and friends) never mutates the original,
so instances can be shared freely across threads.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from lib_log_influx.adapters.termination import ProcessTermination
from lib_log_influx.application.ports.termination import TerminationPort
from lib_log_influx.application.use_cases.encode_point import render_message
from lib_log_influx.application.use_cases.write_point import BufferedPointWriter
from lib_log_influx.domain.levels import LogLevel
from lib_log_influx.domain.outcome import Normal, Outcome, Terminating, Unwinding, resolve_outcome

LOGGER = logging.getLogger(__name__)

Fields = Mapping[str, Any]

_NO_FIELDS: Fields = MappingProxyType({})


class InfluxLogger:
    """Forward leveled log calls to InfluxDB.

    Write failures are intentionally discarded: logging is best-effort and a
    sink outage must not change the caller's control flow. The only
    observable effects of :meth:`log` are the fatal exit and the panic unwind.
    """

    __slots__ = ("_writer", "_fields", "_termination")

    def __init__(
        self,
        writer: BufferedPointWriter,
        fields: Fields | None = None,
        *,
        termination: TerminationPort | None = None,
    ) -> None:
        self._writer = writer
        self._fields: Fields = MappingProxyType(dict(fields)) if fields else _NO_FIELDS
        self._termination = termination if termination is not None else ProcessTermination()

    @property
    def fields(self) -> Fields:
        """Return the read-only structured fields attached to this logger."""

        return self._fields

    @property
    def writer(self) -> BufferedPointWriter:
        return self._writer

    def log(self, level: LogLevel, *args: Any) -> None:
        """Write one event at ``level``, then apply the level's terminal effect."""
        try:
            self._writer.write(level, args, self._fields)
        except Exception as exc:  # noqa: BLE001
            self._discard_write_error(exc)
        self._apply(resolve_outcome(level, render_message(args)))

    def trace(self, *args: Any) -> None:
        self.log(LogLevel.TRACE, *args)

    def debug(self, *args: Any) -> None:
        self.log(LogLevel.DEBUG, *args)

    def info(self, *args: Any) -> None:
        self.log(LogLevel.INFO, *args)

    def warn(self, *args: Any) -> None:
        self.log(LogLevel.WARN, *args)

    warning = warn

    def error(self, *args: Any) -> None:
        self.log(LogLevel.ERROR, *args)

    def fatal(self, *args: Any) -> None:
        """Log at ``fatal`` and exit the process with status 1."""
        self.log(LogLevel.FATAL, *args)

    def panic(self, *args: Any) -> None:
        """Log at ``panic`` and raise :class:`LogPanic` carrying the message."""
        self.log(LogLevel.PANIC, *args)

    def with_fields(self, fields: Fields | None) -> "InfluxLogger":
        """Return a logger sharing the writer with ``fields`` replacing the attached set."""
        return InfluxLogger(self._writer, fields, termination=self._termination)

    def with_additional_fields(self, fields: Fields | None) -> "InfluxLogger":
        """Return a logger with ``fields`` merged underneath the attached set.

        Attached fields win on key collisions:

        >>> from unittest.mock import Mock
        >>> base = InfluxLogger(Mock(), {"a": 2})
        >>> dict(base.with_additional_fields({"a": 1, "b": 3}).fields)
        {'a': 2, 'b': 3}
        """
        merged = dict(fields or {})
        merged.update(self._fields)
        return self.with_fields(merged)

    def logger(self) -> "InfluxLogger":
        """Return a logger sharing the writer without any attached fields."""
        return InfluxLogger(self._writer, termination=self._termination)

    def _apply(self, outcome: Outcome) -> None:
        if isinstance(outcome, Normal):
            return
        if isinstance(outcome, Terminating):
            self._termination.terminate(outcome.exit_code)
        elif isinstance(outcome, Unwinding):
            self._termination.unwind(outcome.message)

    @staticmethod
    def _discard_write_error(exc: Exception) -> None:
        """Drop a write failure; only the library's own debug log records it."""
        LOGGER.debug("Discarding log write failure: %r", exc)


__all__ = ["Fields", "InfluxLogger"]
