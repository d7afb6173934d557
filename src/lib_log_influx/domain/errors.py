"""Exception hierarchy shared by every layer of the forwarder."""

from __future__ import annotations


class LogInfluxError(RuntimeError):
    """Base class for errors raised by :mod:`lib_log_influx`."""


class ConfigurationError(LogInfluxError, ValueError):
    """Invalid construction parameters (flush interval, buffer size, connection)."""


class BufferFullError(BufferError):
    """Raised by :meth:`RingBuffer.push` when the buffer is full and the policy is ``error``."""


class BufferEmptyError(BufferError):
    """Raised by :meth:`RingBuffer.pop` when no point is pending."""


class SinkWriteError(LogInfluxError):
    """A batch could not be written to the sink.

    The whole batch is considered rejected; there is no partial success.
    """

    def __init__(self, message: str, *, batch_size: int) -> None:
        super().__init__(message)
        self.batch_size = batch_size


class LogPanic(LogInfluxError):
    """Raised after a ``panic`` level call to unwind the caller."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


__all__ = [
    "BufferEmptyError",
    "BufferFullError",
    "ConfigurationError",
    "LogInfluxError",
    "LogPanic",
    "SinkWriteError",
]
