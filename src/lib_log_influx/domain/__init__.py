"""Domain entities and value objects used by the forwarding pipeline."""

from __future__ import annotations

from .errors import (
    BufferEmptyError,
    BufferFullError,
    ConfigurationError,
    LogInfluxError,
    LogPanic,
    SinkWriteError,
)
from .levels import SEVERITY_CODES, SEVERITY_KEYWORDS, LogLevel
from .outcome import Normal, Outcome, Terminating, Unwinding, resolve_outcome
from .points import DEFAULT_MEASUREMENT, FIELD_KEYS, FIELD_PREFIX, TAG_KEYS, LogPoint, format_rfc3339
from .ring_buffer import RingBuffer

__all__ = [
    "BufferEmptyError",
    "BufferFullError",
    "ConfigurationError",
    "DEFAULT_MEASUREMENT",
    "FIELD_KEYS",
    "FIELD_PREFIX",
    "LogInfluxError",
    "LogLevel",
    "LogPanic",
    "LogPoint",
    "Normal",
    "Outcome",
    "RingBuffer",
    "SEVERITY_CODES",
    "SEVERITY_KEYWORDS",
    "SinkWriteError",
    "TAG_KEYS",
    "Terminating",
    "Unwinding",
    "format_rfc3339",
    "resolve_outcome",
]
