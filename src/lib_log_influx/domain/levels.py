"""Log level abstraction carrying the syslog-style severity encodings.

Purpose
-------
Offer a domain-specific representation of log severities that knows how each
level is rendered on the wire: a severity keyword (stored as a tag) and a
numeric severity code (stored as a field).

Contents
--------
* :class:`LogLevel` enum with conversion helpers.
* ``SEVERITY_KEYWORDS`` / ``SEVERITY_CODES`` read-only lookup tables.

System Role
-----------
Used by the point encoder to build per-level tag sets and by the logger facade
to decide which levels terminate or unwind the caller.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class LogLevel(Enum):
    """Enumerated logging levels understood by the forwarder."""

    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40
    FATAL = 50
    PANIC = 60

    @property
    def keyword(self) -> str:
        """Return the syslog severity keyword written to the ``severity`` tag."""

        return SEVERITY_KEYWORDS[self]

    @property
    def code(self) -> int:
        """Return the syslog severity code (0 = most severe)."""

        return SEVERITY_CODES[self]

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        normalized = name.strip().upper()
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc


SEVERITY_KEYWORDS: Mapping[LogLevel, str] = MappingProxyType(
    {
        LogLevel.TRACE: "debug",
        LogLevel.DEBUG: "debug",
        LogLevel.INFO: "info",
        LogLevel.WARN: "warn",
        LogLevel.ERROR: "err",
        LogLevel.FATAL: "alert",
        LogLevel.PANIC: "emerg",
    }
)
# Written to the ``severity`` tag; trace shares debug's keyword.

SEVERITY_CODES: Mapping[LogLevel, int] = MappingProxyType(
    {
        LogLevel.TRACE: 7,
        LogLevel.DEBUG: 7,
        LogLevel.INFO: 6,
        LogLevel.WARN: 4,
        LogLevel.ERROR: 3,
        LogLevel.FATAL: 1,
        LogLevel.PANIC: 0,
    }
)
# Written to the ``severity_code`` field.

_ALIASES = {"WARNING": "WARN", "ERR": "ERROR", "CRITICAL": "FATAL"}


__all__ = ["LogLevel", "SEVERITY_CODES", "SEVERITY_KEYWORDS"]
