"""Per-call terminal states of a log call.

A log call ends in one of three states: it returns normally, it terminates
the process (``fatal``), or it unwinds the caller (``panic``). Modelling the
states as values lets the facade hand them to a swappable termination port.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .levels import LogLevel

FATAL_EXIT_CODE = 1


@dataclass(slots=True, frozen=True)
class Normal:
    """The call returns to the caller."""


@dataclass(slots=True, frozen=True)
class Terminating:
    """The process exits with ``exit_code``."""

    exit_code: int = FATAL_EXIT_CODE


@dataclass(slots=True, frozen=True)
class Unwinding:
    """The caller is unwound with an error carrying ``message``."""

    message: str


Outcome = Union[Normal, Terminating, Unwinding]


def resolve_outcome(level: LogLevel, message: str) -> Outcome:
    """Return the terminal state for a call at ``level``.

    Examples
    --------
    >>> resolve_outcome(LogLevel.INFO, "ok")
    Normal()
    >>> resolve_outcome(LogLevel.FATAL, "bye")
    Terminating(exit_code=1)
    >>> resolve_outcome(LogLevel.PANIC, "boom")
    Unwinding(message='boom')
    """
    if level is LogLevel.FATAL:
        return Terminating()
    if level is LogLevel.PANIC:
        return Unwinding(message)
    return Normal()


__all__ = ["FATAL_EXIT_CODE", "Normal", "Outcome", "Terminating", "Unwinding", "resolve_outcome"]
