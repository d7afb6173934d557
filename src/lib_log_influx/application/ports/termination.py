"""Port applying the terminal state of a log call."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TerminationPort(Protocol):
    """Carry out process exit and caller unwinding for fatal/panic levels."""

    def terminate(self, exit_code: int) -> None:
        """End the process with ``exit_code``."""

    def unwind(self, message: str) -> None:
        """Raise an unrecoverable error carrying ``message``."""


__all__ = ["TerminationPort"]
