"""Optional ``.env`` loading for hosts and the CLI.

``enable_dotenv`` searches upwards from the working directory for the nearest
``.env`` file and loads it with :mod:`python-dotenv`. Variables already set in
the environment keep precedence. Loading happens at most once per process.
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

LOGGER = logging.getLogger(__name__)

DOTENV_ENV_VAR = "LOG_INFLUX_USE_DOTENV"

_LOCK = threading.Lock()
_LOADED_PATH: Path | None = None
_ATTEMPTED = False


def enable_dotenv(path: str | Path | None = None) -> Path | None:
    """Load ``path`` (or the nearest ``.env``) into :data:`os.environ`.

    Returns the resolved file that was loaded, or ``None`` when no file was
    found.
    """

    global _LOADED_PATH, _ATTEMPTED
    with _LOCK:
        if _ATTEMPTED and path is None:
            return _LOADED_PATH
        _ATTEMPTED = True
        candidate = Path(path) if path is not None else _find_nearest()
        if candidate is None or not candidate.is_file():
            LOGGER.debug("No .env file found")
            return None
        load_dotenv(candidate, override=False)
        _LOADED_PATH = candidate.resolve()
        LOGGER.debug("Loaded environment from %s", _LOADED_PATH)
        return _LOADED_PATH


def dotenv_requested(flag: bool | None) -> bool:
    """Return whether ``.env`` loading is requested.

    An explicit CLI ``flag`` wins; otherwise :data:`DOTENV_ENV_VAR` decides.
    """

    if flag is not None:
        return flag
    value = os.getenv(DOTENV_ENV_VAR, "")
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _find_nearest() -> Path | None:
    found = find_dotenv(usecwd=True)
    return Path(found) if found else None


def _reset_dotenv_state_for_testing() -> None:
    """Forget previous loads so tests can exercise discovery again."""

    global _LOADED_PATH, _ATTEMPTED
    with _LOCK:
        _LOADED_PATH = None
        _ATTEMPTED = False


__all__ = ["DOTENV_ENV_VAR", "dotenv_requested", "enable_dotenv"]
