from __future__ import annotations

from collections.abc import Iterator

import pytest

from lib_log_influx.runtime import _state
from tests.doubles import RecordingSink, RecordingTermination, SteppingClock

_ENV_OVERRIDES = (
    "LOG_INFLUX_CONNECTION",
    "LOG_INFLUX_APP_NAME",
    "LOG_INFLUX_HOST",
    "LOG_INFLUX_PROC_ID",
    "LOG_INFLUX_MEASUREMENT",
    "LOG_INFLUX_FLUSH_INTERVAL",
    "LOG_INFLUX_BUFFER_SIZE",
    "LOG_INFLUX_PERIODIC_FLUSH",
    "LOG_INFLUX_USE_DOTENV",
)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def clock() -> SteppingClock:
    return SteppingClock()


@pytest.fixture
def termination() -> RecordingTermination:
    return RecordingTermination()


@pytest.fixture(autouse=True)
def _isolate_runtime(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep the runtime singleton and ``LOG_INFLUX_*`` overrides from leaking between tests."""

    for name in _ENV_OVERRIDES:
        monkeypatch.delenv(name, raising=False)
    _state.clear_runtime()
    yield
    _state.clear_runtime()
