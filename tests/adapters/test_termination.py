from __future__ import annotations

import os
import subprocess
import sys
import textwrap
import threading
from pathlib import Path

import pytest

from lib_log_influx.adapters import termination as termination_module
from lib_log_influx.adapters.termination import ProcessTermination
from lib_log_influx.domain.errors import LogPanic


def test_terminate_raises_system_exit_with_code() -> None:
    with pytest.raises(SystemExit) as excinfo:
        ProcessTermination().terminate(1)
    assert excinfo.value.code == 1


def test_unwind_raises_log_panic_carrying_message() -> None:
    with pytest.raises(LogPanic) as excinfo:
        ProcessTermination().unwind("corrupt state")
    assert excinfo.value.message == "corrupt state"
    assert str(excinfo.value) == "corrupt state"


def test_terminate_from_worker_thread_ends_the_process(monkeypatch: pytest.MonkeyPatch) -> None:
    exits: list[int] = []

    def fake_exit(code: int) -> None:
        exits.append(code)

    monkeypatch.setattr(termination_module.os, "_exit", fake_exit)
    worker = threading.Thread(target=ProcessTermination().terminate, args=(1,))
    worker.start()
    worker.join(timeout=5)

    assert exits == [1]


_FATAL_IN_WORKER = textwrap.dedent(
    """
    import threading

    from lib_log_influx import new_buffered_logger


    class _Sink:
        def write_points(self, points):
            print("written:" + points[0].message, flush=True)

        def close(self):
            pass


    logger = new_buffered_logger("unused", "tests", "localhost", "1", 0, 0, sink_factory=lambda connection: _Sink())
    worker = threading.Thread(target=logger.fatal, args=("dying",))
    worker.start()
    worker.join()
    print("main thread still running")
    """
)


def test_fatal_on_worker_thread_exits_whole_process() -> None:
    root = Path(__file__).resolve().parents[2]
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join([str(root / "src"), str(root), env.get("PYTHONPATH", "")])

    result = subprocess.run([sys.executable, "-c", _FATAL_IN_WORKER], capture_output=True, text=True, env=env, timeout=60)

    assert result.returncode == 1
    assert "written:dying" in result.stdout
    assert "main thread still running" not in result.stdout
