import os
import signal
import time

import pytest

from frognet_installer.lib.launcher import find_start_script, launch_detached

SCRIPT = """#!/bin/sh
echo "args:$1:$2"
read line || echo "stdin:eof"
sleep 30
"""


def _script(path, body="#!/bin/sh\n", mode=0o755):
    path.write_text(body)
    path.chmod(mode)
    return path


def _wait_for(path, text, timeout=10.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if path.exists() and text in path.read_text():
            return
        time.sleep(0.05)
    raise AssertionError(f"{text!r} never appeared in {path}")


@pytest.fixture
def spawned():
    pids = []
    yield pids
    for pid in pids:
        try:
            os.kill(pid, signal.SIGKILL)
            os.waitpid(pid, 0)
        except (ProcessLookupError, ChildProcessError):
            pass


def test_find_start_script_prefers_first_name(tmp_path):
    _script(tmp_path / "setupLily.sh")
    first = _script(tmp_path / "setup_lillypad.bash")
    assert find_start_script(str(tmp_path), ["setup_lillypad.bash", "setupLily.sh"]) == str(first)


def test_find_start_script_skips_non_executable(tmp_path):
    _script(tmp_path / "setup_lillypad.bash", mode=0o644)
    second = _script(tmp_path / "setupLily.sh")
    assert find_start_script(str(tmp_path), ["setup_lillypad.bash", "setupLily.sh"]) == str(second)


def test_find_start_script_none(tmp_path):
    (tmp_path / "setupLily.sh").mkdir()
    assert find_start_script(str(tmp_path), ["setup_lillypad.bash", "setupLily.sh"]) is None


def test_launch_detached_runs_in_own_session(tmp_path, spawned):
    script = _script(tmp_path / "setup_lillypad.bash", SCRIPT)
    log = tmp_path / "log" / "frognet-start.log"
    log.parent.mkdir()
    log.write_text("old\n")

    pid = launch_detached([str(script), "frognet.local", "10.1.0.1"], log_path=str(log), cwd=str(tmp_path))
    spawned.append(pid)

    _wait_for(log, "stdin:eof")
    assert log.read_text() == "old\nargs:frognet.local:10.1.0.1\nstdin:eof\n"
    assert os.getsid(pid) == pid
    assert os.getsid(pid) != os.getsid(0)


def test_launch_detached_dry_run(tmp_path):
    log = tmp_path / "frognet-start.log"
    assert launch_detached(["/nonexistent/start.sh"], log_path=str(log), dry_run=True) is None
    assert not log.exists()
