import io
import subprocess

import pytest
from rich.console import Console

import devsetup_cli


@pytest.fixture
def recorded_console(monkeypatch):
    """Swap the module console for one writing plain text to a buffer."""
    console = Console(file=io.StringIO(), width=100, color_system=None, legacy_windows=False)
    monkeypatch.setattr(devsetup_cli, "console", console)
    return console


@pytest.fixture
def sleeps(monkeypatch):
    calls = []
    monkeypatch.setattr(devsetup_cli.time, "sleep", lambda seconds: calls.append(seconds))
    return calls


@pytest.fixture
def toolchains(monkeypatch):
    """Fake PATH and command output.

    Tests fill ``paths`` (executable -> resolved path) and ``outputs``
    (resolved path -> stdout); every command run is recorded in ``runs``.
    """
    state = {"paths": {}, "outputs": {}, "runs": []}

    def fake_which(name):
        return state["paths"].get(name)

    def fake_run(cmd, **kwargs):
        state["runs"].append((cmd, kwargs))
        output = state["outputs"].get(cmd[0])
        if output is None:
            raise subprocess.CalledProcessError(1, cmd)
        return subprocess.CompletedProcess(cmd, 0, stdout=output, stderr="")

    monkeypatch.setattr("devsetup_cli.toolchain.shutil.which", fake_which)
    monkeypatch.setattr("devsetup_cli.toolchain.subprocess.run", fake_run)
    return state


@pytest.fixture
def keys(monkeypatch):
    """Feed scripted keypresses to the arrow-key prompts; "ctrl-c" interrupts."""
    pressed = []

    def fake_get_key():
        key = pressed.pop(0)
        if key == "ctrl-c":
            raise KeyboardInterrupt
        return key

    monkeypatch.setattr("devsetup_cli.get_key", fake_get_key)
    return pressed
