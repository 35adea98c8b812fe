"""Tests for spawning the Claude CLI."""

import os
import signal
import sys
import time

import pytest

from claudegate.config import AppConfig, AppSettings, Profile, save_config
from claudegate.launcher import (
    LaunchError,
    claude_command,
    launch_claude,
    run_with_env,
)
from claudegate.launcher import runner


class FakeChild:
    def __init__(self, code):
        self.code = code
        self.signals = []

    def poll(self):
        return None

    def send_signal(self, signum):
        self.signals.append(signum)

    def wait(self):
        return self.code


@pytest.fixture
def fake_popen(monkeypatch):
    calls = []

    def install(code=0):
        def _popen(command, env):
            calls.append((command, env))
            return FakeChild(code)

        monkeypatch.setattr(runner.subprocess, "Popen", _popen)
        return calls

    return install


def _profile(provider_id="deepseek", **env):
    return Profile(id="p", name="P", provider_id=provider_id, env_vars=env)


def test_claude_command_defaults_to_claude():
    assert claude_command(AppConfig(), ["--resume"]) == ["claude", "--resume"]


def test_claude_command_splits_configured_path():
    config = AppConfig(
        settings=AppSettings(claude_cli_path="npx '@anthropic/claude code'"),
    )
    assert claude_command(config, ["-p", "hi"]) == [
        "npx",
        "@anthropic/claude code",
        "-p",
        "hi",
    ]


def test_run_with_env_returns_exit_code(fake_popen):
    calls = fake_popen(3)
    assert run_with_env(["claude"], {"A": "1"}) == 3
    assert calls == [(["claude"], {"A": "1"})]


def test_signal_death_maps_to_shell_code(fake_popen):
    fake_popen(-signal.SIGTERM)
    assert run_with_env(["claude"], {}) == 128 + signal.SIGTERM


def test_signal_handlers_are_restored(fake_popen):
    fake_popen(0)
    before = signal.getsignal(signal.SIGINT)
    run_with_env(["claude"], {})
    assert signal.getsignal(signal.SIGINT) is before


def test_missing_binary_raises_launch_error(tmp_path):
    with pytest.raises(LaunchError, match="Failed to launch Claude"):
        run_with_env([str(tmp_path / "no-such-claude")], {})


def test_real_child_exit_code():
    command = [sys.executable, "-c", "import sys; sys.exit(7)"]
    assert run_with_env(command, {}) == 7


def test_launch_overlays_profile_env(fake_popen, monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-real")
    monkeypatch.setenv("KEEP_ME", "yes")
    calls = fake_popen(0)

    code = launch_claude(
        _profile(ANTHROPIC_AUTH_TOKEN="sk-ds"),
        ["--resume"],
        config=AppConfig(),
    )

    assert code == 0
    command, env = calls[0]
    assert command == ["claude", "--resume"]
    assert env["ANTHROPIC_API_KEY"] == ""
    assert env["ANTHROPIC_AUTH_TOKEN"] == "sk-ds"
    assert env["ANTHROPIC_BASE_URL"] == "https://api.deepseek.com"
    assert env["KEEP_ME"] == "yes"


def test_launch_native_profile_keeps_ambient_env(fake_popen, monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-real")
    monkeypatch.delenv("ANTHROPIC_BASE_URL", raising=False)
    calls = fake_popen(0)

    launch_claude(_profile("anthropic"), [], config=AppConfig())

    _, env = calls[0]
    assert env["ANTHROPIC_API_KEY"] == "sk-ant-real"
    assert "ANTHROPIC_BASE_URL" not in env


def test_launch_unknown_provider_warns(fake_popen, monkeypatch, caplog):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-real")
    calls = fake_popen(0)

    with caplog.at_level("WARNING", logger="claudegate.launcher.runner"):
        launch_claude(_profile("retired"), [], config=AppConfig())

    assert "unknown provider retired" in caplog.text
    assert calls[0][1]["ANTHROPIC_API_KEY"] == "sk-ant-real"


def test_launch_reads_cli_path_from_config(fake_popen, config_path):
    save_config(AppConfig(settings=AppSettings(claude_cli_path="/opt/cl")))
    calls = fake_popen(0)

    launch_claude(_profile("anthropic"), ["x"])

    assert calls[0][0] == ["/opt/cl", "x"]


class SignalledChild(FakeChild):
    """Delivers *signum* to this process while the launcher waits."""

    def __init__(self, signum):
        super().__init__(0)
        self.signum = signum

    def wait(self):
        os.kill(os.getpid(), self.signum)
        deadline = time.monotonic() + 5
        while not self.signals and time.monotonic() < deadline:
            time.sleep(0.01)
        return self.code


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals")
@pytest.mark.parametrize("signum", [signal.SIGTERM, signal.SIGINT])
def test_parent_signals_are_forwarded_to_child(monkeypatch, signum):
    child = SignalledChild(signum)
    monkeypatch.setattr(
        runner.subprocess,
        "Popen",
        lambda command, env: child,
    )

    assert run_with_env(["claude"], {}) == 0
    assert child.signals == [signum]
