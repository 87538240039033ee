"""Unit tests for picker, notifier, manual arranger and shell hooks."""

from __future__ import annotations

import shutil
import subprocess
import time

import pytest

from displayselect.common import process
from displayselect.common.config import HookConfig, HooksConfig
from displayselect.common.errors import ApplyError, SelectionError
from displayselect.desktop.hooks import ShellHook, hooksFromConfig_create, postApplyHooks_run
from displayselect.desktop.notifier import CommandManualArranger, CommandNotifier
from displayselect.desktop.picker import DmenuPicker


class _RecordingRun:
    """subprocess.run replacement returning scripted results."""

    def __init__(self, returncode: int = 0, stdout: str = "", stderr: str = "") -> None:
        self.calls: list[tuple[list[str], dict]] = []
        self._returncode = returncode
        self._stdout = stdout
        self._stderr = stderr

    def __call__(self, argv, **kwargs):
        self.calls.append((argv, kwargs))
        return subprocess.CompletedProcess(argv, self._returncode, self._stdout, self._stderr)


class TestDmenuPicker:
    """Tests for the dmenu picker client."""

    def test_options_on_stdin_prompt_as_flag(self, monkeypatch) -> None:
        run = _RecordingRun(stdout="HDMI-1\n")
        monkeypatch.setattr(process.subprocess, "run", run)

        selection = DmenuPicker(command="dmenu -i").choice_pick(
            "Select display arrangement:", ["eDP-1", "HDMI-1", "multi-monitor"]
        )

        assert selection == "HDMI-1"
        argv, kwargs = run.calls[0]
        assert argv == ["dmenu", "-i", "-p", "Select display arrangement:"]
        assert kwargs["input"] == "eDP-1\nHDMI-1\nmulti-monitor\n"

    def test_escape_is_cancel(self, monkeypatch) -> None:
        """dmenu exits 1 with no output on escape."""
        monkeypatch.setattr(process.subprocess, "run", _RecordingRun(returncode=1))
        assert DmenuPicker().choice_pick("Mirror displays?", ["no", "yes"]) is None

    def test_empty_answer_is_cancel(self, monkeypatch) -> None:
        monkeypatch.setattr(process.subprocess, "run", _RecordingRun(stdout="\n"))
        assert DmenuPicker().choice_pick("Mirror displays?", ["no", "yes"]) is None

    def test_empty_prompt_flag_omits_prompt(self, monkeypatch) -> None:
        run = _RecordingRun(stdout="yes\n")
        monkeypatch.setattr(process.subprocess, "run", run)

        DmenuPicker(command="fzf", prompt_flag="").choice_pick("Mirror displays?", ["no", "yes"])

        assert run.calls[0][0] == ["fzf"]

    def test_missing_picker_raises(self, monkeypatch) -> None:
        def fake_run(argv, **kwargs):
            raise FileNotFoundError(2, "No such file or directory", argv[0])

        monkeypatch.setattr(process.subprocess, "run", fake_run)
        with pytest.raises(SelectionError, match="Picker unavailable"):
            DmenuPicker().choice_pick("Mirror displays?", ["no", "yes"])


class TestCommandNotifier:
    """Tests for notify-send wrapper."""

    def test_sends_summary_and_body(self, monkeypatch) -> None:
        run = _RecordingRun()
        monkeypatch.setattr(process.subprocess, "run", run)

        CommandNotifier().notification_send("Only one screen detected.", "Using it...")

        assert run.calls[0][0] == ["notify-send", "Only one screen detected.", "Using it..."]

    def test_failure_is_logged_not_raised(self, monkeypatch, caplog) -> None:
        def fake_run(argv, **kwargs):
            raise FileNotFoundError(2, "No such file or directory", argv[0])

        monkeypatch.setattr(process.subprocess, "run", fake_run)

        CommandNotifier().notification_send("summary", "body")
        assert "Notification not sent" in caplog.text


class TestCommandManualArranger:
    """Tests for manual arrangement hand-off."""

    def test_launches_command(self, monkeypatch) -> None:
        run = _RecordingRun()
        monkeypatch.setattr(process.subprocess, "run", run)

        CommandManualArranger(command="arandr").manual_launch()
        assert run.calls[0][0] == ["arandr"]

    def test_nonzero_exit_raises(self, monkeypatch) -> None:
        monkeypatch.setattr(process.subprocess, "run", _RecordingRun(returncode=1, stderr="boom"))
        with pytest.raises(ApplyError, match="boom"):
            CommandManualArranger().manual_launch()


class TestShellHooks:
    """Tests for post-apply hook execution."""

    def test_hook_runs_through_shell(self, monkeypatch) -> None:
        run = _RecordingRun()
        monkeypatch.setattr(process.subprocess, "run", run)

        assert ShellHook("notifications", "killall dunst; setsid -f dunst", 5).hook_run()
        argv, kwargs = run.calls[0]
        assert argv == ["sh", "-c", "killall dunst; setsid -f dunst"]
        assert kwargs["timeout"] == 5

    def test_hook_output_is_detached(self, monkeypatch) -> None:
        run = _RecordingRun()
        monkeypatch.setattr(process.subprocess, "run", run)

        ShellHook("notifications", "setsid -f dunst").hook_run()

        _, kwargs = run.calls[0]
        assert kwargs["stdout"] is subprocess.DEVNULL
        assert kwargs["stderr"] is subprocess.DEVNULL
        assert "capture_output" not in kwargs

    @pytest.mark.skipif(shutil.which("sh") is None, reason="needs a POSIX shell")
    def test_hook_forking_background_process_returns_promptly(self) -> None:
        """A daemon left running by the hook must not hold the hook open."""
        hook = ShellHook("notifications", "sleep 5 &", timeout_seconds=3)

        started = time.monotonic()
        assert hook.hook_run() is True
        assert time.monotonic() - started < 3

    def test_hook_nonzero_exit_is_failure(self, monkeypatch) -> None:
        monkeypatch.setattr(process.subprocess, "run", _RecordingRun(returncode=127))
        assert ShellHook("wallpaper", "setbg").hook_run() is False

    def test_hook_timeout_is_failure(self, monkeypatch) -> None:
        def fake_run(argv, **kwargs):
            raise subprocess.TimeoutExpired(argv, kwargs["timeout"])

        monkeypatch.setattr(process.subprocess, "run", fake_run)
        assert ShellHook("remaps", "remaps", timeout_seconds=0.1).hook_run() is False

    def test_hooks_from_config(self) -> None:
        config = HooksConfig(
            timeout_seconds=2.0,
            commands=[HookConfig("wallpaper", "setbg"), HookConfig("remaps", "remaps")],
        )
        hooks = hooksFromConfig_create(config)
        assert [hook.name for hook in hooks] == ["wallpaper", "remaps"]

    def test_all_hooks_run_despite_failures(self, monkeypatch) -> None:
        """Every hook runs; failed hook names are reported."""
        results = iter([127, 0, 1])
        seen: list[str] = []

        def fake_run(argv, **kwargs):
            seen.append(argv[-1])
            return subprocess.CompletedProcess(argv, next(results), "", "")

        monkeypatch.setattr(process.subprocess, "run", fake_run)
        hooks = [ShellHook("a", "cmd-a"), ShellHook("b", "cmd-b"), ShellHook("c", "cmd-c")]

        assert postApplyHooks_run(hooks) == ["a", "c"]
        assert seen == ["cmd-a", "cmd-b", "cmd-c"]
