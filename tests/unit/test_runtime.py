"""End-to-end pipeline tests with fake prober, picker, applier and hooks."""

from __future__ import annotations

from typing import Optional

import pytest

from displayselect.common.config import DisplayConfig
from displayselect.common.errors import (
    ApplyError,
    DisplayUnavailableError,
    NoDisplayError,
    SelectionCancelledError,
)
from displayselect.common.runtime_models import Components
from displayselect.common.types import (
    Arrangement,
    Direction,
    Extended,
    ExtendedTriple,
    Manual,
    Mirrored,
    Output,
    Resolution,
    Single,
)
from displayselect.runtime import AUTO_CONFIGURED_SUMMARY, displaySelect_run


class _FakeProber:
    """Prober returning a fixed snapshot."""

    def __init__(self, outputs: list[Output]) -> None:
        self._outputs = outputs

    def outputs_probe(self) -> list[Output]:
        return list(self._outputs)


class _FakePicker:
    """Picker answering from a script."""

    def __init__(self, answers: list[Optional[str]]) -> None:
        self._answers = list(answers)
        self.calls: int = 0

    def choice_pick(self, prompt: str, options: list[str]) -> Optional[str]:
        self.calls += 1
        return self._answers.pop(0)


class _SpyApplier:
    """Applier recording arrangements, optionally failing."""

    def __init__(self, error: Optional[str] = None) -> None:
        self.applied: list[Arrangement] = []
        self._error = error

    def arrangement_apply(self, arrangement: Arrangement) -> None:
        self.applied.append(arrangement)
        if self._error:
            raise ApplyError(self._error)


class _SpyHook:
    """Hook recording runs into a shared event log."""

    def __init__(self, name: str, events: list[str], ok: bool = True, raises: bool = False) -> None:
        self.name = name
        self._events = events
        self._ok = ok
        self._raises = raises

    def hook_run(self) -> bool:
        self._events.append(f"hook:{self.name}")
        if self._raises:
            raise RuntimeError(f"{self.name} exploded")
        return self._ok


class _SpyNotifier:
    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []

    def notification_send(self, summary: str, body: str) -> None:
        self.sent.append((summary, body))


class _SpyManual:
    def __init__(self, error: Optional[str] = None) -> None:
        self.launches: int = 0
        self._error = error

    def manual_launch(self) -> None:
        self.launches += 1
        if self._error:
            raise ApplyError(self._error)


class _FakeSession:
    def __init__(self, available: bool = True) -> None:
        self._available = available

    def session_verify(self) -> None:
        if not self._available:
            raise DisplayUnavailableError("Cannot open display :0")


def _components_make(
    outputs: list[Output],
    answers: list[Optional[str]],
    applier: Optional[_SpyApplier] = None,
    hooks: Optional[list[_SpyHook]] = None,
    manual: Optional[_SpyManual] = None,
    session: Optional[_FakeSession] = None,
) -> Components:
    return Components(
        prober=_FakeProber(outputs),
        picker=_FakePicker(answers),
        applier=applier or _SpyApplier(),
        manual=manual or _SpyManual(),
        notifier=_SpyNotifier(),
        hooks=list(hooks or []),
        session=session,
    )


class TestScenarios:
    """End-to-end scenarios A-E."""

    def test_scenario_a_single_internal(self, internal_output) -> None:
        """One internal output: no prompts, one apply, hooks run, notification sent."""
        events: list[str] = []
        hooks = [_SpyHook("wallpaper", events), _SpyHook("remaps", events)]
        components = _components_make([internal_output], [], hooks=hooks)

        arrangement = displaySelect_run(components, DisplayConfig())

        assert arrangement == Single("eDP-1", Resolution(1600, 900), auto_configured=True)
        assert components.picker.calls == 0
        assert components.applier.applied == [arrangement]
        assert events == ["hook:wallpaper", "hook:remaps"]
        assert components.notifier.sent[0][0] == AUTO_CONFIGURED_SUMMARY

    def test_scenario_b_mirror(self, internal_output, hdmi_output) -> None:
        """Two outputs mirrored: one apply describing both, hooks after."""
        events: list[str] = []
        components = _components_make(
            [internal_output, hdmi_output],
            ["multi-monitor", "yes"],
            hooks=[_SpyHook("wallpaper", events)],
        )

        arrangement = displaySelect_run(components, DisplayConfig())

        assert isinstance(arrangement, Mirrored)
        assert arrangement.primary_resolution == Resolution(1600, 900)
        assert arrangement.secondary_resolution == hdmi_output.modes[-1]
        assert arrangement.scale_x == pytest.approx(1600 / 1920)
        assert arrangement.scale_y == pytest.approx(900 / 1080)
        assert components.applier.applied == [arrangement]
        assert events == ["hook:wallpaper"]
        assert components.notifier.sent == []

    def test_scenario_c_extend_right(self, internal_output, hdmi_output) -> None:
        """Two outputs extended to the right, primary at far resolution."""
        components = _components_make(
            [internal_output, hdmi_output], ["multi-monitor", "no", "right"]
        )

        arrangement = displaySelect_run(components, DisplayConfig())

        assert arrangement == Extended(
            "eDP-1", "HDMI-1", Direction.RIGHT, primary_resolution=Resolution(1920, 1080)
        )
        assert components.applier.applied == [arrangement]

    def test_scenario_d_triple(self, internal_output, hdmi_output, dp_output) -> None:
        """Three outputs: tertiary lands opposite the secondary."""
        components = _components_make(
            [internal_output, hdmi_output, dp_output],
            ["multi-monitor", "eDP-1", "HDMI-1", "left", "DP-1"],
        )

        arrangement = displaySelect_run(components, DisplayConfig())

        assert arrangement == ExtendedTriple(
            "eDP-1", "HDMI-1", Direction.LEFT, "DP-1", Direction.RIGHT
        )
        assert components.applier.applied == [arrangement]

    def test_scenario_e_no_outputs(self, disconnected_output) -> None:
        """No connected outputs: error, applier and hooks never called."""
        events: list[str] = []
        components = _components_make(
            [disconnected_output], [], hooks=[_SpyHook("wallpaper", events)]
        )

        with pytest.raises(NoDisplayError) as exc_info:
            displaySelect_run(components, DisplayConfig())

        assert exc_info.value.exit_code != 0
        assert components.applier.applied == []
        assert events == []


class TestPipelineFailures:
    """Tests for cancellation, apply failures, hooks and hand-off."""

    @pytest.mark.parametrize(
        "answers",
        [[None], ["multi-monitor", None], ["multi-monitor", "no", None]],
    )
    def test_cancel_never_applies(self, internal_output, hdmi_output, answers) -> None:
        """Cancelled selection leaves applier and hooks untouched."""
        events: list[str] = []
        components = _components_make(
            [internal_output, hdmi_output], answers, hooks=[_SpyHook("wallpaper", events)]
        )

        with pytest.raises(SelectionCancelledError):
            displaySelect_run(components, DisplayConfig())

        assert components.applier.applied == []
        assert events == []

    def test_apply_failure_skips_hooks(self, internal_output) -> None:
        """Hooks run only after a successful apply."""
        events: list[str] = []
        components = _components_make(
            [internal_output],
            [],
            applier=_SpyApplier(error="xrandr: Configure crtc 0 failed"),
            hooks=[_SpyHook("wallpaper", events)],
        )

        with pytest.raises(ApplyError, match="Configure crtc 0 failed"):
            displaySelect_run(components, DisplayConfig())

        assert len(components.applier.applied) == 1
        assert events == []
        assert components.notifier.sent == []

    def test_failing_hooks_do_not_stop_others(self, internal_output) -> None:
        """A failing or raising hook neither propagates nor blocks later hooks."""
        events: list[str] = []
        hooks = [
            _SpyHook("wallpaper", events, ok=False),
            _SpyHook("remaps", events, raises=True),
            _SpyHook("notifications", events),
        ]
        components = _components_make([internal_output], [], hooks=hooks)

        displaySelect_run(components, DisplayConfig())

        assert events == ["hook:wallpaper", "hook:remaps", "hook:notifications"]

    def test_manual_hands_off_without_apply(self, internal_output, hdmi_output) -> None:
        """Manual selection launches the manual tool only."""
        events: list[str] = []
        manual = _SpyManual()
        components = _components_make(
            [internal_output, hdmi_output],
            ["manual selection"],
            hooks=[_SpyHook("wallpaper", events)],
            manual=manual,
        )

        assert displaySelect_run(components, DisplayConfig()) == Manual()
        assert manual.launches == 1
        assert components.applier.applied == []
        assert events == []

    def test_manual_launch_failure_raises(self, internal_output, hdmi_output) -> None:
        components = _components_make(
            [internal_output, hdmi_output],
            ["manual selection"],
            manual=_SpyManual(error="arandr: not found"),
        )
        with pytest.raises(ApplyError):
            displaySelect_run(components, DisplayConfig())

    def test_unavailable_session_stops_before_probe(self, internal_output) -> None:
        components = _components_make(
            [internal_output], [], session=_FakeSession(available=False)
        )
        with pytest.raises(DisplayUnavailableError):
            displaySelect_run(components, DisplayConfig())
        assert components.applier.applied == []
