"""Backend protocols for probing, picking, applying, and post-apply hooks."""

from __future__ import annotations

from typing import Optional, Protocol

from displayselect.common.types import Arrangement, Output


class Prober(Protocol):
    """Reports outputs known to the display server."""

    def outputs_probe(self) -> list[Output]:
        """
        Probe all outputs, connected or not.

        Returns:
            Outputs in the prober's report order.

        Raises:
            ProbeError: If the prober fails or its report is malformed.
        """
        ...


class Picker(Protocol):
    """Interactive single-choice selection."""

    def choice_pick(self, prompt: str, options: list[str]) -> Optional[str]:
        """
        Present options and block until the user answers.

        Args:
            prompt: Prompt text.
            options: Ordered options.

        Returns:
            Selected text, or None when the user cancels.
        """
        ...


class Applier(Protocol):
    """Issues an arrangement to the display server."""

    def arrangement_apply(self, arrangement: Arrangement) -> None:
        """
        Apply arrangement in one invocation.

        Args:
            arrangement: Arrangement to apply.

        Raises:
            ApplyError: If the external tool fails.
        """
        ...


class Hook(Protocol):
    """Post-apply action; failures are reported, never raised."""

    name: str

    def hook_run(self) -> bool:
        """Run hook and return True on success."""
        ...


class Notifier(Protocol):
    """Desktop notification sink."""

    def notification_send(self, summary: str, body: str) -> None:
        """Send an informational notification."""
        ...


class ManualArranger(Protocol):
    """Interactive manual arrangement tool."""

    def manual_launch(self) -> None:
        """
        Launch the manual tool and wait for it to exit.

        Raises:
            ApplyError: If the tool cannot be started or fails.
        """
        ...


class Session(Protocol):
    """Graphical display session check."""

    def session_verify(self) -> None:
        """Raise DisplayUnavailableError when no display is reachable."""
        ...
