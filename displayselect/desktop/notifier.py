"""Desktop notification and manual-arrangement launchers."""

from __future__ import annotations

import logging
from typing import Optional

from displayselect.common.errors import ApplyError
from displayselect.common.process import (
    CommandError,
    commandArgv_split,
    commandEnvironment_build,
    command_run,
)

logger = logging.getLogger(__name__)

__all__ = ["CommandManualArranger", "CommandNotifier", "LogNotifier"]


class CommandNotifier:
    """Sends notifications through a `notify-send` compatible command."""

    def __init__(self, command: str = "notify-send", display_name: Optional[str] = None) -> None:
        self._argv: list[str] = commandArgv_split(command)
        self._env = commandEnvironment_build(display_name)

    def notification_send(self, summary: str, body: str) -> None:
        """
        Send notification; failures are logged only.

        Args:
            summary: Notification title.
            body: Notification text.
        """
        try:
            result = command_run(self._argv + [summary, body], env=self._env)
        except CommandError as exc:
            logger.warning(f"Notification not sent: {exc}")
            return
        if result.returncode != 0:
            logger.warning(
                f"Notification not sent: {self._argv[0]} exited with {result.returncode}: "
                f"{result.stderr.strip()}"
            )


class CommandManualArranger:
    """Runs the interactive manual arrangement tool (arandr by default)."""

    def __init__(self, command: str = "arandr", display_name: Optional[str] = None) -> None:
        self._argv: list[str] = commandArgv_split(command)
        self._env = commandEnvironment_build(display_name)

    def manual_launch(self) -> None:
        """
        Launch manual tool and wait for it to exit.

        Raises:
            ApplyError: If the tool cannot be started or exits non-zero.
        """
        logger.info(f"Handing off to manual arrangement tool: {self._argv[0]}")
        try:
            result = command_run(self._argv, env=self._env)
        except CommandError as exc:
            raise ApplyError(str(exc)) from exc
        if result.returncode != 0:
            raise ApplyError(
                result.stderr.strip() or f"{self._argv[0]} exited with {result.returncode}"
            )


class LogNotifier:
    """Notifier that only logs; used for dry runs."""

    def notification_send(self, summary: str, body: str) -> None:
        logger.info(f"Notification: {summary} {body}")
