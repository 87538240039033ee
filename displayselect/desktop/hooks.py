"""
Post-apply hook execution.

Hooks refresh whatever depends on the screen layout (wallpaper, key remaps,
notification daemon placement). Each hook is independent: a failing hook is
logged and the remaining hooks still run.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from displayselect.backend.protocols import Hook
from displayselect.common.config import HooksConfig
from displayselect.common.process import CommandError, commandEnvironment_build, command_run

logger = logging.getLogger(__name__)

__all__ = ["ShellHook", "hooksFromConfig_create", "postApplyHooks_run"]


class ShellHook:
    """Hook running a shell command line through `sh -c`."""

    def __init__(
        self,
        name: str,
        command: str,
        timeout_seconds: Optional[float] = None,
        display_name: Optional[str] = None,
    ) -> None:
        """
        Initialize hook.

        Args:
            name: Hook name used in log messages.
            command: Shell command line.
            timeout_seconds: Optional timeout; expiry counts as failure.
            display_name: X11 display name, None for inherited DISPLAY.
        """
        self.name: str = name
        self.command: str = command
        self._timeout: Optional[float] = timeout_seconds
        self._env = commandEnvironment_build(display_name)

    def hook_run(self) -> bool:
        """
        Run hook.

        Returns:
            True when the command exited zero.
        """
        try:
            result = command_run(
                ["sh", "-c", self.command],
                env=self._env,
                timeout=self._timeout,
                capture=False,
            )
        except CommandError as exc:
            logger.warning(f"Hook '{self.name}' failed: {exc}")
            return False

        if result.returncode != 0:
            logger.warning(f"Hook '{self.name}' exited with {result.returncode}")
            return False

        logger.debug(f"Hook '{self.name}' done")
        return True


def hooksFromConfig_create(config: HooksConfig, display_name: Optional[str] = None) -> list[Hook]:
    """
    Build shell hooks from configuration.

    Args:
        config: Hook configuration section.
        display_name: X11 display name.

    Returns:
        Hooks in configured order.
    """
    return [
        ShellHook(
            name=entry.name,
            command=entry.command,
            timeout_seconds=config.timeout_seconds,
            display_name=display_name,
        )
        for entry in config.commands
    ]


def postApplyHooks_run(hooks: Iterable[Hook]) -> list[str]:
    """
    Run every hook in order, isolating failures.

    Args:
        hooks: Hooks to run.

    Returns:
        Names of hooks that failed.
    """
    failed: list[str] = []
    for hook in hooks:
        try:
            ok: bool = hook.hook_run()
        except Exception:
            logger.warning(f"Hook '{hook.name}' raised", exc_info=True)
            ok = False
        if not ok:
            failed.append(hook.name)

    if failed:
        logger.info(f"Post-apply hooks failed: {failed}")
    return failed
