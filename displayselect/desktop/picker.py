"""dmenu-style picker client."""

from __future__ import annotations

import logging
from typing import Optional

from displayselect.common.errors import SelectionError
from displayselect.common.process import (
    CommandError,
    commandArgv_split,
    commandEnvironment_build,
    command_run,
)

logger = logging.getLogger(__name__)

__all__ = ["DmenuPicker"]


class DmenuPicker:
    """Picker reading options on stdin and printing the selection on stdout."""

    def __init__(
        self,
        command: str = "dmenu -i",
        prompt_flag: str = "-p",
        display_name: Optional[str] = None,
    ) -> None:
        """
        Initialize picker.

        Args:
            command: Picker command line (e.g. `dmenu -i`, `rofi -dmenu -i`).
            prompt_flag: Flag introducing the prompt text; empty to omit prompts.
            display_name: X11 display name, None for inherited DISPLAY.
        """
        self._argv: list[str] = commandArgv_split(command)
        self._prompt_flag: str = prompt_flag
        self._env = commandEnvironment_build(display_name)

    def choice_pick(self, prompt: str, options: list[str]) -> Optional[str]:
        """
        Show options and block until the user answers.

        dmenu exits non-zero with empty output on escape; both count as cancel.

        Args:
            prompt: Prompt text.
            options: Ordered options.

        Returns:
            Selected line, or None on cancel.

        Raises:
            SelectionError: If the picker cannot be started.
        """
        argv: list[str] = list(self._argv)
        if self._prompt_flag:
            argv += [self._prompt_flag, prompt]

        try:
            result = command_run(argv, input_text="\n".join(options) + "\n", env=self._env)
        except CommandError as exc:
            raise SelectionError(f"Picker unavailable: {exc}") from exc

        selection: str = result.stdout.strip()
        if result.returncode != 0 or not selection:
            logger.debug(f"Picker cancelled at '{prompt}' (exit {result.returncode})")
            return None
        return selection
