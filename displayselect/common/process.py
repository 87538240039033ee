"""
External command execution.

Every collaborator (prober, applier, picker, notifier, hooks) is a blocking
child process. This module owns argv splitting, the DISPLAY environment and
the single `subprocess.run` call site.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from typing import Optional

logger = logging.getLogger(__name__)

__all__ = ["CommandError", "commandArgv_split", "commandEnvironment_build", "command_run"]


class CommandError(RuntimeError):
    """Command could not be started or exceeded its timeout"""


def commandArgv_split(command: str) -> list[str]:
    """
    Split a configured command line into argv.

    Args:
        command:
            Shell-style command string, e.g. `dmenu -i`.

    Returns:
        Argument vector.

    Raises:
        ValueError:
            Raised when the command is empty.
    """
    argv: list[str] = shlex.split(command)
    if not argv:
        raise ValueError("Command line must not be empty")
    return argv


def commandEnvironment_build(display_name: Optional[str]) -> Optional[dict[str, str]]:
    """
    Build child environment with DISPLAY pinned when a display is configured.

    Args:
        display_name:
            Optional X display name.

    Returns:
        Environment mapping, or None to inherit the parent environment.
    """
    if not display_name:
        return None
    env: dict[str, str] = dict(os.environ)
    env["DISPLAY"] = display_name
    return env


def command_run(
    argv: list[str],
    input_text: Optional[str] = None,
    env: Optional[dict[str, str]] = None,
    timeout: Optional[float] = None,
    capture: bool = True,
) -> subprocess.CompletedProcess[str]:
    """
    Run a command to completion, capturing text output.

    Args:
        argv:
            Argument vector.
        input_text:
            Optional text written to stdin.
        env:
            Optional child environment.
        timeout:
            Optional timeout in seconds.
        capture:
            When False, stdout and stderr go to /dev/null so daemons forked
            by the command do not hold our pipes open. The returned
            `stdout`/`stderr` are then None.

    Returns:
        Completed process; non-zero exit codes are returned, not raised.

    Raises:
        CommandError:
            Raised when the executable cannot be started or times out.
    """
    logger.debug("Running: %s", shlex.join(argv))
    output_kwargs: dict[str, object]
    if capture:
        output_kwargs = {"capture_output": True}
    else:
        output_kwargs = {"stdout": subprocess.DEVNULL, "stderr": subprocess.DEVNULL}
    try:
        return subprocess.run(
            argv,
            input=input_text,
            text=True,
            env=env,
            timeout=timeout,
            **output_kwargs,
        )
    except subprocess.TimeoutExpired as exc:
        raise CommandError(f"{argv[0]} timed out after {timeout}s") from exc
    except OSError as exc:
        raise CommandError(f"Failed to run {argv[0]}: {exc}") from exc
