"""xrandr command composition and invocation"""

import logging
import shlex
import sys
from typing import Optional, TextIO

from displayselect.common.errors import ApplyError
from displayselect.common.process import (
    CommandError,
    commandArgv_split,
    commandEnvironment_build,
    command_run,
)
from displayselect.common.types import (
    Arrangement,
    Extended,
    ExtendedTriple,
    Manual,
    Mirrored,
    Resolution,
    Single,
)

logger = logging.getLogger(__name__)

__all__ = ["DryRunApplier", "XrandrApplier", "xrandrArguments_build"]

_UNIT_SCALE = "1.0x1.0"


def _modeArguments_get(resolution: Optional[Resolution]) -> list[str]:
    """Return `--mode WxH`, or `--auto` for the native mode"""
    if resolution is None:
        return ["--auto"]
    return ["--mode", str(resolution)]


def xrandrArguments_build(arrangement: Arrangement, dpi: Optional[int] = None) -> list[str]:
    """
    Compose xrandr arguments describing every involved output

    Args:
        arrangement: Arrangement to translate
        dpi: Optional DPI passed as a global option

    Returns:
        Argument list (without the executable)

    Raises:
        TypeError: If the arrangement is Manual or unknown
    """
    args: list[str] = []
    if dpi is not None:
        args += ["--dpi", str(dpi)]

    if isinstance(arrangement, Single):
        args += ["--output", arrangement.output]
        args += _modeArguments_get(arrangement.resolution)
        args += ["--scale", _UNIT_SCALE]
        for name in arrangement.others_off:
            args += ["--output", name, "--off"]

    elif isinstance(arrangement, Mirrored):
        args += ["--output", arrangement.primary]
        args += _modeArguments_get(arrangement.primary_resolution)
        args += ["--scale", _UNIT_SCALE]
        args += ["--output", arrangement.secondary]
        args += _modeArguments_get(arrangement.secondary_resolution)
        args += ["--same-as", arrangement.primary]
        args += ["--scale", f"{arrangement.scale_x}x{arrangement.scale_y}"]

    elif isinstance(arrangement, Extended):
        args += ["--output", arrangement.primary]
        args += _modeArguments_get(arrangement.primary_resolution)
        args += ["--scale", _UNIT_SCALE]
        args += ["--output", arrangement.secondary, "--auto", "--scale", _UNIT_SCALE]
        args += [arrangement.direction.relativeFlag_get(), arrangement.primary]

    elif isinstance(arrangement, ExtendedTriple):
        args += ["--output", arrangement.primary, "--auto", "--scale", _UNIT_SCALE]
        args += ["--output", arrangement.secondary, "--auto", "--scale", _UNIT_SCALE]
        args += [arrangement.secondary_direction.relativeFlag_get(), arrangement.primary]
        args += ["--output", arrangement.tertiary, "--auto", "--scale", _UNIT_SCALE]
        args += [arrangement.tertiary_direction.relativeFlag_get(), arrangement.primary]

    elif isinstance(arrangement, Manual):
        raise TypeError("Manual arrangement is handed to the manual tool, not applied")

    else:
        raise TypeError(f"Unsupported arrangement type: {type(arrangement).__name__}")

    return args


class XrandrApplier:
    """Applier issuing one xrandr invocation per arrangement"""

    def __init__(
        self,
        command: str = "xrandr",
        dpi: Optional[int] = None,
        display_name: Optional[str] = None,
    ) -> None:
        """
        Initialize applier

        Args:
            command: Applier command line
            dpi: Optional DPI passed with every invocation
            display_name: X11 display name, None for inherited DISPLAY
        """
        self._argv: list[str] = commandArgv_split(command)
        self._dpi: Optional[int] = dpi
        self._env = commandEnvironment_build(display_name)

    def argv_build(self, arrangement: Arrangement) -> list[str]:
        """Return the full command line for an arrangement"""
        return self._argv + xrandrArguments_build(arrangement, self._dpi)

    def arrangement_apply(self, arrangement: Arrangement) -> None:
        """
        Apply arrangement

        Args:
            arrangement: Arrangement to apply

        Raises:
            ApplyError: If xrandr cannot run or exits non-zero
        """
        argv = self.argv_build(arrangement)
        logger.info(f"Applying arrangement: {shlex.join(argv)}")
        try:
            result = command_run(argv, env=self._env)
        except CommandError as exc:
            raise ApplyError(str(exc)) from exc

        if result.returncode != 0:
            raise ApplyError(
                result.stderr.strip() or f"{argv[0]} exited with {result.returncode}"
            )


class DryRunApplier(XrandrApplier):
    """Applier that prints the command line instead of running it"""

    def __init__(
        self,
        command: str = "xrandr",
        dpi: Optional[int] = None,
        display_name: Optional[str] = None,
        stream: Optional[TextIO] = None,
    ) -> None:
        super().__init__(command=command, dpi=dpi, display_name=display_name)
        self._stream: TextIO = stream if stream is not None else sys.stdout

    def arrangement_apply(self, arrangement: Arrangement) -> None:
        """Print the command that would be run"""
        print(shlex.join(self.argv_build(arrangement)), file=self._stream)
