"""xrandr query report parsing"""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from displayselect.common.errors import ProbeError
from displayselect.common.process import (
    CommandError,
    commandArgv_split,
    commandEnvironment_build,
    command_run,
)
from displayselect.common.types import Output, Resolution

logger = logging.getLogger(__name__)

__all__ = ["XrandrProber", "xrandrReport_parse"]

# eDP-1 connected primary 1920x1080+0+0 (normal left inverted right x axis y axis) 344mm x 194mm
_HEADER_RE = re.compile(r"^(?P<name>\S+)\s+(?P<state>connected|disconnected|unknown connection)\b")
#    1920x1080     60.02*+  60.01    59.97   (or a user mode such as 1366x768_60.00)
_MODE_RE = re.compile(r"^\s+(?P<width>\d+)x(?P<height>\d+)i?(?:_\S+)?(?:\s+(?P<rates>.*))?$")


@dataclass
class _OutputBuilder:
    """Accumulates one output block while scanning the report"""
    name: str
    connected: bool
    modes: list[Resolution] = field(default_factory=list)
    preferred: Optional[Resolution] = None
    current: Optional[Resolution] = None

    def output_build(self, internal_output: str) -> Output:
        return Output(
            name=self.name,
            connected=self.connected,
            modes=tuple(self.modes),
            internal=self.name == internal_output,
            preferred=self.preferred,
            current=self.current,
        )


def xrandrReport_parse(report: str, internal_output: str) -> list[Output]:
    """
    Parse `xrandr --query` output into outputs

    Args:
        report: Raw text report
        internal_output: Name of the built-in panel

    Returns:
        Outputs in report order, connected or not

    Raises:
        ProbeError: If a mode line has no owning output or a zero dimension
    """
    builders: list[_OutputBuilder] = []

    for line_no, line in enumerate(report.splitlines(), start=1):
        if not line.strip() or line.startswith("Screen "):
            continue

        header = _HEADER_RE.match(line)
        if header:
            builders.append(
                _OutputBuilder(name=header.group("name"), connected=header.group("state") == "connected")
            )
            continue

        mode = _MODE_RE.match(line)
        if mode is None:
            logger.debug("Ignoring report line %d: %r", line_no, line)
            continue
        if not builders:
            raise ProbeError(f"Malformed xrandr report: mode on line {line_no} precedes any output")

        try:
            resolution = Resolution(width=int(mode.group("width")), height=int(mode.group("height")))
        except ValueError as exc:
            raise ProbeError(f"Malformed xrandr report on line {line_no}: {exc}") from exc

        current = builders[-1]
        current.modes.append(resolution)
        rates = mode.group("rates") or ""
        if "*" in rates:
            current.current = resolution
        if "+" in rates:
            current.preferred = resolution

    return [builder.output_build(internal_output) for builder in builders]


class XrandrProber:
    """Prober backed by the xrandr query report"""

    def __init__(
        self,
        command: str = "xrandr --query",
        internal_output: str = "eDP-1",
        display_name: Optional[str] = None,
    ) -> None:
        """
        Initialize prober

        Args:
            command: Prober command line
            internal_output: Name of the built-in panel
            display_name: X11 display name (e.g., ':0'), None for inherited DISPLAY
        """
        self._argv: list[str] = commandArgv_split(command)
        self._internal_output: str = internal_output
        self._env = commandEnvironment_build(display_name)

    def outputs_probe(self) -> list[Output]:
        """
        Run the prober and parse its report

        Returns:
            Outputs in report order

        Raises:
            ProbeError: If the prober cannot run, exits non-zero, or reports garbage
        """
        try:
            result = command_run(self._argv, env=self._env)
        except CommandError as exc:
            raise ProbeError(str(exc)) from exc

        if result.returncode != 0:
            message = result.stderr.strip() or f"{self._argv[0]} exited with {result.returncode}"
            raise ProbeError(message)

        outputs = xrandrReport_parse(result.stdout, self._internal_output)
        connected = [output.name for output in outputs if output.connected]
        logger.info(f"Probed {len(outputs)} outputs, connected: {connected}")
        return outputs
