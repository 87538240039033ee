"""
Arrangement construction policy.

Pure helpers turning probed outputs and user answers into immutable
Arrangement values: resolution choice per output, the scaled-mirror
computation and parsing of the arrangement prompt answer.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

from displayselect.common.config import DisplayConfig
from displayselect.common.errors import ArrangementError, InvalidSelectionError
from displayselect.common.types import (
    ChoiceKind,
    Mirrored,
    Output,
    Resolution,
    Single,
    UserChoice,
)

__all__ = [
    "connectedOutputs_filter",
    "mirrorScale_compute",
    "mirroredArrangement_build",
    "modeOptions_get",
    "outputResolution_get",
    "singleArrangement_build",
    "userChoice_parse",
]


def connectedOutputs_filter(outputs: Sequence[Output]) -> list[Output]:
    """
    Keep connected outputs in prober order.

    Args:
        outputs: All probed outputs.

    Returns:
        Connected outputs; prober order is the canonical ordering.
    """
    return [output for output in outputs if output.connected]


def outputResolution_get(output: Output, display: DisplayConfig) -> Optional[Resolution]:
    """
    Resolve the mode used when an output is shown on its own.

    Args:
        output: Output to configure.
        display: Display policy.

    Returns:
        Close-up resolution for the internal panel, None (auto) otherwise.
    """
    if output.internal:
        return display.close_resolution
    return None


def singleArrangement_build(
    output: Output,
    outputs: Sequence[Output],
    display: DisplayConfig,
    auto_configured: bool = False,
) -> Single:
    """
    Build a one-output arrangement switching every other output off.

    Args:
        output: Output to keep on.
        outputs: Every probed output, connected or not.
        display: Display policy.
        auto_configured: True on the no-prompt fast path.

    Returns:
        Single arrangement.
    """
    return Single(
        output=output.name,
        resolution=outputResolution_get(output, display),
        others_off=tuple(other.name for other in outputs if other.name != output.name),
        auto_configured=auto_configured,
    )


def mirrorScale_compute(primary: Resolution, secondary: Resolution) -> tuple[float, float]:
    """
    Compute secondary scale factors so it shows the primary's full frame.

    Args:
        primary: Primary output resolution.
        secondary: Secondary output resolution.

    Returns:
        Tuple of `(scale_x, scale_y)` as primary/secondary ratios.

    Raises:
        ArrangementError:
            Raised when a secondary dimension is zero or a factor is not finite.
    """
    if secondary.width <= 0 or secondary.height <= 0:
        raise ArrangementError(f"Cannot mirror onto zero-sized resolution {secondary}")

    scale_x: float = primary.width / secondary.width
    scale_y: float = primary.height / secondary.height
    if not (math.isfinite(scale_x) and math.isfinite(scale_y)) or scale_x <= 0 or scale_y <= 0:
        raise ArrangementError(
            f"Degenerate mirror scale {scale_x}x{scale_y} for {primary} over {secondary}"
        )
    return scale_x, scale_y


def mirroredArrangement_build(
    primary: Output, secondary: Output, display: DisplayConfig
) -> Mirrored:
    """
    Build a scaled mirror of primary onto secondary.

    The primary runs at the close-up resolution; the secondary runs at its
    last-listed mode, scaled to cover the primary's frame.

    Args:
        primary: First connected output.
        secondary: Other connected output.
        display: Display policy.

    Returns:
        Mirrored arrangement.

    Raises:
        ArrangementError:
            Raised when the secondary reports no modes or scaling is degenerate.
    """
    secondary_resolution: Optional[Resolution] = secondary.lastMode_get()
    if secondary_resolution is None:
        raise ArrangementError(f"Output {secondary.name} reports no modes to mirror onto")

    primary_resolution: Resolution = display.close_resolution
    scale_x, scale_y = mirrorScale_compute(primary_resolution, secondary_resolution)
    return Mirrored(
        primary=primary.name,
        secondary=secondary.name,
        primary_resolution=primary_resolution,
        secondary_resolution=secondary_resolution,
        scale_x=scale_x,
        scale_y=scale_y,
    )


def modeOptions_get(connected: Sequence[Output]) -> list[str]:
    """Return arrangement prompt options: outputs, then the two sentinels."""
    return [output.name for output in connected] + [
        ChoiceKind.MULTI_MONITOR.value,
        ChoiceKind.MANUAL.value,
    ]


def userChoice_parse(selection: str, connected: Sequence[Output]) -> UserChoice:
    """
    Parse the arrangement prompt answer.

    Args:
        selection: Picker answer.
        connected: Connected outputs offered in the prompt.

    Returns:
        Parsed user choice.

    Raises:
        InvalidSelectionError:
            Raised when the answer is not an offered option.
    """
    if selection == ChoiceKind.MANUAL.value:
        return UserChoice(kind=ChoiceKind.MANUAL)
    if selection == ChoiceKind.MULTI_MONITOR.value:
        return UserChoice(kind=ChoiceKind.MULTI_MONITOR)
    if selection in {output.name for output in connected}:
        return UserChoice(kind=ChoiceKind.OUTPUT, output=selection)
    raise InvalidSelectionError(selection, modeOptions_get(connected))
