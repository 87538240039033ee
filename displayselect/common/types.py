"""Common types and data structures for displayselect"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Direction(Enum):
    """Side of the primary output a secondary output is placed on"""
    LEFT = "left"
    RIGHT = "right"

    def complement(self) -> "Direction":
        """Return the opposite side"""
        return Direction.RIGHT if self is Direction.LEFT else Direction.LEFT

    def relativeFlag_get(self) -> str:
        """Return the applier flag placing an output on this side"""
        return f"--{self.value}-of"


@dataclass(frozen=True)
class Resolution:
    """Output resolution in pixels, serialized as ``WxH``"""
    width: int
    height: int

    def __post_init__(self) -> None:
        """Reject non-positive dimensions"""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Resolution dimensions must be positive, got {self.width}x{self.height}"
            )

    @classmethod
    def parse(cls, text: str) -> "Resolution":
        """
        Parse a ``WxH`` string

        Args:
            text: Resolution string such as ``1600x900``

        Returns:
            Parsed Resolution

        Raises:
            ValueError: If the string is not ``WxH`` with positive integers
        """
        width_str, sep, height_str = str(text).strip().lower().partition("x")
        if not sep:
            raise ValueError(f"Invalid resolution '{text}', expected WxH")
        try:
            return cls(width=int(width_str), height=int(height_str))
        except ValueError as exc:
            raise ValueError(f"Invalid resolution '{text}': {exc}") from exc

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class Output:
    """Display output as reported by the prober"""
    name: str
    connected: bool
    modes: tuple[Resolution, ...] = ()
    internal: bool = False
    preferred: Optional[Resolution] = None
    current: Optional[Resolution] = None

    def lastMode_get(self) -> Optional[Resolution]:
        """Return the last-listed mode, or None when no modes are reported"""
        return self.modes[-1] if self.modes else None


@dataclass(frozen=True)
class Single:
    """One output on, every other listed output off"""
    output: str
    resolution: Optional[Resolution]  # None: native/auto mode
    others_off: tuple[str, ...] = ()
    auto_configured: bool = False


@dataclass(frozen=True)
class Mirrored:
    """Secondary output mirrors primary, scaled to the primary's resolution"""
    primary: str
    secondary: str
    primary_resolution: Resolution
    secondary_resolution: Resolution
    scale_x: float
    scale_y: float

    def __post_init__(self) -> None:
        """Reject degenerate scale factors"""
        for axis, scale in (("x", self.scale_x), ("y", self.scale_y)):
            if not math.isfinite(scale) or scale <= 0:
                raise ValueError(f"Mirror scale {axis} must be finite and positive, got {scale}")


@dataclass(frozen=True)
class Extended:
    """Two outputs side by side"""
    primary: str
    secondary: str
    direction: Direction
    primary_resolution: Optional[Resolution] = None


@dataclass(frozen=True)
class ExtendedTriple:
    """Three outputs: secondary and tertiary on opposite sides of primary"""
    primary: str
    secondary: str
    secondary_direction: Direction
    tertiary: str
    tertiary_direction: Optional[Direction] = None

    def __post_init__(self) -> None:
        """Derive or validate the tertiary side"""
        expected = self.secondary_direction.complement()
        if self.tertiary_direction is None:
            object.__setattr__(self, "tertiary_direction", expected)
        elif self.tertiary_direction is not expected:
            raise ValueError(
                f"Tertiary direction must be {expected.value} when secondary is "
                f"{self.secondary_direction.value}"
            )


@dataclass(frozen=True)
class Manual:
    """Defer to the external manual arrangement tool"""


Arrangement = Single | Mirrored | Extended | ExtendedTriple | Manual


class ChoiceKind(Enum):
    """Kinds of answer to the arrangement prompt"""
    OUTPUT = "output"
    MULTI_MONITOR = "multi-monitor"
    MANUAL = "manual selection"


@dataclass(frozen=True)
class UserChoice:
    """Parsed answer to the arrangement prompt"""
    kind: ChoiceKind
    output: Optional[str] = None
