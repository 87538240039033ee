"""Error taxonomy for displayselect

Every error carries the process exit code the CLI reports for it.
"""

from __future__ import annotations

__all__ = [
    "ApplyError",
    "ArrangementError",
    "DisplaySelectError",
    "DisplayUnavailableError",
    "InvalidSelectionError",
    "NoDisplayError",
    "ProbeError",
    "SelectionCancelledError",
    "SelectionError",
]


class DisplaySelectError(Exception):
    """Base class for fatal displayselect errors"""

    exit_code: int = 1


class NoDisplayError(DisplaySelectError):
    """No connected outputs were detected"""

    exit_code = 2

    def __init__(self, message: str = "No connected displays detected") -> None:
        super().__init__(message)


class SelectionError(DisplaySelectError):
    """Interactive selection did not produce a usable answer"""

    exit_code = 1


class SelectionCancelledError(SelectionError):
    """User dismissed a picker prompt"""

    def __init__(self, prompt: str = "") -> None:
        self.prompt: str = prompt
        message = f"Selection cancelled at '{prompt}'" if prompt else "Selection cancelled"
        super().__init__(message)


class InvalidSelectionError(SelectionError):
    """Picker returned text that is not one of the offered options"""

    def __init__(self, selection: str, options: list[str]) -> None:
        self.selection: str = selection
        self.options: list[str] = list(options)
        super().__init__(f"Invalid selection '{selection}', expected one of: {', '.join(options)}")


class ApplyError(DisplaySelectError):
    """External arrangement tool failed"""

    exit_code = 3


class ProbeError(DisplaySelectError):
    """Display prober failed or returned a malformed report"""

    exit_code = 4


class DisplayUnavailableError(DisplaySelectError):
    """No reachable graphical display session"""

    exit_code = 4


class ArrangementError(DisplaySelectError, ValueError):
    """Computed arrangement would be degenerate"""

    exit_code = 5
