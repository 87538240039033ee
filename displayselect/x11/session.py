"""X11 display session check"""

import logging
from typing import Optional

from Xlib import display as xdisplay
from Xlib.display import Display
from Xlib.error import DisplayError

from displayselect.common.errors import DisplayUnavailableError

logger = logging.getLogger(__name__)


class DisplaySession:
    """Verifies an X11 display with RandR is reachable"""

    RANDR_EXTENSION = "RANDR"

    def __init__(self, display_name: Optional[str] = None) -> None:
        """
        Initialize display session

        Args:
            display_name: X11 display name (e.g., ':0'), None for default
        """
        self._display: Optional[Display] = None
        self._display_name: Optional[str] = display_name

    def connection_establish(self) -> None:
        """
        Establish connection to X11 display

        Raises:
            DisplayUnavailableError: If the display cannot be opened
        """
        try:
            self._display = xdisplay.Display(self._display_name)
        except (DisplayError, OSError) as exc:
            target = self._display_name or "$DISPLAY"
            raise DisplayUnavailableError(f"Cannot open display {target}: {exc}") from exc

    def connection_close(self) -> None:
        """Close X11 display connection"""
        if self._display is not None:
            self._display.close()
            self._display = None

    def display_get(self) -> Display:
        """
        Get X11 display object

        Raises:
            RuntimeError: If not connected to display
        """
        if self._display is None:
            raise RuntimeError("Not connected to X11 display")
        return self._display

    def __enter__(self) -> "DisplaySession":
        """Context manager entry"""
        self.connection_establish()
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        """Context manager exit"""
        self.connection_close()

    def session_verify(self) -> None:
        """
        Check the display is reachable and supports RandR

        Raises:
            DisplayUnavailableError: If either check fails
        """
        with self:
            display = self.display_get()
            if not display.has_extension(self.RANDR_EXTENSION):
                raise DisplayUnavailableError(
                    f"Display {display.get_display_name()} does not support {self.RANDR_EXTENSION}"
                )
            logger.debug(f"Display {display.get_display_name()} reachable with RandR")
