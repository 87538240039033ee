"""
Selector pipeline.

One run: session check, probe + selection, then either the manual hand-off
or a single apply followed by the post-apply hooks. Errors propagate to the
caller; hooks and notifications never raise.
"""

from __future__ import annotations

import logging

from displayselect.common.config import DisplayConfig
from displayselect.common.runtime_models import Components
from displayselect.common.types import Arrangement, Manual, Single
from displayselect.desktop.hooks import postApplyHooks_run
from displayselect.selector.selector import ArrangementSelector

logger = logging.getLogger(__name__)

__all__ = ["AUTO_CONFIGURED_BODY", "AUTO_CONFIGURED_SUMMARY", "displaySelect_run"]

AUTO_CONFIGURED_SUMMARY: str = "Only one screen detected."
AUTO_CONFIGURED_BODY: str = "Using it in its optimal settings..."


def displaySelect_run(components: Components, display: DisplayConfig) -> Arrangement:
    """
    Select and realize a display arrangement.

    Args:
        components:
            Collaborators for this run.
        display:
            Output naming and resolution policy.

    Returns:
        The arrangement that was applied or handed off.

    Raises:
        DisplayUnavailableError:
            Raised when no display session is reachable.
        NoDisplayError, SelectionError, ArrangementError, ProbeError:
            Raised before anything is applied.
        ApplyError:
            Raised when the applier or manual tool fails; hooks do not run.
    """
    if components.session is not None:
        components.session.session_verify()

    selector = ArrangementSelector(components.prober, components.picker, display)
    arrangement: Arrangement = selector.arrangement_select()

    if isinstance(arrangement, Manual):
        components.manual.manual_launch()
        return arrangement

    components.applier.arrangement_apply(arrangement)
    postApplyHooks_run(components.hooks)

    if isinstance(arrangement, Single) and arrangement.auto_configured:
        components.notifier.notification_send(AUTO_CONFIGURED_SUMMARY, AUTO_CONFIGURED_BODY)

    return arrangement
