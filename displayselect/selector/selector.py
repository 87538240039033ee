"""Arrangement selector: classifies connected screens and drives the picker"""

import logging

from displayselect.backend.protocols import Picker, Prober
from displayselect.common.config import DisplayConfig
from displayselect.common.errors import NoDisplayError, SelectionCancelledError
from displayselect.common.types import Arrangement
from displayselect.selector.policy import connectedOutputs_filter, singleArrangement_build
from displayselect.selector.state import (
    SelectionSession,
    SelectionState,
    prompt_get,
    selection_advance,
)

logger = logging.getLogger(__name__)


class ArrangementSelector:
    """Builds one Arrangement per invocation from a probe and user answers"""

    def __init__(self, prober: Prober, picker: Picker, display: DisplayConfig) -> None:
        """
        Initialize selector

        Args:
            prober: Source of probed outputs
            picker: Interactive single-choice prompt
            display: Output naming and resolution policy
        """
        self._prober = prober
        self._picker = picker
        self._display = display

    def arrangement_select(self) -> Arrangement:
        """
        Probe outputs and choose an arrangement

        Returns:
            Arrangement to apply (or Manual to hand off)

        Raises:
            NoDisplayError: If no output is connected
            SelectionCancelledError: If the user dismisses any prompt
            InvalidSelectionError: If the picker returns an unknown option
            ArrangementError: If the computed arrangement would be degenerate
        """
        outputs = self._prober.outputs_probe()
        connected = connectedOutputs_filter(outputs)

        if not connected:
            raise NoDisplayError()

        if len(connected) == 1:
            logger.info(f"Only {connected[0].name} connected, configuring it directly")
            return singleArrangement_build(
                connected[0], outputs, self._display, auto_configured=True
            )

        session = SelectionSession(
            outputs=tuple(outputs),
            connected=tuple(connected),
            display=self._display,
        )
        while not session.state.isTerminal():
            prompt = prompt_get(session)
            selection = self._picker.choice_pick(prompt.text, list(prompt.options))
            selection_advance(session, selection)

        if session.state is SelectionState.CANCELLED:
            raise SelectionCancelledError(session.cancelled_prompt)

        assert session.arrangement is not None
        logger.info(f"Selected arrangement: {session.arrangement}")
        return session.arrangement
