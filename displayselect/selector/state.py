"""
Selection state machine.

The interactive flow is a chain of picker prompts. Each non-terminal state
owns exactly one prompt; `prompt_get` describes it and `selection_advance`
applies the answer. A missing answer (picker cancelled) moves any state to
CANCELLED, so no partial arrangement is ever produced.

    CHOOSE_MODE --output/manual--> DONE
    CHOOSE_MODE --multi, 2 screens--> CHOOSE_MIRROR --yes--> DONE
                                      CHOOSE_MIRROR --no--> CHOOSE_DIRECTION --> DONE
    CHOOSE_MODE --multi, 3+ screens--> CHOOSE_PRIMARY --> CHOOSE_SECONDARY
        --> CHOOSE_DIRECTION --> CHOOSE_TERTIARY --> DONE
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from displayselect.common.config import DisplayConfig
from displayselect.common.errors import InvalidSelectionError
from displayselect.common.types import (
    Arrangement,
    ChoiceKind,
    Direction,
    Extended,
    ExtendedTriple,
    Manual,
    Output,
)
from displayselect.selector.policy import (
    mirroredArrangement_build,
    modeOptions_get,
    singleArrangement_build,
    userChoice_parse,
)

logger = logging.getLogger(__name__)

__all__ = [
    "MIRROR_OPTIONS",
    "Prompt",
    "SelectionSession",
    "SelectionState",
    "prompt_get",
    "selection_advance",
]

MIRROR_OPTIONS: tuple[str, str] = ("no", "yes")
DIRECTION_OPTIONS: tuple[str, ...] = tuple(direction.value for direction in Direction)


class SelectionState(Enum):
    """States of the interactive selection"""
    CHOOSE_MODE = "choose_mode"
    CHOOSE_MIRROR = "choose_mirror"
    CHOOSE_PRIMARY = "choose_primary"
    CHOOSE_SECONDARY = "choose_secondary"
    CHOOSE_DIRECTION = "choose_direction"
    CHOOSE_TERTIARY = "choose_tertiary"
    DONE = "done"
    CANCELLED = "cancelled"

    def isTerminal(self) -> bool:
        """Check if no further prompt follows"""
        return self in (SelectionState.DONE, SelectionState.CANCELLED)


@dataclass(frozen=True)
class Prompt:
    """Picker prompt for one state"""
    text: str
    options: tuple[str, ...]


@dataclass
class SelectionSession:
    """Answers collected so far for one selector invocation"""
    outputs: tuple[Output, ...]
    connected: tuple[Output, ...]
    display: DisplayConfig
    state: SelectionState = SelectionState.CHOOSE_MODE
    primary: Optional[Output] = None
    secondary: Optional[Output] = None
    direction: Optional[Direction] = None
    tertiary: Optional[Output] = None
    arrangement: Optional[Arrangement] = None
    cancelled_prompt: str = ""
    history: list[tuple[SelectionState, str]] = field(default_factory=list)

    def remaining_get(self) -> list[Output]:
        """Connected outputs not yet assigned a role"""
        taken = {o.name for o in (self.primary, self.secondary, self.tertiary) if o is not None}
        return [output for output in self.connected if output.name not in taken]

    def isTwoScreen(self) -> bool:
        return len(self.connected) == 2


def prompt_get(session: SelectionSession) -> Prompt:
    """
    Describe the prompt for the session's current state.

    Args:
        session: Selection session in a non-terminal state.

    Returns:
        Prompt text and options.

    Raises:
        ValueError: If the state is terminal.
    """
    state = session.state
    if state is SelectionState.CHOOSE_MODE:
        return Prompt("Select display arrangement:", tuple(modeOptions_get(session.connected)))
    if state is SelectionState.CHOOSE_MIRROR:
        return Prompt("Mirror displays?", MIRROR_OPTIONS)
    if state is SelectionState.CHOOSE_PRIMARY:
        return Prompt(
            "Select primary display:", tuple(o.name for o in session.remaining_get())
        )
    if state is SelectionState.CHOOSE_SECONDARY:
        return Prompt(
            "Select secondary display:", tuple(o.name for o in session.remaining_get())
        )
    if state is SelectionState.CHOOSE_DIRECTION:
        assert session.primary is not None and session.secondary is not None
        return Prompt(
            f"What side of {session.primary.name} should {session.secondary.name} be on?",
            DIRECTION_OPTIONS,
        )
    if state is SelectionState.CHOOSE_TERTIARY:
        return Prompt("Select third display:", tuple(o.name for o in session.remaining_get()))
    raise ValueError(f"No prompt in terminal state {state.value}")


def _option_check(selection: str, prompt: Prompt) -> None:
    if selection not in prompt.options:
        raise InvalidSelectionError(selection, list(prompt.options))


def _outputByName_get(session: SelectionSession, name: str) -> Output:
    for output in session.connected:
        if output.name == name:
            return output
    raise InvalidSelectionError(name, [output.name for output in session.connected])


def _modeSelection_apply(session: SelectionSession, selection: str) -> SelectionState:
    choice = userChoice_parse(selection, session.connected)

    if choice.kind is ChoiceKind.MANUAL:
        session.arrangement = Manual()
        return SelectionState.DONE

    if choice.kind is ChoiceKind.OUTPUT:
        assert choice.output is not None
        session.arrangement = singleArrangement_build(
            _outputByName_get(session, choice.output), session.outputs, session.display
        )
        return SelectionState.DONE

    if session.isTwoScreen():
        session.primary, session.secondary = session.connected
        return SelectionState.CHOOSE_MIRROR
    return SelectionState.CHOOSE_PRIMARY


def _mirrorSelection_apply(session: SelectionSession, selection: str) -> SelectionState:
    assert session.primary is not None and session.secondary is not None
    if selection == "yes":
        session.arrangement = mirroredArrangement_build(
            session.primary, session.secondary, session.display
        )
        return SelectionState.DONE
    return SelectionState.CHOOSE_DIRECTION


def _directionSelection_apply(session: SelectionSession, selection: str) -> SelectionState:
    assert session.primary is not None and session.secondary is not None
    session.direction = Direction(selection)
    if session.isTwoScreen():
        session.arrangement = Extended(
            primary=session.primary.name,
            secondary=session.secondary.name,
            direction=session.direction,
            primary_resolution=session.display.far_resolution,
        )
        return SelectionState.DONE
    return SelectionState.CHOOSE_TERTIARY


def _tertiarySelection_apply(session: SelectionSession, selection: str) -> SelectionState:
    assert session.primary is not None and session.secondary is not None
    assert session.direction is not None
    session.tertiary = _outputByName_get(session, selection)

    untouched = [output.name for output in session.remaining_get()]
    if untouched:
        logger.warning(f"Outputs left untouched by three-screen arrangement: {untouched}")

    session.arrangement = ExtendedTriple(
        primary=session.primary.name,
        secondary=session.secondary.name,
        secondary_direction=session.direction,
        tertiary=session.tertiary.name,
        tertiary_direction=session.direction.complement(),
    )
    return SelectionState.DONE


def selection_advance(session: SelectionSession, selection: Optional[str]) -> SelectionState:
    """
    Apply one picker answer and move to the next state.

    Args:
        session: Session in a non-terminal state; updated in place.
        selection: Picker answer, or None when cancelled.

    Returns:
        New state (also stored on the session).

    Raises:
        InvalidSelectionError: If the answer is not an offered option.
        ArrangementError: If the resulting arrangement would be degenerate.
    """
    prompt = prompt_get(session)

    if selection is None:
        session.cancelled_prompt = prompt.text
        session.state = SelectionState.CANCELLED
        return session.state

    _option_check(selection, prompt)
    session.history.append((session.state, selection))

    state = session.state
    if state is SelectionState.CHOOSE_MODE:
        next_state = _modeSelection_apply(session, selection)
    elif state is SelectionState.CHOOSE_MIRROR:
        next_state = _mirrorSelection_apply(session, selection)
    elif state is SelectionState.CHOOSE_PRIMARY:
        session.primary = _outputByName_get(session, selection)
        next_state = SelectionState.CHOOSE_SECONDARY
    elif state is SelectionState.CHOOSE_SECONDARY:
        session.secondary = _outputByName_get(session, selection)
        next_state = SelectionState.CHOOSE_DIRECTION
    elif state is SelectionState.CHOOSE_DIRECTION:
        next_state = _directionSelection_apply(session, selection)
    else:
        next_state = _tertiarySelection_apply(session, selection)

    logger.debug(f"[STATE] {state.value} --{selection}--> {next_state.value}")
    session.state = next_state
    return next_state
