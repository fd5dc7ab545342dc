"""Action interpreter — runs story actions against a StoryState."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fable.errors import ActionError, ResolutionError

if TYPE_CHECKING:
    from fable.story.schema import Action, Step
    from fable.story.state import StoryState

logger = logging.getLogger(__name__)


class ActionInterpreter:
    """Executes action steps in order and collects the narration they produce."""

    __slots__ = ()

    def run(self, action: Action, state: StoryState) -> list[str]:
        out: list[str] = []
        for step in action:
            if self._guards_pass(step, state):
                self._apply(step, state, out)
        return out

    @staticmethod
    def _guards_pass(step: Step, state: StoryState) -> bool:
        if step.when is not None and step.when not in state.flags:
            return False
        if step.unless is not None and step.unless in state.flags:
            return False
        return True

    def _apply(self, step: Step, state: StoryState, out: list[str]) -> None:
        if step.text is not None:
            out.append(step.text)
        if step.set_flag is not None:
            state.flags.add(step.set_flag)
        if step.clear_flag is not None:
            state.flags.discard(step.clear_flag)
        try:
            if step.give is not None:
                state.give(step.give)
            if step.remove is not None:
                state.remove(step.remove)
            if step.move_to is not None:
                state.enter(step.move_to)
        except ResolutionError as exc:
            raise ActionError(str(exc)) from exc
        if step.offer is not None:
            state.say_options = list(step.offer)
        if step.fail is not None:
            logger.debug("Action failed: %s", step.fail)
            raise ActionError(step.fail)
