"""Replay engine — re-executes recorded history against a fresh story state.

Titles are resolved again at replay time, so a log recorded against an
older build of a story replays as far as the current story still agrees
with it. The first entry that fails halts the replay: the successful
prefix and its narration are kept, everything after is dropped, and the
story state keeps the mutations of the prefix (nothing is rolled back).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from fable.errors import ActionError, ParseError, ReplayError, SemanticReplayError
from fable.history.codec import format_entry, parse
from fable.history.entries import Examine, Go, History, HistoryEntry, Say, TalkTo, Take, Use
from fable.story.interpreter import ActionInterpreter

if TYPE_CHECKING:
    from fable.story.state import StoryState

logger = logging.getLogger(__name__)

NOTHING_HAPPENS = "Nothing happens."


@dataclass(frozen=True, slots=True)
class StepResult:
    """Outcome of replaying one entry: narration, or an error message."""

    text: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class ReplayOutcome:
    """Accumulator threaded through a full replay.

    ``accepted`` holds exactly the entries that succeeded (newest first);
    ``text`` is their narration in chronological order.
    """

    accepted: History = field(default_factory=History)
    text: list[str] = field(default_factory=list)
    error: str | None = None
    skipped: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None


class ReplayEngine:
    """Replays history entries through an ActionInterpreter."""

    __slots__ = ("_interpreter",)

    def __init__(self, interpreter: ActionInterpreter | None = None) -> None:
        self._interpreter = interpreter or ActionInterpreter()

    @property
    def interpreter(self) -> ActionInterpreter:
        return self._interpreter

    def replay(self, entry: HistoryEntry, state: StoryState) -> StepResult:
        """Replay one entry. Failures come back as ``StepResult.error``."""
        try:
            text = self._execute(entry, state)
        except (ReplayError, ActionError) as exc:
            logger.debug("Replay of %r failed: %s", format_entry(entry), exc)
            return StepResult(error=str(exc))
        return StepResult(text=text)

    def replay_all(self, text: str, state: StoryState) -> ReplayOutcome:
        """Parse a serialized log and replay it oldest first.

        A malformed log is reported with no accepted entries and leaves the
        state untouched.
        """
        try:
            history = parse(text)
        except ParseError as exc:
            logger.warning("Discarding unparseable history: %s", exc)
            return ReplayOutcome(error=str(exc))
        return self.replay_history(history, state)

    def replay_history(self, history: History, state: StoryState) -> ReplayOutcome:
        outcome = ReplayOutcome()
        for entry in history.chronological():
            if outcome.error is not None:
                outcome.skipped += 1
                continue
            step = self.replay(entry, state)
            if step.ok:
                outcome.text.extend(step.text)
                outcome.accepted.record(entry)
            else:
                outcome.error = step.error

        if outcome.ok:
            logger.info("Replayed %d entries", len(outcome.accepted))
        else:
            logger.warning(
                "Replay halted after %d entries (%d dropped): %s",
                len(outcome.accepted), outcome.skipped + 1, outcome.error,
            )
        return outcome

    # -- per-entry semantics --

    def _execute(self, entry: HistoryEntry, state: StoryState) -> list[str]:
        run = self._interpreter.run
        match entry:
            case Go(exit_label=label):
                ex = state.find_exit(label)
                if state.is_blocked(ex):
                    return [ex.blocked_text]
                room = state.enter(ex.to)
                return run(room.description, state)

            case Take(object_title=title):
                state.take(state.lookup(title))
                return []

            case Examine(object_title=title):
                return run(state.lookup(title).description, state)

            case Use(object_title=title, with_title=None):
                obj = state.lookup(title)
                if obj.use is None:
                    return [NOTHING_HAPPENS]
                return run(obj.use, state)

            case Use(object_title=title, with_title=other):
                obj = state.lookup(title)
                target = state.lookup(other)
                action = obj.use_with.get(target.title)
                if action is None:
                    return [NOTHING_HAPPENS]
                return run(action, state)

            case TalkTo(character_title=title):
                obj = state.lookup(title)
                if obj.talk is None:
                    raise SemanticReplayError(f"{obj.title!r}: no talk action")
                state.clear_say_options()
                return run(obj.talk, state)

            case Say(line_title=label):
                option = state.find_say_option(label)
                state.clear_say_options()
                return run(option.action, state)

        raise TypeError(f"Not a history entry: {entry!r}")
