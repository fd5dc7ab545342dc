"""Session start-up and live play.

``init_story`` is the single entry point used when a session begins: it
runs the story's init action, replays the persisted log, and reports either
the narration to show or a truncated log the caller should persist instead.
``GameSession`` wraps that for live play and grows the history one
successful action at a time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from fable.errors import ActionError, ParseError
from fable.history.codec import parse_entry, serialize
from fable.history.entries import History, HistoryEntry, validate_entry
from fable.engine.replay import ReplayEngine, StepResult
from fable.story.state import StoryState

if TYPE_CHECKING:
    from fable.story.schema import Story

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SessionRestored:
    """The whole log replayed."""

    historic_txt: list[str] = field(default_factory=list)
    init_txt: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class SessionRecovery:
    """Replay stopped early; ``restored_path`` is the log of the valid prefix."""

    restored_path: str
    error: str


def _run_init_and_replay(
    path: str, state: StoryState, engine: ReplayEngine,
) -> tuple[History, SessionRestored | SessionRecovery]:
    try:
        init_txt = engine.interpreter.run(state.init_action, state)
    except ActionError as exc:
        logger.warning("Story init action failed: %s", exc)
        return History(), SessionRecovery(restored_path="", error=str(exc))
    outcome = engine.replay_all(path, state)
    if not outcome.ok:
        return outcome.accepted, SessionRecovery(
            restored_path=serialize(outcome.accepted),
            error=outcome.error or "",
        )
    return outcome.accepted, SessionRestored(
        historic_txt=outcome.text,
        init_txt=init_txt if path == "" else [],
    )


def init_story(
    path: str, state: StoryState, engine: ReplayEngine | None = None,
) -> SessionRestored | SessionRecovery:
    """Run the story's init action, then replay *path* on *state*.

    Init narration is only returned for a brand-new session (empty *path*).
    """
    _, result = _run_init_and_replay(path, state, engine or ReplayEngine())
    return result


@dataclass(frozen=True, slots=True)
class SessionStart:
    """What a caller needs after starting a session."""

    result: SessionRestored | SessionRecovery
    path: str

    @property
    def narration(self) -> list[str]:
        if isinstance(self.result, SessionRecovery):
            return []
        return self.result.init_txt + self.result.historic_txt


class GameSession:
    """A live play session over one story.

    Every successful action is recorded in ``history``; ``path`` is the log
    the caller should persist after each action.
    """

    __slots__ = ("_story", "_engine", "_state", "_history")

    def __init__(self, story: Story, engine: ReplayEngine | None = None) -> None:
        self._story = story
        self._engine = engine or ReplayEngine()
        self._state = StoryState(story)
        self._history = History()

    @property
    def state(self) -> StoryState:
        return self._state

    @property
    def history(self) -> History:
        return self._history

    @property
    def path(self) -> str:
        return serialize(self._history)

    def start(self, path: str = "") -> SessionStart:
        """Reset to a fresh story state and restore *path* on it."""
        self._state = StoryState(self._story)
        accepted, result = _run_init_and_replay(path, self._state, self._engine)
        self._history = accepted
        if isinstance(result, SessionRecovery):
            logger.warning("Saved history only partly restored: %s", result.error)
        return SessionStart(result=result, path=self.path)

    def perform(self, entry: HistoryEntry) -> StepResult:
        """Run one player action; record it only if it succeeds."""
        try:
            validate_entry(entry)
        except ValueError as exc:
            return StepResult(error=str(exc))
        before = self._state.snapshot()
        step = self._engine.replay(entry, self._state)
        if step.ok:
            self._history.record(entry)
        else:
            # Failed actions are not recorded; undo their partial effects.
            self._state.restore(before)
        return step

    def command(self, line: str) -> StepResult:
        """Parse a player command such as ``"take lamp"`` and perform it.

        Raises ``ParseError`` if the command is not a recognised action.
        """
        if "\n" in line:
            raise ParseError(1, line, "command spans several lines")
        return self.perform(parse_entry(line))
