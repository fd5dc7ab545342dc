"""SessionManager — owns the live GameSession behind the HTTP API.

FastAPI runs sync handlers on a threadpool, so every operation that touches
the session takes ``_lock``: the story state has exactly one writer at a
time.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from fable.engine.replay import StepResult
from fable.engine.session import GameSession, SessionStart
from fable.errors import FableError
from fable.history.codec import format_entry
from fable.story.loader import load_story
from fable.utils.transcript import Transcript

if TYPE_CHECKING:
    from fable.config import EngineConfig
    from fable.story.schema import Story

logger = logging.getLogger(__name__)


class SessionNotStarted(FableError):
    """An action arrived before ``start()``."""


class SessionManager:
    """Single-session wrapper providing thread-safe access to:

      - session start / restore from a persisted log
      - player actions, one at a time
      - a read-only view of the story state and the narration transcript
    """

    def __init__(self, config: EngineConfig, story: Story | None = None) -> None:
        self._config = config
        self._story = story if story is not None else load_story(config.story_file)
        self._session = GameSession(self._story)
        self._transcript = Transcript(config.transcript_limit)
        self._lock = threading.Lock()
        self._started = False
        self._turn = 0

    # -- public properties --

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def story(self) -> Story:
        return self._story

    @property
    def started(self) -> bool:
        return self._started

    @property
    def turn(self) -> int:
        return self._turn

    @property
    def transcript(self) -> Transcript:
        return self._transcript

    # -- lifecycle --

    def start(self, log: str = "") -> SessionStart:
        with self._lock:
            start = self._session.start(log)
            self._transcript.clear()
            self._turn = len(self._session.history)
            if start.narration:
                self._transcript.append_many(self._turn, "history" if log else "init", start.narration)
            self._started = True
            logger.info("Session started at turn %d", self._turn)
            return start

    def act(self, command: str) -> tuple[StepResult, str]:
        """Perform one command. Returns the step result and the log to persist.

        Raises ``ParseError`` for unrecognised commands.
        """
        with self._lock:
            if not self._started:
                raise SessionNotStarted("No session started; POST /session/start first.")
            step = self._session.command(command)
            if step.ok:
                self._turn += 1
                self._transcript.append_many(self._turn, command, step.text)
            else:
                logger.info("Rejected %r: %s", command, step.error)
            return step, self._session.path

    def view(self) -> dict:
        """Snapshot of the player-visible story state."""
        with self._lock:
            state = self._session.state
            return {
                "turn": self._turn,
                "room": state.room,
                "visible": [o.title for o in state.visible_objects()],
                "exits": [ex.label for ex in state.current_room.exits],
                "inventory": state.inventory,
                "say_options": [o.label for o in state.say_options],
                "history": [format_entry(e) for e in self._session.history.chronological()],
                "log": self._session.path,
            }
