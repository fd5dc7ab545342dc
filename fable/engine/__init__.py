"""Replay engine and session orchestration."""

from fable.engine.replay import ReplayEngine, ReplayOutcome, StepResult
from fable.engine.session import (
    GameSession,
    SessionRecovery,
    SessionRestored,
    SessionStart,
    init_story,
)

__all__ = [
    "GameSession",
    "ReplayEngine",
    "ReplayOutcome",
    "SessionRecovery",
    "SessionRestored",
    "SessionStart",
    "StepResult",
    "init_story",
]
