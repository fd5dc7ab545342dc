"""Exception types for history parsing, replay and story actions."""

from __future__ import annotations


class FableError(Exception):
    """Base class for every error raised by the engine."""


class ParseError(FableError):
    """Raised when a persisted history log is malformed.

    Fatal to the whole parse: no partial entry list is produced.
    """

    def __init__(self, line_no: int, line: str, reason: str) -> None:
        self.line_no = line_no
        self.line = line
        self.reason = reason
        super().__init__(f"line {line_no}: {reason}: {line!r}")


class ReplayError(FableError):
    """An entry could not be re-executed against the current story."""


class ResolutionError(ReplayError):
    """A referenced title does not exist in the current story."""


class SemanticReplayError(ReplayError):
    """The titles resolve, but the story forbids the action right now."""


class ActionError(FableError):
    """Raised by the action interpreter when a story action fails."""
