"""Text codec for history logs.

A log is one entry per line, oldest first, joined with ``"\\n"``::

    go north
    take lamp
    use lamp with door
    talk to keeper
    say hello

There is no header, version tag or escaping. Titles must not contain a
newline, and the first title of a ``use`` must not contain ``" with "``.
"""

from __future__ import annotations

from typing import Callable

from fable.errors import ParseError
from fable.history.entries import (
    USE_SEPARATOR,
    Examine,
    Go,
    History,
    HistoryEntry,
    Say,
    TalkTo,
    Take,
    Use,
)

LINE_SEPARATOR = "\n"


def _parse_use(rest: str) -> Use:
    title, sep, other = rest.partition(USE_SEPARATOR)
    if not sep:
        return Use(title)
    return Use(title, other)


# Ordered choice; the prefixes are disjoint so order only matters for clarity.
_PREFIXES: tuple[tuple[str, Callable[[str], HistoryEntry]], ...] = (
    ("go ", Go),
    ("take ", Take),
    ("examine ", Examine),
    ("use ", _parse_use),
    ("talk to ", TalkTo),
    ("say ", Say),
)


def format_entry(entry: HistoryEntry) -> str:
    """Render one entry in its canonical single-line form."""
    match entry:
        case Go(exit_label=label):
            return f"go {label}"
        case Take(object_title=title):
            return f"take {title}"
        case Examine(object_title=title):
            return f"examine {title}"
        case Use(object_title=title, with_title=None):
            return f"use {title}"
        case Use(object_title=title, with_title=other):
            return f"use {title}{USE_SEPARATOR}{other}"
        case TalkTo(character_title=title):
            return f"talk to {title}"
        case Say(line_title=title):
            return f"say {title}"
    raise TypeError(f"Not a history entry: {entry!r}")


def serialize(history: History) -> str:
    """Render a history oldest first, one entry per line."""
    return LINE_SEPARATOR.join(format_entry(e) for e in history.chronological())


def parse_entry(line: str, line_no: int = 1) -> HistoryEntry:
    """Parse a single log line (or player command) into an entry."""
    if not line:
        raise ParseError(line_no, line, "empty entry")
    for prefix, build in _PREFIXES:
        if line.startswith(prefix):
            return build(line[len(prefix):])
    raise ParseError(line_no, line, "unknown action")


def parse(text: str) -> History:
    """Parse a serialized log into a History (newest first).

    The empty string is the empty history. Any malformed line fails the
    whole parse with ``ParseError``.
    """
    if not text:
        return History()
    return History.from_chronological(
        parse_entry(line, line_no)
        for line_no, line in enumerate(text.split(LINE_SEPARATOR), start=1)
    )
