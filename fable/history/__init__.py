"""History model and its text codec."""

from fable.history.codec import format_entry, parse, parse_entry, serialize
from fable.history.entries import (
    EntryKind,
    Examine,
    Go,
    History,
    HistoryEntry,
    Say,
    TalkTo,
    Take,
    Use,
    validate_entry,
)

__all__ = [
    "EntryKind",
    "Examine",
    "Go",
    "History",
    "HistoryEntry",
    "Say",
    "TalkTo",
    "Take",
    "Use",
    "format_entry",
    "parse",
    "parse_entry",
    "serialize",
    "validate_entry",
]
