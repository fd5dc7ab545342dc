"""History entries — one recorded player action each.

Entries carry the human-readable titles needed to find game objects again
at replay time. Object identifiers are never stored: they are assigned when
a story is built and can change between sessions, titles cannot.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import IntEnum, unique
from typing import ClassVar, Iterable, Iterator, Union

USE_SEPARATOR = " with "


@unique
class EntryKind(IntEnum):
    """The six kinds of player action that can be recorded."""

    GO = 0
    TAKE = 1
    EXAMINE = 2
    USE = 3
    TALK_TO = 4
    SAY = 5


@dataclass(frozen=True, slots=True)
class Go:
    exit_label: str

    kind: ClassVar[EntryKind] = EntryKind.GO


@dataclass(frozen=True, slots=True)
class Take:
    object_title: str

    kind: ClassVar[EntryKind] = EntryKind.TAKE


@dataclass(frozen=True, slots=True)
class Examine:
    object_title: str

    kind: ClassVar[EntryKind] = EntryKind.EXAMINE


@dataclass(frozen=True, slots=True)
class Use:
    """Use an object on its own, or with a second object."""

    object_title: str
    with_title: str | None = None

    kind: ClassVar[EntryKind] = EntryKind.USE


@dataclass(frozen=True, slots=True)
class TalkTo:
    character_title: str

    kind: ClassVar[EntryKind] = EntryKind.TALK_TO


@dataclass(frozen=True, slots=True)
class Say:
    line_title: str

    kind: ClassVar[EntryKind] = EntryKind.SAY


HistoryEntry = Union[Go, Take, Examine, Use, TalkTo, Say]


def entry_fields(entry: HistoryEntry) -> tuple[str, ...]:
    """Return the title strings an entry carries, in declaration order."""
    match entry:
        case Go(exit_label=label):
            return (label,)
        case Take(object_title=title) | Examine(object_title=title):
            return (title,)
        case Use(object_title=title, with_title=None):
            return (title,)
        case Use(object_title=title, with_title=other):
            return (title, other)
        case TalkTo(character_title=title):
            return (title,)
        case Say(line_title=title):
            return (title,)
    raise TypeError(f"Not a history entry: {entry!r}")


def validate_entry(entry: HistoryEntry) -> None:
    """Reject entries whose serialized form would not parse back to themselves.

    Raises ``ValueError`` for titles containing a newline, and for a ``Use``
    whose rendered line has a ``" with "`` before the intended split: the
    parser splits at the first occurrence, so the entry would come back
    different. That covers a first title containing ``" with "`` and, when
    there is a target, one ending in ``" with"``.
    """
    for value in entry_fields(entry):
        if "\n" in value:
            raise ValueError(f"Title contains a newline: {value!r}")
    if not isinstance(entry, Use):
        return
    title = entry.object_title
    if entry.with_title is None:
        ambiguous = USE_SEPARATOR in title
    else:
        ambiguous = (title + USE_SEPARATOR).find(USE_SEPARATOR) != len(title)
    if ambiguous:
        raise ValueError(
            f"Use title {title!r} collides with {USE_SEPARATOR!r} and cannot be stored unambiguously"
        )


class History:
    """Recorded player actions, newest first.

    Insertion order is reverse-chronological: ``record()`` prepends.
    Persisted and replayed order is chronological; use ``chronological()``.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[HistoryEntry] = ()) -> None:
        self._entries: deque[HistoryEntry] = deque(entries)

    @classmethod
    def from_chronological(cls, entries: Iterable[HistoryEntry]) -> History:
        """Build a History from entries listed oldest first."""
        history = cls()
        for entry in entries:
            history.record(entry)
        return history

    def record(self, entry: HistoryEntry) -> None:
        self._entries.appendleft(entry)

    def chronological(self) -> list[HistoryEntry]:
        """Return the entries oldest first."""
        return list(reversed(self._entries))

    def newest(self) -> HistoryEntry | None:
        return self._entries[0] if self._entries else None

    def copy(self) -> History:
        return History(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, History):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"History({list(self._entries)!r})"
