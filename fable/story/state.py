"""Mutable story state — the world as the player currently sees it.

Also the title resolver: every lookup takes a human-readable title and
raises ``ResolutionError`` when the current story has nothing by that name.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fable.errors import ResolutionError, SemanticReplayError
from fable.story.schema import Action, Exit, Room, SayOption, Story, StoryObject

logger = logging.getLogger(__name__)

INVENTORY = "@inventory"


class StoryState:
    """Current room, flags, object locations and pending say options."""

    __slots__ = ("story", "room", "flags", "locations", "say_options", "_rooms", "_objects")

    def __init__(self, story: Story) -> None:
        self.story: Story = story
        self.room: str = story.start
        self.flags: set[str] = set()
        self.locations: dict[str, str | None] = {o.title: o.location for o in story.objects}
        self.say_options: list[SayOption] = []
        self._rooms: dict[str, Room] = {r.title: r for r in story.rooms}
        self._objects: dict[str, StoryObject] = {o.title: o for o in story.objects}

    # -- story primitives --

    @property
    def init_action(self) -> Action:
        return self.story.init

    @property
    def current_room(self) -> Room:
        return self._rooms[self.room]

    @property
    def inventory(self) -> list[str]:
        return [title for title, loc in self.locations.items() if loc == INVENTORY]

    def visible_objects(self) -> list[StoryObject]:
        """Objects lying in the current room."""
        return [self._objects[t] for t, loc in self.locations.items() if loc == self.room]

    # -- resolution --

    def lookup(self, title: str) -> StoryObject:
        obj = self._objects.get(title)
        if obj is None:
            raise ResolutionError(f"No object titled {title!r}")
        return obj

    def room_named(self, title: str) -> Room:
        room = self._rooms.get(title)
        if room is None:
            raise ResolutionError(f"No room titled {title!r}")
        return room

    def find_exit(self, label: str) -> Exit:
        for ex in self.current_room.exits:
            if ex.label == label:
                return ex
        raise ResolutionError(f"No exit labelled {label!r} in {self.room!r}")

    def find_say_option(self, label: str) -> SayOption:
        for option in self.say_options:
            if option.label == label:
                return option
        raise ResolutionError(f"No say option labelled {label!r}")

    # -- transitions --

    def is_blocked(self, ex: Exit) -> bool:
        return ex.requires is not None and ex.requires not in self.flags

    def enter(self, room_title: str) -> Room:
        room = self.room_named(room_title)
        logger.debug("Entering %r from %r", room.title, self.room)
        self.room = room.title
        return room

    def take(self, obj: StoryObject) -> None:
        """Move *obj* into the inventory."""
        loc = self.locations.get(obj.title)
        if loc == INVENTORY:
            return
        if not obj.portable:
            raise SemanticReplayError(f"{obj.title!r} cannot be taken")
        if loc != self.room:
            raise SemanticReplayError(f"{obj.title!r} is not here")
        self.locations[obj.title] = INVENTORY

    def give(self, title: str) -> None:
        self.lookup(title)
        self.locations[title] = INVENTORY

    def remove(self, title: str) -> None:
        self.lookup(title)
        self.locations[title] = None

    def clear_say_options(self) -> None:
        self.say_options = []

    # -- snapshots --

    def snapshot(self) -> StateSnapshot:
        """Copy the mutable fields so a failed action can be undone."""
        return StateSnapshot(
            room=self.room,
            flags=frozenset(self.flags),
            locations=dict(self.locations),
            say_options=tuple(self.say_options),
        )

    def restore(self, snap: StateSnapshot) -> None:
        self.room = snap.room
        self.flags = set(snap.flags)
        self.locations = dict(snap.locations)
        self.say_options = list(snap.say_options)


@dataclass(frozen=True, slots=True)
class StateSnapshot:
    """Point-in-time copy of a StoryState's mutable fields."""

    room: str
    flags: frozenset[str]
    locations: dict[str, str | None]
    say_options: tuple[SayOption, ...]
