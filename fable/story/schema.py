"""Story definition models — rooms, exits, objects and their actions.

Stories are authored as JSON and validated here. An *action* is a list of
steps run in order by the ActionInterpreter; each step applies its fields
in a fixed order (text, set_flag, clear_flag, give, remove, move_to, offer,
fail) when its ``when``/``unless`` flag guards pass.
"""

from __future__ import annotations

from typing import Iterator

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Step(BaseModel):
    """One interpreter instruction."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Guards
    when: str | None = None        # run only if this flag is set
    unless: str | None = None      # run only if this flag is unset
    # Effects
    text: str | None = None
    set_flag: str | None = None
    clear_flag: str | None = None
    give: str | None = None        # object title moved into the inventory
    remove: str | None = None      # object title taken out of the world
    move_to: str | None = None     # room title
    offer: list[SayOption] | None = None
    fail: str | None = None


Action = list[Step]


class SayOption(BaseModel):
    """A line the player may say while a conversation is pending."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    label: str
    action: list[Step] = Field(default_factory=list)


class Exit(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    label: str
    to: str
    requires: str | None = None    # flag that must be set to pass
    blocked_text: str = "The way is blocked."


class Room(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    title: str
    description: list[Step] = Field(default_factory=list)
    exits: list[Exit] = Field(default_factory=list)


class StoryObject(BaseModel):
    """An item, fixture or character the player can interact with."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    title: str
    description: list[Step] = Field(default_factory=list)
    location: str | None = None    # room title; None means nowhere yet
    portable: bool = True
    use: list[Step] | None = None
    use_with: dict[str, list[Step]] = Field(default_factory=dict)
    talk: list[Step] | None = None


class Story(BaseModel):
    """A complete story definition."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    title: str
    start: str
    init: list[Step] = Field(default_factory=list)
    rooms: list[Room]
    objects: list[StoryObject] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_references(self) -> Story:
        room_titles = [r.title for r in self.rooms]
        object_titles = [o.title for o in self.objects]
        for kind, titles in (("room", room_titles), ("object", object_titles)):
            dupes = sorted({t for t in titles if titles.count(t) > 1})
            if dupes:
                raise ValueError(f"Duplicate {kind} titles: {', '.join(dupes)}")

        known_rooms = set(room_titles)
        if self.start not in known_rooms:
            raise ValueError(f"Start room {self.start!r} is not defined")
        for room in self.rooms:
            for ex in room.exits:
                if ex.to not in known_rooms:
                    raise ValueError(f"Exit {ex.label!r} in {room.title!r} leads to unknown room {ex.to!r}")
        for obj in self.objects:
            if obj.location is not None and obj.location not in known_rooms:
                raise ValueError(f"Object {obj.title!r} is placed in unknown room {obj.location!r}")

        known_objects = set(object_titles)
        for where, action in _story_actions(self):
            for step in _walk(action):
                for ref in (step.give, step.remove):
                    if ref is not None and ref not in known_objects:
                        raise ValueError(f"{where} refers to unknown object {ref!r}")
                if step.move_to is not None and step.move_to not in known_rooms:
                    raise ValueError(f"{where} moves to unknown room {step.move_to!r}")
        return self


def _story_actions(story: Story) -> Iterator[tuple[str, list[Step]]]:
    """Every top-level action in *story*, labelled for error messages."""
    yield "init", story.init
    for room in story.rooms:
        yield f"Room {room.title!r} description", room.description
    for obj in story.objects:
        yield f"Object {obj.title!r} description", obj.description
        if obj.use is not None:
            yield f"Object {obj.title!r} use", obj.use
        for other, action in obj.use_with.items():
            yield f"Object {obj.title!r} use with {other!r}", action
        if obj.talk is not None:
            yield f"Object {obj.title!r} talk", obj.talk


def _walk(action: list[Step]) -> Iterator[Step]:
    """Yield every step of *action*, including those inside offered say options."""
    for step in action:
        yield step
        for option in step.offer or ():
            yield from _walk(option.action)


Step.model_rebuild()
SayOption.model_rebuild()
