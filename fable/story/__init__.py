"""Story definitions, mutable story state and the action interpreter."""

from fable.story.interpreter import ActionInterpreter
from fable.story.loader import load_story
from fable.story.schema import Action, Exit, Room, SayOption, Step, Story, StoryObject
from fable.story.state import INVENTORY, StoryState

__all__ = [
    "INVENTORY",
    "Action",
    "ActionInterpreter",
    "Exit",
    "Room",
    "SayOption",
    "Step",
    "Story",
    "StoryObject",
    "StoryState",
    "load_story",
]
