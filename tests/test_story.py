"""Tests for story definitions, story state resolution and the action interpreter."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from pydantic import ValidationError

from fable.errors import ActionError, ResolutionError, SemanticReplayError
from fable.story import ActionInterpreter, Step, Story, StoryState, load_story
from tests.helpers.story_fixture import HALL_STORY, LIGHTHOUSE_FILE, make_story


# ---------------------------------------------------------------------------
# Definitions
# ---------------------------------------------------------------------------

class TestStoryDefinition:
    def test_load_lighthouse(self):
        story = load_story(LIGHTHOUSE_FILE)
        assert story.title == "The Lighthouse"
        assert story.start == "Beach"
        assert {o.title for o in story.objects} == {"lamp", "key", "door", "keeper"}

    def test_unknown_start_room(self):
        with pytest.raises(ValidationError):
            make_story(start="Cellar")

    def test_exit_to_unknown_room(self):
        rooms = [{"title": "A", "exits": [{"label": "x", "to": "B"}]}]
        with pytest.raises(ValidationError):
            Story.model_validate({"title": "t", "start": "A", "rooms": rooms})

    def test_init_gives_unknown_object(self):
        with pytest.raises(ValidationError, match="ghost"):
            make_story(init=[{"give": "ghost"}])

    def test_offered_option_moves_to_unknown_room(self):
        butler = {"title": "butler", "talk": [{"offer": [
            {"label": "show me", "action": [{"move_to": "Cellar"}]},
        ]}]}
        with pytest.raises(ValidationError, match="Cellar"):
            make_story(objects=[butler])

    def test_duplicate_object_titles(self):
        data = dict(HALL_STORY)
        data["objects"] = HALL_STORY["objects"] + [{"title": "lamp"}]
        with pytest.raises(ValidationError):
            Story.model_validate(data)

    def test_unknown_step_field(self):
        with pytest.raises(ValidationError):
            Step.model_validate({"txt": "typo"})

    def test_frozen(self):
        story = make_story()
        with pytest.raises(ValidationError):
            story.title = "Other"  # type: ignore


# ---------------------------------------------------------------------------
# State resolution
# ---------------------------------------------------------------------------

class TestStoryState:
    def test_lookup(self):
        state = StoryState(make_story())
        assert state.lookup("lamp").title == "lamp"
        with pytest.raises(ResolutionError):
            state.lookup("Lamp")

    def test_exits_are_room_scoped(self):
        state = StoryState(make_story())
        assert state.find_exit("east").to == "Study"
        with pytest.raises(ResolutionError):
            state.find_exit("west")

    def test_visible_objects(self):
        state = StoryState(make_story())
        assert "statue" not in [o.title for o in state.visible_objects()]
        state.enter("Study")
        assert [o.title for o in state.visible_objects()] == ["statue"]

    def test_take_rules(self):
        state = StoryState(make_story())
        with pytest.raises(SemanticReplayError):
            state.take(state.lookup("hook"))
        state.enter("Study")
        with pytest.raises(SemanticReplayError, match="not here"):
            state.take(state.lookup("lamp"))
        assert state.inventory == []

    def test_init_action(self):
        state = StoryState(make_story())
        assert state.init_action[0].text == "You wake in a dim hall."


# ---------------------------------------------------------------------------
# Interpreter
# ---------------------------------------------------------------------------

class TestActionInterpreter:
    def setup_method(self):
        self.interp = ActionInterpreter()
        self.state = StoryState(make_story())

    def _run(self, *steps: dict) -> list[str]:
        return self.interp.run([Step.model_validate(s) for s in steps], self.state)

    def test_text_in_order(self):
        assert self._run({"text": "a"}, {"text": "b"}) == ["a", "b"]

    def test_flag_guards(self):
        out = self._run(
            {"text": "before", "unless": "f"},
            {"set_flag": "f"},
            {"text": "after", "when": "f"},
            {"text": "never", "unless": "f"},
        )
        assert out == ["before", "after"]
        self._run({"clear_flag": "f"})
        assert "f" not in self.state.flags

    def test_give_and_remove(self):
        self._run({"give": "statue"})
        assert self.state.inventory == ["statue"]
        self._run({"remove": "statue"})
        assert self.state.locations["statue"] is None
        assert self.state.inventory == []

    def test_move_to(self):
        self._run({"move_to": "Attic"})
        assert self.state.room == "Attic"

    def test_bad_reference_is_action_error(self):
        with pytest.raises(ActionError):
            self._run({"give": "unicorn"})

    def test_offer_replaces_options(self):
        self._run({"offer": [{"label": "a"}]})
        self._run({"offer": [{"label": "b"}, {"label": "c"}]})
        assert [o.label for o in self.state.say_options] == ["b", "c"]

    def test_fail(self):
        with pytest.raises(ActionError, match="nope"):
            self._run({"text": "x", "fail": "nope"})
