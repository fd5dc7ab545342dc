"""Tests for the history model and its text codec."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from fable.errors import ParseError
from fable.history import (
    EntryKind,
    Examine,
    Go,
    History,
    Say,
    TalkTo,
    Take,
    Use,
    format_entry,
    parse,
    parse_entry,
    serialize,
    validate_entry,
)


# ---------------------------------------------------------------------------
# History ordering
# ---------------------------------------------------------------------------

class TestHistory:
    def test_record_prepends(self):
        h = History()
        h.record(Take("lamp"))
        h.record(Examine("lamp"))
        assert list(h) == [Examine("lamp"), Take("lamp")]
        assert h.newest() == Examine("lamp")

    def test_chronological_is_oldest_first(self):
        h = History.from_chronological([Go("north"), Take("key"), Say("hi")])
        assert h.chronological() == [Go("north"), Take("key"), Say("hi")]
        assert list(h) == [Say("hi"), Take("key"), Go("north")]

    def test_equality_and_copy(self):
        a = History.from_chronological([Take("lamp")])
        b = a.copy()
        assert a == b
        b.record(Take("key"))
        assert a != b
        assert len(a) == 1 and len(b) == 2

    def test_empty(self):
        h = History()
        assert len(h) == 0
        assert h.newest() is None
        assert h.chronological() == []

    def test_entry_kinds(self):
        kinds = [e.kind for e in (Go("x"), Take("x"), Examine("x"), Use("x"), TalkTo("x"), Say("x"))]
        assert kinds == list(EntryKind)


# ---------------------------------------------------------------------------
# Serializer
# ---------------------------------------------------------------------------

class TestSerialize:
    @pytest.mark.parametrize("entry, text", [
        (Go("north"), "go north"),
        (Take("lamp"), "take lamp"),
        (Examine("old map"), "examine old map"),
        (Use("lamp"), "use lamp"),
        (Use("key", "door"), "use key with door"),
        (TalkTo("keeper"), "talk to keeper"),
        (Say("hello there"), "say hello there"),
    ])
    def test_canonical_forms(self, entry, text):
        assert format_entry(entry) == text

    def test_serialize_is_oldest_first(self):
        h = History()
        h.record(Take("lamp"))
        h.record(Examine("lamp"))
        assert serialize(h) == "take lamp\nexamine lamp"

    def test_empty_history(self):
        assert serialize(History()) == ""

    def test_no_trailing_newline(self):
        h = History.from_chronological([Go("north"), Go("south")])
        assert not serialize(h).endswith("\n")


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

class TestParse:
    def test_empty_string(self):
        assert parse("") == History()

    def test_lamp_scenario_is_newest_first(self):
        h = parse("take lamp\nexamine lamp")
        assert list(h) == [Examine("lamp"), Take("lamp")]

    def test_all_prefixes(self):
        text = "go north\ntake lamp\nexamine lamp\nuse lamp\nuse key with door\ntalk to keeper\nsay yes"
        assert parse(text).chronological() == [
            Go("north"), Take("lamp"), Examine("lamp"), Use("lamp"),
            Use("key", "door"), TalkTo("keeper"), Say("yes"),
        ]

    def test_use_splits_at_first_with(self):
        assert parse_entry("use rope with hook with care") == Use("rope", "hook with care")

    def test_use_without_target(self):
        assert parse_entry("use withered branch") == Use("withered branch")

    def test_titles_keep_spaces(self):
        assert parse_entry("take  lamp ") == Take(" lamp ")

    def test_unknown_prefix_fails(self):
        with pytest.raises(ParseError) as info:
            parse("take lamp\ndance wildly\nexamine lamp")
        assert info.value.line_no == 2
        assert info.value.line == "dance wildly"
        assert "unknown action" in str(info.value)

    def test_prefix_needs_space(self):
        with pytest.raises(ParseError):
            parse_entry("go")

    def test_trailing_newline_fails(self):
        with pytest.raises(ParseError) as info:
            parse("take lamp\n")
        assert info.value.line_no == 2
        assert info.value.reason == "empty entry"

    def test_case_sensitive(self):
        with pytest.raises(ParseError):
            parse_entry("Take lamp")


# ---------------------------------------------------------------------------
# Round-trip properties
# ---------------------------------------------------------------------------

class TestRoundTrip:
    HISTORIES = [
        [],
        [Take("lamp")],
        [Go("north"), Take("brass key"), Use("brass key", "door"), Go("in")],
        [TalkTo("keeper"), Say("yes"), Use("lamp"), Examine("lens")],
        [Use("key", "")],
    ]

    @pytest.mark.parametrize("entries", HISTORIES)
    def test_parse_serialize(self, entries):
        h = History.from_chronological(entries)
        assert parse(serialize(h)) == h

    @pytest.mark.parametrize("entries", HISTORIES)
    def test_idempotent_persistence(self, entries):
        once = serialize(History.from_chronological(entries))
        assert serialize(parse(once)) == once

    def test_serialize_parse_text(self):
        text = "go north\nuse key with door\nsay I would like tea"
        assert serialize(parse(text)) == text


class TestValidateEntry:
    def test_accepts_plain_entries(self):
        validate_entry(Use("key", "door"))
        validate_entry(Say("yes"))

    def test_rejects_newline(self):
        with pytest.raises(ValueError):
            validate_entry(Take("lamp\nkey"))

    def test_rejects_ambiguous_use(self):
        with pytest.raises(ValueError):
            validate_entry(Use("bread with butter", "knife"))

    def test_rejects_use_title_ending_in_with(self):
        # "use a with with b" would parse back as Use("a", "with b")
        assert parse_entry(format_entry(Use("a with", "b"))) == Use("a", "with b")
        with pytest.raises(ValueError):
            validate_entry(Use("a with", "b"))

    def test_title_ending_in_with_without_target(self):
        validate_entry(Use("a with"))
        assert parse_entry(format_entry(Use("a with"))) == Use("a with")
        with pytest.raises(ValueError):
            validate_entry(Use("bread with butter"))

    def test_with_in_target_is_fine(self):
        validate_entry(Use("knife", "bread with butter"))
        assert parse_entry(format_entry(Use("knife", "bread with butter"))) == Use("knife", "bread with butter")
