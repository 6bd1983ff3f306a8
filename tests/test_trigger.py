"""
Tests de la détection du déclencheur et de l'insertion du tag choisi.
"""

import pytest

from tagsuggest.editor import (
    EditorPosition,
    TriggerInfo,
    apply_suggestion,
    detect_trigger,
    position_to_offset,
    replacement_text,
)


class TestDetectTrigger:

    def test_trigger_with_query(self):
        trigger = detect_trigger("meet @pro", EditorPosition(3, 9))

        assert trigger is not None
        assert trigger.start == EditorPosition(3, 5)
        assert trigger.end == EditorPosition(3, 9)
        assert trigger.query == "pro"

    def test_bare_trigger(self):
        trigger = detect_trigger("@", EditorPosition(0, 1))
        assert trigger.query == ""
        assert trigger.start.ch == 0

    def test_only_text_before_cursor_counts(self):
        trigger = detect_trigger("meet @pro rest", EditorPosition(0, 9))
        assert trigger.query == "pro"

        trigger = detect_trigger("meet @project", EditorPosition(0, 8))
        assert trigger.query == "pr"

    def test_no_trigger(self):
        assert detect_trigger("hello world", EditorPosition(0, 11)) is None
        assert detect_trigger("", EditorPosition(0, 0)) is None

    def test_trigger_must_reach_cursor(self):
        assert detect_trigger("mail a@b then", EditorPosition(0, 13)) is None

    def test_last_trigger_wins(self):
        trigger = detect_trigger("a@b@c", EditorPosition(0, 5))
        assert trigger.start.ch == 3
        assert trigger.query == "c"

    def test_custom_trigger_char(self):
        trigger = detect_trigger("x +tag", EditorPosition(0, 6), trigger_char="+")
        assert trigger.query == "tag"
        assert detect_trigger("x @tag", EditorPosition(0, 6), trigger_char="+") is None


class TestApplySuggestion:

    def test_replacement_text(self):
        assert replacement_text("billing") == "#billing "

    def test_replaces_trigger_span(self):
        text = "line0\nmeet @pro"
        trigger = TriggerInfo(EditorPosition(1, 5), EditorPosition(1, 9), "pro")

        assert apply_suggestion(text, trigger, "project") == "line0\nmeet #project "

    def test_keeps_text_after_cursor(self):
        text = "a @bi suite\nfin"
        trigger = detect_trigger("a @bi suite", EditorPosition(0, 5))

        assert apply_suggestion(text, trigger, "billing") == "a #billing  suite\nfin"

    def test_position_to_offset(self):
        text = "ab\ncde\nf"
        assert position_to_offset(text, EditorPosition(0, 0)) == 0
        assert position_to_offset(text, EditorPosition(1, 2)) == 5
        assert position_to_offset(text, EditorPosition(2, 1)) == 8

    def test_position_out_of_document(self):
        with pytest.raises(ValueError):
            position_to_offset("ab", EditorPosition(3, 0))
