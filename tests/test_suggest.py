"""
Tests de la session de suggestion (contexte, annulation, insertion).
"""

from tagsuggest.config import SuggestConfig
from tagsuggest.editor import EditorPosition, SuggestContext, TagSuggest, TriggerInfo


TEXT = "# Réunion\n#project #urgent\n@"
CURSOR = EditorPosition(2, 1)


class MemoryProvider:

    def __init__(self, tags_by_document):
        self.tags_by_document = tags_by_document

    def list_documents(self, exclude=None):
        return [d for d in self.tags_by_document if d != exclude]

    def get_tags_for(self, document_id):
        return self.tags_by_document.get(document_id, [])


CORPUS = {
    "courante.md": ["project", "urgent"],
    "facturation.md": ["project", "urgent", "billing"],
    "projet.md": ["project"],
    "divers.md": ["misc"],
}


class InterruptingProvider(MemoryProvider):
    """Simule une nouvelle frappe pendant la lecture du corpus."""

    def __init__(self, tags_by_document):
        super().__init__(tags_by_document)
        self.session = None
        self.newer_result = None
        self._interrupted = False

    def get_tags_for(self, document_id):
        if not self._interrupted:
            self._interrupted = True
            newer = self.session.build_context(TEXT, CURSOR, "courante.md")
            self.newer_result = self.session.get_suggestions(newer)
        return super().get_tags_for(document_id)


class TestTagSuggest:

    def setup_method(self):
        self.session = TagSuggest(MemoryProvider(CORPUS))

    def test_build_context_from_cursor(self):
        context = self.session.build_context(TEXT, CURSOR, "courante.md")

        assert context.query == ""
        assert context.trigger.start == EditorPosition(2, 0)
        assert context.document_id == "courante.md"

    def test_no_trigger_no_context(self):
        assert self.session.build_context(TEXT, EditorPosition(1, 3)) is None
        assert self.session.build_context(TEXT, EditorPosition(9, 0)) is None

    def test_suggestions_are_ranked(self):
        context = self.session.build_context(TEXT, CURSOR, "courante.md")
        suggestions = self.session.get_suggestions(context)

        assert [s.tag for s in suggestions] == ["billing", "misc"]

    def test_query_filters(self):
        text = TEXT + "bl"
        context = self.session.build_context(text, EditorPosition(2, 3), "courante.md")
        suggestions = self.session.get_suggestions(context)

        assert context.query == "bl"
        assert [s.tag for s in suggestions] == ["billing"]

    def test_current_document_excluded_from_corpus(self):
        provider = MemoryProvider({"courante.md": ["solo"], "autre.md": ["x"]})
        session = TagSuggest(provider)
        context = session.build_context("@", EditorPosition(0, 1), "courante.md")

        assert [s.tag for s in session.get_suggestions(context)] == ["x"]

    def test_limit_from_config(self):
        session = TagSuggest(MemoryProvider(CORPUS), SuggestConfig(limit=1))
        context = session.build_context(TEXT, CURSOR, "courante.md")

        assert [s.tag for s in session.get_suggestions(context)] == ["billing"]

    def test_select_suggestion_replaces_trigger(self):
        context = self.session.build_context(TEXT + "bi", EditorPosition(2, 3), "courante.md")
        suggestion = self.session.get_suggestions(context)[0]

        new_text = self.session.select_suggestion(context, suggestion)
        assert new_text == "# Réunion\n#project #urgent\n#billing "

    def test_select_suggestion_accepts_plain_tag(self):
        context = SuggestContext(
            document_id=None,
            text="x @",
            trigger=TriggerInfo(EditorPosition(0, 2), EditorPosition(0, 3), ""),
        )
        assert self.session.select_suggestion(context, "misc") == "x #misc "

    def test_superseded_request_is_abandoned(self):
        provider = InterruptingProvider(CORPUS)
        session = TagSuggest(provider, SuggestConfig(max_workers=1))
        provider.session = session

        context = session.build_context(TEXT, CURSOR, "courante.md")
        assert session.get_suggestions(context) is None
        assert [s.tag for s in provider.newer_result] == ["billing", "misc"]

    def test_session_usable_after_cancel(self):
        self.session.cancel()
        context = self.session.build_context(TEXT, CURSOR, "courante.md")
        assert [s.tag for s in self.session.get_suggestions(context)] == ["billing", "misc"]
