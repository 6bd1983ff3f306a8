"""
Tests du parser de notes (frontmatter + tags inline).
"""

from tagsuggest.parsers import NoteParser


class TestNoteParser:

    def test_frontmatter_and_inline_tags(self, vault):
        parser = NoteParser(vault)
        note = parser.parse_note("facturation.md")

        assert note.path == "facturation.md"
        assert note.title == "Facturation"
        assert note.tags == ["#project", "#urgent", "#billing"]
        assert note.frontmatter["tags"] == ["project", "urgent"]

    def test_heading_is_not_a_tag(self, vault):
        note = NoteParser(vault).parse_note("courante.md")
        assert note.tags == ["#project", "#urgent"]

    def test_frontmatter_string_tags(self, tmp_path):
        (tmp_path / "n.md").write_text("---\ntags: alpha, beta\n---\ncorps\n", encoding="utf-8")
        note = NoteParser(tmp_path).parse_note("n.md")
        assert note.tags == ["#alpha", "#beta"]

    def test_frontmatter_scalar_tag(self, tmp_path):
        (tmp_path / "n.md").write_text("---\ntags: 2024\n---\ncorps\n", encoding="utf-8")
        note = NoteParser(tmp_path).parse_note("n.md")
        assert note.tags == ["#2024"]

    def test_code_blocks_are_ignored(self, tmp_path):
        content = "#vrai\n```\n#faux\n```\ntexte #aussi\n"
        (tmp_path / "n.md").write_text(content, encoding="utf-8")
        note = NoteParser(tmp_path).parse_note("n.md")
        assert note.tags == ["#vrai", "#aussi"]

    def test_inline_duplicates_are_kept(self, tmp_path):
        (tmp_path / "n.md").write_text("#a et encore #a\n", encoding="utf-8")
        assert NoteParser(tmp_path).parse_note("n.md").tags == ["#a", "#a"]

    def test_ignored_folders(self, vault):
        parser = NoteParser(vault)
        paths = [parser.relative_path(p) for p in parser.iter_note_files()]

        assert paths == ["courante.md", "divers.md", "facturation.md", "projet.md", "sans-tags.md"]

    def test_parse_vault(self, vault):
        notes = NoteParser(vault).parse_vault()
        assert len(notes) == 5
        assert all(note.content_hash for note in notes)
