"""Parsers pour les notes Obsidian."""

from .note_parser import NoteParser, ParsedNote
from .tag_extractor import TagExtractor, extract_tags

__all__ = ["NoteParser", "ParsedNote", "TagExtractor", "extract_tags"]
