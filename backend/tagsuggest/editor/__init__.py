"""Intégration éditeur : déclencheur, session de suggestion, insertion."""

from .suggest import SuggestContext, TagSuggest
from .trigger import (
    EditorPosition,
    TriggerInfo,
    apply_suggestion,
    detect_trigger,
    position_to_offset,
    replacement_text,
)

__all__ = [
    "SuggestContext",
    "TagSuggest",
    "EditorPosition",
    "TriggerInfo",
    "apply_suggestion",
    "detect_trigger",
    "position_to_offset",
    "replacement_text",
]
