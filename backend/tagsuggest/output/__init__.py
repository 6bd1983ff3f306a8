"""Sortie des suggestions (lignes ou JSON)."""

from .suggestions import SuggestionFormatter, SuggestionsOutput

__all__ = ["SuggestionFormatter", "SuggestionsOutput"]
