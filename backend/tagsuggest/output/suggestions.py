"""Générateur de la liste de suggestions pour l'affichage dans l'éditeur."""

from dataclasses import dataclass, asdict, field
from datetime import datetime
from typing import Optional
import json

from ..editor.trigger import replacement_text
from ..tags.ranker import TagSuggestion


@dataclass
class SuggestionsOutput:
    """Structure de sortie complète des suggestions."""

    version: str = "1.0"
    generated_at: str = ""
    document: Optional[str] = None
    query: str = ""
    suggestions: list = field(default_factory=list)
    stats: dict = field(default_factory=dict)


class SuggestionFormatter:
    """Formate une liste classée de suggestions (lignes ou JSON)."""

    def __init__(
        self,
        suggestions: list[TagSuggestion],
        query: str = "",
        document: Optional[str] = None,
        corpus_size: int = 0,
        marker: str = "#",
    ):
        self.suggestions = suggestions
        self.query = query
        self.document = document
        self.corpus_size = corpus_size
        self.marker = marker

    def generate(self) -> SuggestionsOutput:
        """Génère la structure de sortie complète."""
        return SuggestionsOutput(
            generated_at=datetime.now().isoformat(),
            document=self.document,
            query=self.query,
            suggestions=[
                self._format_suggestion(index, suggestion)
                for index, suggestion in enumerate(self.suggestions)
            ],
            stats={
                "corpus_notes": self.corpus_size,
                "suggestions": len(self.suggestions),
            },
        )

    def to_json(self) -> str:
        return json.dumps(asdict(self.generate()), indent=2, ensure_ascii=False)

    def save_to_file(self, output_path: str) -> None:
        """Sauvegarde les suggestions dans un fichier JSON."""
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(self.to_json())

    def render_rows(self, verbose: bool = False) -> list[str]:
        """Une ligne par suggestion, dans l'ordre du classement."""
        rows = []
        for suggestion in self.suggestions:
            if verbose:
                rows.append(f"{suggestion.tag}  ({self._summary(suggestion)})")
            else:
                rows.append(suggestion.tag)
        return rows

    def _format_suggestion(self, index: int, suggestion: TagSuggestion) -> dict:
        return {
            "id": f"ts_{index:03d}",
            "tag": suggestion.tag,
            "insert": replacement_text(suggestion.tag, self.marker),
            "reasoning": {
                "summary": self._summary(suggestion),
                "details": {
                    "histogram": suggestion.histogram,
                    "note_count": suggestion.note_count,
                    "best_overlap": suggestion.best_overlap,
                },
            },
        }

    def _summary(self, suggestion: TagSuggestion) -> str:
        return (
            f"{suggestion.note_count} notes, "
            f"jusqu'à {suggestion.best_overlap} tags en commun"
        )
