"""Classement des tags suggérés par co-occurrence avec la note courante."""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

import numpy as np

from ..config import DEFAULT_BUCKET_CAP
from .histogram import build_histograms, histogram_sort_key


@dataclass
class TagSuggestion:
    """Un tag candidat et son histogramme de co-occurrence."""

    tag: str
    histogram: list[int] = field(default_factory=list)

    @property
    def note_count(self) -> int:
        """Nombre de notes du corpus qui portent ce tag."""
        return sum(self.histogram)

    @property
    def best_overlap(self) -> int:
        """Plus haut bucket non vide (0 si le tag ne partage rien)."""
        for i in range(len(self.histogram) - 1, -1, -1):
            if self.histogram[i]:
                return i
        return 0


def is_subsequence(candidate: str, query: str) -> bool:
    """Vrai si les caractères de `query` apparaissent dans `candidate`, dans l'ordre.

    Sensible à la casse ; les caractères n'ont pas besoin d'être contigus.
    """
    remaining = iter(candidate)
    return all(char in remaining for char in query)


def rank_candidates(histograms: dict[str, np.ndarray]) -> list[str]:
    """Trie les tags par histogramme, du bucket le plus haut au plus bas.

    Tri stable : les égalités parfaites gardent l'ordre de première rencontre.
    """
    return sorted(
        histograms,
        key=lambda tag: histogram_sort_key(histograms[tag]),
        reverse=True,
    )


def score_suggestions(
    current_tags: Sequence[str],
    corpus_tag_sets: Iterable[Sequence[str]],
    query: str = "",
    cap: int = DEFAULT_BUCKET_CAP,
    limit: Optional[int] = None,
) -> list[TagSuggestion]:
    """Classe et filtre les tags du corpus, histogrammes inclus.

    Les histogrammes sont construits pour cet appel seulement.
    """
    current = set(current_tags or [])
    query = query or ""
    histograms = build_histograms(current, corpus_tag_sets or [], cap=cap)

    suggestions = []
    for tag in rank_candidates(histograms):
        if limit is not None and len(suggestions) >= limit:
            break
        if tag in current or not is_subsequence(tag, query):
            continue
        suggestions.append(TagSuggestion(tag=tag, histogram=histograms[tag].tolist()))

    return suggestions


def rank_suggestions(
    current_tags: Sequence[str],
    corpus_tag_sets: Iterable[Sequence[str]],
    query: str = "",
    cap: int = DEFAULT_BUCKET_CAP,
    limit: Optional[int] = None,
) -> list[str]:
    """Retourne les tags suggérés, du plus pertinent au moins pertinent.

    Un candidat est gardé si la requête en est une sous-séquence et s'il
    n'est pas déjà présent dans la note courante.
    """
    return [
        suggestion.tag
        for suggestion in score_suggestions(
            current_tags, corpus_tag_sets, query=query, cap=cap, limit=limit
        )
    ]
