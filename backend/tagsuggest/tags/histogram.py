"""Histogrammes de co-occurrence des tags du corpus.

Pour chaque tag rencontré dans le corpus, un tableau de CAP + 1 compteurs :
le compteur d'indice k compte les notes qui portent ce tag et partagent
exactement k tags avec la note courante (k plafonné à CAP).
"""

from typing import Iterable, Sequence

import numpy as np

from ..config import DEFAULT_BUCKET_CAP


def overlap_score(doc_tags: Sequence[str], current_tags: Iterable[str]) -> int:
    """Nombre d'éléments de `doc_tags` présents parmi les tags courants.

    Chaque occurrence compte : un tag répété dans la note est compté autant
    de fois qu'il apparaît.
    """
    current = current_tags if isinstance(current_tags, (set, frozenset)) else set(current_tags)
    return sum(1 for tag in doc_tags if tag in current)


def build_histograms(
    current_tags: Iterable[str],
    corpus_tag_sets: Iterable[Sequence[str]],
    cap: int = DEFAULT_BUCKET_CAP,
) -> dict[str, np.ndarray]:
    """Construit les histogrammes de co-occurrence (un par tag du corpus).

    Les clés sont dans l'ordre de première rencontre. Le résultat ne dépend
    pas de l'ordre des notes du corpus.
    """
    current = set(current_tags)
    histograms: dict[str, np.ndarray] = {}

    for doc_tags in corpus_tag_sets:
        bucket = min(overlap_score(doc_tags, current), cap)
        # Un incrément par tag distinct : une note ne compte qu'une fois par tag
        for tag in dict.fromkeys(doc_tags):
            histogram = histograms.get(tag)
            if histogram is None:
                histogram = np.zeros(cap + 1, dtype=np.int64)
                histograms[tag] = histogram
            histogram[bucket] += 1

    return histograms


def compare_histograms(a: np.ndarray, b: np.ndarray) -> int:
    """Compare deux histogrammes du bucket le plus haut au plus bas.

    Négatif si `a` doit être classé avant `b`, positif dans le cas inverse,
    0 en cas d'égalité sur tous les buckets.
    """
    for i in range(min(len(a), len(b)) - 1, -1, -1):
        if a[i] != b[i]:
            return int(b[i] - a[i])
    return 0


def histogram_sort_key(histogram: np.ndarray) -> tuple[int, ...]:
    """Clé de tri équivalente à `compare_histograms` (à trier en ordre décroissant)."""
    return tuple(histogram[::-1].tolist())
