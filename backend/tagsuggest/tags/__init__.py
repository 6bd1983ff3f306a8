"""Module de classement des tags."""

from .histogram import (
    build_histograms,
    compare_histograms,
    histogram_sort_key,
    overlap_score,
)
from .ranker import (
    TagSuggestion,
    is_subsequence,
    rank_candidates,
    rank_suggestions,
    score_suggestions,
)

__all__ = [
    # Histogrammes de co-occurrence
    "build_histograms",
    "compare_histograms",
    "histogram_sort_key",
    "overlap_score",
    # Classement
    "TagSuggestion",
    "is_subsequence",
    "rank_candidates",
    "rank_suggestions",
    "score_suggestions",
]
