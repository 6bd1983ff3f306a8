"""Accès au corpus de notes et à l'index de métadonnées."""

from .metadata_cache import MetadataCache, RefreshStats
from .provider import TagProvider, VaultCorpus, collect_corpus_tags, gather_corpus

__all__ = [
    "MetadataCache",
    "RefreshStats",
    "TagProvider",
    "VaultCorpus",
    "collect_corpus_tags",
    "gather_corpus",
]
