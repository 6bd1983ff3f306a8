"""Configuration des suggestions de tags."""

from dataclasses import dataclass, field
from typing import Optional


# Caractères qui terminent un tag dans le texte d'une note (en plus des blancs)
EXCLUDED_TAG_CHARS = '!@#$%^&*(),.?":{}|<>'

# Nombre de buckets de recouvrement (indices 0..DEFAULT_BUCKET_CAP)
DEFAULT_BUCKET_CAP = 10

# Dossiers du vault jamais parcourus
IGNORED_FOLDERS = frozenset({
    ".obsidian", ".git", ".trash", "Templates", "templates", "_templates",
})


@dataclass
class SuggestConfig:
    """Configuration du moteur de suggestion.

    Aucune persistance : les valeurs viennent des défauts ou des options CLI.
    """

    # Classement
    bucket_cap: int = DEFAULT_BUCKET_CAP
    limit: Optional[int] = None  # None = toutes les suggestions

    # Syntaxe
    trigger_char: str = "@"
    tag_marker: str = "#"
    excluded_chars: str = EXCLUDED_TAG_CHARS

    # Lecture du corpus
    max_workers: int = 8

    # Index de métadonnées
    db_path: str = "backend/data/metadata.db"
    ignored_folders: set[str] = field(default_factory=lambda: set(IGNORED_FOLDERS))

    def __post_init__(self):
        if self.bucket_cap < 0:
            raise ValueError(f"bucket_cap doit être positif: {self.bucket_cap}")
        if len(self.trigger_char) != 1:
            raise ValueError(f"trigger_char doit être un seul caractère: {self.trigger_char!r}")
        if len(self.tag_marker) != 1:
            raise ValueError(f"tag_marker doit être un seul caractère: {self.tag_marker!r}")
        if self.limit is not None and self.limit < 0:
            raise ValueError(f"limit doit être positif: {self.limit}")
        if self.max_workers < 1:
            raise ValueError(f"max_workers doit être >= 1: {self.max_workers}")
