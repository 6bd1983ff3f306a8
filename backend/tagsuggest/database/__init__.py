"""Module de base de données SQLite (index de métadonnées)."""

from .models import Base, NoteMetadata, init_db
from .repository import Repository

__all__ = [
    "Base",
    "NoteMetadata",
    "init_db",
    "Repository",
]
