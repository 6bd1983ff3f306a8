"""Repository pour les opérations sur l'index de métadonnées."""

from datetime import datetime
from typing import Optional

from .models import NoteMetadata, init_db


class Repository:
    """Gestionnaire des opérations de base de données."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self.session = init_db(db_path)

    def close(self):
        """Ferme la session."""
        self.session.close()

    # ===== Notes =====

    def upsert_note(
        self,
        path: str,
        title: str,
        content_hash: str,
        tags: Optional[list[str]] = None,
        frontmatter: Optional[dict] = None,
    ) -> NoteMetadata:
        """Crée ou met à jour l'entrée d'une note."""
        note = self.get_note(path)

        if note is None:
            note = NoteMetadata(path=path, title=title, content_hash=content_hash)
            self.session.add(note)
        else:
            note.title = title
            note.content_hash = content_hash

        note.set_tags(tags or [])
        note.set_frontmatter(frontmatter)

        note.updated_at = datetime.now()
        self.session.commit()
        return note

    def get_note(self, path: str) -> Optional[NoteMetadata]:
        """Récupère une note par son chemin."""
        return self.session.query(NoteMetadata).filter(NoteMetadata.path == path).first()

    def get_all_notes(self) -> list[NoteMetadata]:
        """Récupère toutes les notes."""
        return self.session.query(NoteMetadata).all()

    def get_content_hashes(self) -> dict[str, str]:
        """Hash de contenu par chemin, pour le rafraîchissement incrémental."""
        rows = self.session.query(NoteMetadata.path, NoteMetadata.content_hash).all()
        return {path: content_hash for path, content_hash in rows}

    def delete_notes_not_in(self, paths: list[str]) -> int:
        """Supprime les notes qui ne sont plus dans le vault."""
        deleted = (
            self.session.query(NoteMetadata)
            .filter(~NoteMetadata.path.in_(paths))
            .delete(synchronize_session="fetch")
        )
        self.session.commit()
        return deleted

    def count_notes(self) -> int:
        return self.session.query(NoteMetadata).count()
