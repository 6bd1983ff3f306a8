"""Cache de métadonnées du vault, adossé à l'index SQLite."""

from dataclasses import dataclass
from typing import Optional
import hashlib
import logging
import time

from tqdm import tqdm

from ..database.repository import Repository
from ..parsers.note_parser import NoteParser

logger = logging.getLogger(__name__)


@dataclass
class RefreshStats:
    """Résultat d'un rafraîchissement de l'index."""

    scanned: int = 0
    updated: int = 0
    unchanged: int = 0
    deleted: int = 0
    errors: int = 0
    elapsed_seconds: float = 0.0


class MetadataCache:
    """Index précalculé des tags de chaque note.

    `refresh()` synchronise la base avec le vault (seules les notes dont le
    hash a changé sont re-parsées). `load()` charge ensuite les entrées en
    mémoire : les lectures `get_file_cache()` ne touchent plus la session
    SQLAlchemy et peuvent être faites depuis plusieurs threads.
    """

    def __init__(self, parser: NoteParser, repository: Repository):
        self.parser = parser
        self.repository = repository
        self._entries: dict[str, dict] = {}

    def refresh(self, show_progress: bool = False) -> RefreshStats:
        """Met à jour l'index à partir des fichiers du vault."""
        start_time = time.time()
        stats = RefreshStats()
        known_hashes = self.repository.get_content_hashes()
        current_paths: list[str] = []

        files = list(self.parser.iter_note_files())
        iterator = tqdm(files, desc="Indexation des notes") if show_progress else files

        for md_file in iterator:
            stats.scanned += 1
            path = self.parser.relative_path(md_file)
            current_paths.append(path)

            try:
                raw_content = self.parser.read_raw(md_file)
                content_hash = hashlib.md5(raw_content.encode()).hexdigest()
                if known_hashes.get(path) == content_hash:
                    stats.unchanged += 1
                    continue

                note = self.parser.parse_text(raw_content, md_file)
            except (OSError, UnicodeDecodeError, ValueError) as e:
                stats.errors += 1
                logger.warning(f"Note ignorée {path}: {e}")
                continue

            self.repository.upsert_note(
                path=note.path,
                title=note.title,
                content_hash=note.content_hash,
                tags=note.tags,
                frontmatter=note.frontmatter,
            )
            stats.updated += 1
            logger.debug(f"Indexée: {path} ({len(note.tags)} tags)")

        # Nettoie les notes supprimées de l'index
        stats.deleted = self.repository.delete_notes_not_in(current_paths)
        stats.elapsed_seconds = time.time() - start_time

        logger.info(
            f"Index rafraîchi: {stats.updated} mises à jour, {stats.unchanged} inchangées, "
            f"{stats.deleted} supprimées, {stats.errors} erreurs ({stats.elapsed_seconds:.1f}s)"
        )
        return stats

    def load(self) -> int:
        """Charge toutes les entrées de l'index en mémoire."""
        self._entries = {
            note.path: note.to_cache_entry() for note in self.repository.get_all_notes()
        }
        logger.debug(f"{len(self._entries)} entrées chargées depuis l'index")
        return len(self._entries)

    def get_file_cache(self, path: str) -> Optional[dict]:
        """Entrée d'index d'une note, ou None si elle n'a jamais été indexée."""
        return self._entries.get(path)
