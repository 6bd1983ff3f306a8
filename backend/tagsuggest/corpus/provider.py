"""Accès au corpus : tags de chaque note du vault sauf la note courante."""

from typing import Iterable, Optional, Protocol
import concurrent.futures
import logging
import threading

from sqlalchemy.exc import SQLAlchemyError

from ..parsers.note_parser import NoteParser
from ..parsers.tag_extractor import TagExtractor
from .metadata_cache import MetadataCache

logger = logging.getLogger(__name__)


class TagProvider(Protocol):
    """Capacité minimale attendue d'un fournisseur de corpus."""

    def get_tags_for(self, document_id: str) -> list[str]:
        ...

    def list_documents(self, exclude: Optional[str] = None) -> list[str]:
        ...


class VaultCorpus:
    """Corpus d'un vault Obsidian.

    Les documents sont les fichiers markdown présents dans le vault ; leurs
    tags viennent de l'index de métadonnées. Un fichier pas encore indexé
    contribue une liste vide.
    """

    def __init__(
        self,
        parser: NoteParser,
        cache: MetadataCache,
        extractor: Optional[TagExtractor] = None,
    ):
        self.parser = parser
        self.cache = cache
        self.extractor = extractor or TagExtractor(marker=parser.marker)

    def list_documents(self, exclude: Optional[str] = None) -> list[str]:
        """Identifiants de toutes les notes du vault, sauf `exclude`."""
        documents = []
        for md_file in self.parser.iter_note_files():
            path = self.parser.relative_path(md_file)
            if path != exclude:
                documents.append(path)
        return documents

    def get_tags_for(self, document_id: str) -> list[str]:
        return self.extractor.extract_from_metadata(self.cache.get_file_cache(document_id))


def collect_corpus_tags(
    provider: TagProvider,
    document_ids: Iterable[str],
    max_workers: int = 8,
    cancel_event: Optional[threading.Event] = None,
) -> Optional[list[list[str]]]:
    """Lit les tags de chaque document en parallèle.

    L'ordre du résultat n'a pas d'importance pour le classement. Un document
    en échec contribue une liste vide. Retourne None si `cancel_event` est
    levé avant la fin (la requête a été remplacée par une plus récente).
    """
    document_ids = list(document_ids)
    if not document_ids:
        return []

    results: list[list[str]] = []
    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {}
        for document_id in document_ids:
            if cancel_event is not None and cancel_event.is_set():
                break
            futures[executor.submit(provider.get_tags_for, document_id)] = document_id

        for future in concurrent.futures.as_completed(futures):
            if cancel_event is not None and cancel_event.is_set():
                for pending in futures:
                    pending.cancel()
                logger.debug("Lecture du corpus abandonnée (requête remplacée)")
                return None

            document_id = futures[future]
            try:
                results.append(list(future.result()))
            except (OSError, SQLAlchemyError, ValueError) as e:
                logger.warning(f"Tags illisibles pour {document_id}: {e}")
                results.append([])

    if cancel_event is not None and cancel_event.is_set():
        return None
    return results


def gather_corpus(
    provider: TagProvider,
    current_document: Optional[str],
    max_workers: int = 8,
    cancel_event: Optional[threading.Event] = None,
) -> Optional[list[list[str]]]:
    """Énumère le corpus (hors note courante) puis lit les tags de chaque note.

    Si l'énumération échoue, le corpus est traité comme vide.
    """
    try:
        document_ids = provider.list_documents(exclude=current_document)
    except (OSError, SQLAlchemyError, ValueError) as e:
        logger.warning(f"Énumération du corpus impossible, corpus vide: {e}")
        return []

    logger.debug(f"{len(document_ids)} documents dans le corpus")
    return collect_corpus_tags(
        provider, document_ids, max_workers=max_workers, cancel_event=cancel_event
    )
