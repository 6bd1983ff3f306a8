"""Session d'autocomplétion des tags dans l'éditeur."""

from dataclasses import dataclass
from typing import Optional
import logging
import threading

from ..config import SuggestConfig
from ..corpus.provider import TagProvider, gather_corpus
from ..parsers.tag_extractor import TagExtractor
from ..tags.ranker import TagSuggestion, score_suggestions
from .trigger import EditorPosition, TriggerInfo, apply_suggestion, detect_trigger

logger = logging.getLogger(__name__)


@dataclass
class SuggestContext:
    """Contexte d'une requête : note courante et déclencheur."""

    document_id: Optional[str]
    text: str
    trigger: TriggerInfo

    @property
    def query(self) -> str:
        return self.trigger.query


class TagSuggest:
    """Fournit les suggestions de tags pour la note en cours d'édition.

    Chaque requête reçoit un jeton d'annulation. Une nouvelle requête lève
    le jeton de la précédente : celle-ci abandonne la lecture du corpus et
    retourne None. Aucun état de classement n'est conservé entre requêtes.
    """

    def __init__(
        self,
        provider: TagProvider,
        config: Optional[SuggestConfig] = None,
        extractor: Optional[TagExtractor] = None,
    ):
        self.provider = provider
        self.config = config or SuggestConfig()
        self.extractor = extractor or TagExtractor(
            marker=self.config.tag_marker,
            excluded_chars=self.config.excluded_chars,
        )
        self._lock = threading.Lock()
        self._active: Optional[threading.Event] = None

    def on_trigger(self, line_text: str, cursor: EditorPosition) -> Optional[TriggerInfo]:
        return detect_trigger(line_text, cursor, trigger_char=self.config.trigger_char)

    def build_context(
        self,
        text: str,
        cursor: EditorPosition,
        document_id: Optional[str] = None,
    ) -> Optional[SuggestContext]:
        """Construit le contexte à partir du texte complet et du curseur."""
        lines = text.split("\n")
        if cursor.line < 0 or cursor.line >= len(lines):
            return None
        trigger = self.on_trigger(lines[cursor.line], cursor)
        if trigger is None:
            return None
        return SuggestContext(document_id=document_id, text=text, trigger=trigger)

    def get_suggestions(self, context: SuggestContext) -> Optional[list[TagSuggestion]]:
        """Classe les tags du corpus pour ce contexte.

        Retourne None si la requête a été remplacée avant la fin.
        """
        cancel_event = self._start_request()
        try:
            current_tags = self.extractor.extract_from_text(context.text)

            corpus_tag_sets = gather_corpus(
                self.provider,
                context.document_id,
                max_workers=self.config.max_workers,
                cancel_event=cancel_event,
            )
            if corpus_tag_sets is None or cancel_event.is_set():
                return None

            suggestions = score_suggestions(
                current_tags,
                corpus_tag_sets,
                query=context.query,
                cap=self.config.bucket_cap,
                limit=self.config.limit,
            )
            if cancel_event.is_set():
                return None

            logger.debug(
                f"{len(suggestions)} suggestions pour '{context.query}' "
                f"({len(corpus_tag_sets)} notes, {len(current_tags)} tags courants)"
            )
            return suggestions
        finally:
            self._end_request(cancel_event)

    def select_suggestion(self, context: SuggestContext, suggestion: TagSuggestion | str) -> str:
        """Retourne le texte de la note après insertion du tag choisi."""
        tag = suggestion.tag if isinstance(suggestion, TagSuggestion) else suggestion
        return apply_suggestion(context.text, context.trigger, tag, marker=self.config.tag_marker)

    def cancel(self) -> None:
        """Abandonne la requête en cours, s'il y en a une."""
        with self._lock:
            if self._active is not None:
                self._active.set()

    def _start_request(self) -> threading.Event:
        event = threading.Event()
        with self._lock:
            if self._active is not None:
                self._active.set()
            self._active = event
        return event

    def _end_request(self, event: threading.Event) -> None:
        with self._lock:
            if self._active is event:
                self._active = None
