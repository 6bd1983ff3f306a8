"""Extraction des tags d'une note (texte vivant ou entrée d'index)."""

from typing import Mapping, Optional, Union
import re

from ..config import EXCLUDED_TAG_CHARS


class TagExtractor:
    """Extrait les tags sans leur marqueur.

    Deux sources :
    - le texte vivant de la note en cours d'édition (scan direct)
    - l'entrée de l'index de métadonnées pour les autres notes du vault
    """

    def __init__(self, marker: str = "#", excluded_chars: str = EXCLUDED_TAG_CHARS):
        self.marker = marker
        self.excluded_chars = excluded_chars
        # Marqueur suivi de tout ce qui n'est ni un blanc ni un caractère exclu
        self._text_pattern = re.compile(
            re.escape(marker) + r"([^\s" + re.escape(excluded_chars) + r"]*)"
        )

    def extract_from_text(self, text: str) -> list[str]:
        """Extrait les tags du texte brut, dans l'ordre d'apparition."""
        return [tag for tag in self._text_pattern.findall(text or "") if tag]

    def extract_from_metadata(self, entry: Optional[Mapping]) -> list[str]:
        """Lit les tags d'une entrée de l'index.

        Une entrée absente donne une liste vide. Les doublons sont conservés,
        ils comptent pour le calcul du recouvrement.
        """
        if entry is None:
            return []

        tags = entry.get("tags") or []
        stripped = (self._strip_marker(str(tag)) for tag in tags)
        return [tag for tag in stripped if tag]

    def _strip_marker(self, tag: str) -> str:
        if tag.startswith(self.marker):
            return tag[len(self.marker):]
        return tag


_default_extractor = TagExtractor()


def extract_tags(source: Union[str, Mapping, None]) -> list[str]:
    """Extrait les tags d'un texte (note courante) ou d'une entrée d'index."""
    if isinstance(source, str):
        return _default_extractor.extract_from_text(source)
    return _default_extractor.extract_from_metadata(source)
