"""Détection du déclencheur d'autocomplétion et remplacement du texte."""

from dataclasses import dataclass
from typing import Optional
import re


@dataclass(frozen=True)
class EditorPosition:
    """Position dans le document : ligne (0-based) et colonne."""

    line: int
    ch: int


@dataclass(frozen=True)
class TriggerInfo:
    """Zone du texte occupée par le déclencheur et requête saisie."""

    start: EditorPosition
    end: EditorPosition
    query: str


_trigger_patterns: dict[str, re.Pattern] = {}


def _trigger_pattern(trigger_char: str) -> re.Pattern:
    pattern = _trigger_patterns.get(trigger_char)
    if pattern is None:
        # Déclencheur suivi de caractères de mot, collé au curseur
        pattern = re.compile(re.escape(trigger_char) + r"(\w*)$")
        _trigger_patterns[trigger_char] = pattern
    return pattern


def detect_trigger(
    line_text: str,
    cursor: EditorPosition,
    trigger_char: str = "@",
) -> Optional[TriggerInfo]:
    """Cherche un déclencheur juste avant le curseur.

    Retourne None si le texte avant le curseur ne se termine pas par le
    caractère déclencheur suivi de zéro ou plusieurs caractères de mot.
    """
    before_cursor = line_text[:cursor.ch]
    match = _trigger_pattern(trigger_char).search(before_cursor)
    if match is None:
        return None

    return TriggerInfo(
        start=EditorPosition(line=cursor.line, ch=match.start()),
        end=cursor,
        query=match.group(1),
    )


def position_to_offset(text: str, position: EditorPosition) -> int:
    """Convertit une position (ligne, colonne) en index dans le texte."""
    lines = text.split("\n")
    if position.line < 0 or position.line >= len(lines):
        raise ValueError(f"Ligne hors du document: {position.line}")
    offset = sum(len(line) + 1 for line in lines[:position.line])
    return offset + min(position.ch, len(lines[position.line]))


def replacement_text(tag: str, marker: str = "#") -> str:
    """Texte inséré à la sélection d'une suggestion."""
    return f"{marker}{tag} "


def apply_suggestion(text: str, trigger: TriggerInfo, tag: str, marker: str = "#") -> str:
    """Remplace la zone du déclencheur par le tag choisi suivi d'une espace."""
    start = position_to_offset(text, trigger.start)
    end = position_to_offset(text, trigger.end)
    return text[:start] + replacement_text(tag, marker) + text[end:]
