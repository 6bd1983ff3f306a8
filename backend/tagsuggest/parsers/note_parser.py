"""Parser pour les notes Obsidian avec extraction de métadonnées."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional
import hashlib
import logging
import re

import frontmatter

from ..config import IGNORED_FOLDERS

logger = logging.getLogger(__name__)


@dataclass
class ParsedNote:
    """Représente une note Obsidian parsée.

    Les tags gardent leur marqueur et leurs doublons, comme dans le cache
    de métadonnées d'Obsidian (frontmatter d'abord, puis tags inline).
    """

    path: str
    title: str
    content: str  # Texte brut sans frontmatter
    frontmatter: dict = field(default_factory=dict)
    tags: list[str] = field(default_factory=list)
    content_hash: str = ""

    def __post_init__(self):
        if not self.content_hash:
            self.content_hash = hashlib.md5(self.content.encode()).hexdigest()


class NoteParser:
    """Parse les notes Obsidian et extrait les métadonnées."""

    # Tag inline : précédé d'un début de ligne ou d'un blanc
    INLINE_TAG_PATTERN = re.compile(r"(?:^|(?<=\s))#([\w/\-]+)", re.MULTILINE)
    # Blocs de code (les # qu'ils contiennent ne sont pas des tags)
    CODE_BLOCK_PATTERN = re.compile(r"```.*?```", re.DOTALL)

    def __init__(
        self,
        vault_path: str | Path,
        ignored_folders: Optional[set[str]] = None,
        marker: str = "#",
    ):
        # Résout le chemin en absolu pour éviter les problèmes de chemins relatifs
        self.vault_path = Path(vault_path).resolve()
        self.ignored_folders = ignored_folders if ignored_folders is not None else set(IGNORED_FOLDERS)
        self.marker = marker

    def iter_note_files(self) -> Iterator[Path]:
        """Parcourt les fichiers markdown du vault (hors dossiers ignorés)."""
        for md_file in sorted(self.vault_path.rglob("*.md")):
            relative_parts = md_file.relative_to(self.vault_path).parts
            if any(folder in relative_parts for folder in self.ignored_folders):
                continue
            if not md_file.is_file():
                continue
            # Lien symbolique vers un fichier hors du vault : pas une note du vault
            if not md_file.resolve().is_relative_to(self.vault_path):
                logger.debug(f"Note hors du vault ignorée: {md_file}")
                continue
            yield md_file

    def relative_path(self, note_path: str | Path) -> str:
        """Chemin relatif au vault, en notation POSIX (identifiant de note)."""
        return self._resolve(note_path).relative_to(self.vault_path).as_posix()

    def read_raw(self, note_path: str | Path) -> str:
        """Lit le contenu brut d'une note."""
        with open(self._resolve(note_path), "r", encoding="utf-8") as f:
            return f.read()

    def parse_note(self, note_path: str | Path) -> ParsedNote:
        """Parse une note et extrait toutes ses métadonnées."""
        path = self._resolve(note_path)
        raw_content = self.read_raw(path)
        return self.parse_text(raw_content, path)

    def parse_text(self, raw_content: str, path: str | Path) -> ParsedNote:
        """Parse le contenu brut d'une note déjà lue."""
        path = self._resolve(path)

        # Parse le frontmatter YAML
        post = frontmatter.loads(raw_content)
        fm = dict(post.metadata) if post.metadata else {}
        content = post.content

        return ParsedNote(
            path=path.relative_to(self.vault_path).as_posix(),
            title=self._extract_title(content, path),
            content=content,
            frontmatter=fm,
            tags=self._extract_tags(fm, content),
            content_hash=hashlib.md5(raw_content.encode()).hexdigest(),
        )

    def parse_vault(self) -> list[ParsedNote]:
        """Parse toutes les notes du vault.

        Une note illisible est ignorée (avec un avertissement).
        """
        notes: list[ParsedNote] = []
        for md_file in self.iter_note_files():
            try:
                notes.append(self.parse_note(md_file))
            except (OSError, UnicodeDecodeError, ValueError) as e:
                logger.warning(f"Note ignorée {md_file}: {e}")
        return notes

    def _resolve(self, note_path: str | Path) -> Path:
        path = Path(note_path)
        if not path.is_absolute():
            path = self.vault_path / path
        return path.resolve()

    def _extract_title(self, content: str, path: Path) -> str:
        """Extrait le titre de la note."""
        # Cherche le premier H1
        h1_match = re.search(r"^#\s+(.+)$", content, re.MULTILINE)
        if h1_match:
            return h1_match.group(1).strip()
        # Sinon utilise le nom du fichier
        return path.stem

    def _extract_tags(self, fm: dict, content: str) -> list[str]:
        """Extrait tous les tags (frontmatter + inline), marqueur inclus."""
        tags: list[str] = []

        # Tags du frontmatter ("tags" ou "tag", liste ou chaîne)
        for key in ("tags", "tag"):
            fm_tags = fm.get(key) or []
            if isinstance(fm_tags, str):
                fm_tags = re.split(r"[,\s]+", fm_tags)
            elif not isinstance(fm_tags, (list, tuple)):
                fm_tags = [fm_tags]
            for tag in fm_tags:
                tag = str(tag).strip().lstrip(self.marker)
                if tag:
                    tags.append(f"{self.marker}{tag}")

        # Tags inline dans le contenu (hors blocs de code)
        text = self.CODE_BLOCK_PATTERN.sub("", content)
        for tag in self.INLINE_TAG_PATTERN.findall(text):
            tags.append(f"{self.marker}{tag}")

        return tags
