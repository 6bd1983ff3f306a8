"""Modèles SQLAlchemy pour l'index de métadonnées des notes."""

from typing import Optional
import json

from sqlalchemy import (
    Column,
    String,
    Text,
    DateTime,
    create_engine,
    Index,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.sql import func

Base = declarative_base()


class NoteMetadata(Base):
    """Entrée de l'index : tags d'une note, tels que lus à la dernière analyse."""

    __tablename__ = "note_metadata"

    path = Column(String, primary_key=True)
    title = Column(String, nullable=False)
    content_hash = Column(String, nullable=False)  # Pour détecter les changements
    tags_json = Column(Text, nullable=True)  # JSON: tags avec marqueur, doublons inclus
    frontmatter_json = Column(Text, nullable=True)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    __table_args__ = (Index("idx_note_metadata_hash", "content_hash"),)

    def set_tags(self, tags: list[str]) -> None:
        self.tags_json = json.dumps(tags, ensure_ascii=False)

    def get_tags(self) -> list[str]:
        """Désérialise les tags (liste vide si illisible)."""
        if not self.tags_json:
            return []
        try:
            tags = json.loads(self.tags_json)
        except (json.JSONDecodeError, TypeError):
            return []
        return tags if isinstance(tags, list) else []

    def set_frontmatter(self, fm: Optional[dict]) -> None:
        # default=str : les dates YAML ne sont pas sérialisables telles quelles
        self.frontmatter_json = json.dumps(fm or {}, ensure_ascii=False, default=str)

    def get_frontmatter(self) -> dict:
        if not self.frontmatter_json:
            return {}
        try:
            return json.loads(self.frontmatter_json)
        except (json.JSONDecodeError, TypeError):
            return {}

    def to_cache_entry(self) -> dict:
        """Format d'entrée de cache lu par le TagExtractor."""
        return {
            "path": self.path,
            "title": self.title,
            "tags": self.get_tags(),
            "frontmatter": self.get_frontmatter(),
        }


def init_db(db_path: str) -> Session:
    """Initialise la base de données et retourne une session."""
    url = "sqlite://" if db_path == ":memory:" else f"sqlite:///{db_path}"
    engine = create_engine(url, echo=False)
    Base.metadata.create_all(engine)

    SessionLocal = sessionmaker(bind=engine)
    return SessionLocal()
