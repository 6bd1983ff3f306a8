"""Point d'entrée principal de l'autocomplétion de tags."""

from pathlib import Path
from typing import Optional
import logging
import time

import click

from .config import SuggestConfig, DEFAULT_BUCKET_CAP
from .corpus import MetadataCache, VaultCorpus
from .database import Repository
from .editor import EditorPosition, SuggestContext, TagSuggest, TriggerInfo
from .output import SuggestionFormatter
from .parsers import NoteParser

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    """Configure le logging de la ligne de commande."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@click.group()
@click.option("--verbose", is_flag=True, help="Mode verbeux")
def cli(verbose: bool):
    """Suggestions de tags par co-occurrence pour un vault Obsidian."""
    configure_logging(verbose)


@cli.command("index")
@click.option(
    "--vault-path",
    required=True,
    type=click.Path(exists=True, file_okay=False),
    help="Chemin vers le vault Obsidian",
)
@click.option(
    "--db-path",
    default=SuggestConfig.db_path,
    type=click.Path(),
    help="Chemin de l'index SQLite des métadonnées",
)
@click.option("--progress/--no-progress", default=True, help="Barre de progression")
def index_command(vault_path: str, db_path: str, progress: bool):
    """Met à jour l'index des tags de chaque note."""
    stats = index_vault(vault_path, SuggestConfig(db_path=db_path), show_progress=progress)
    click.echo(
        f"✓ {stats['scanned']} notes ({stats['updated']} mises à jour, "
        f"{stats['deleted']} supprimées) en {stats['execution_time_seconds']:.1f}s"
    )


@cli.command("suggest")
@click.option(
    "--vault-path",
    required=True,
    type=click.Path(exists=True, file_okay=False),
    help="Chemin vers le vault Obsidian",
)
@click.option(
    "--note",
    required=True,
    type=click.Path(),
    help="Note en cours d'édition (chemin relatif au vault ou absolu)",
)
@click.option("--query", default=None, help="Texte saisi après le déclencheur")
@click.option("--line", "line_number", type=int, default=None, help="Ligne du curseur (0-based)")
@click.option("--cursor", "cursor_ch", type=int, default=None, help="Colonne du curseur")
@click.option(
    "--db-path",
    default=SuggestConfig.db_path,
    type=click.Path(),
    help="Chemin de l'index SQLite des métadonnées",
)
@click.option("--cap", default=DEFAULT_BUCKET_CAP, type=int, help="Nombre de buckets de recouvrement")
@click.option("--limit", default=None, type=int, help="Nombre maximum de suggestions")
@click.option("--refresh/--no-refresh", default=True, help="Rafraîchit l'index avant de classer")
@click.option("--json", "as_json", is_flag=True, help="Sortie JSON")
@click.option("--output", type=click.Path(), default=None, help="Fichier JSON de sortie")
@click.option(
    "--accept",
    type=int,
    default=None,
    help="Insère la suggestion de ce rang (1 = première) dans la note",
)
def suggest_command(
    vault_path: str,
    note: str,
    query: Optional[str],
    line_number: Optional[int],
    cursor_ch: Optional[int],
    db_path: str,
    cap: int,
    limit: Optional[int],
    refresh: bool,
    as_json: bool,
    output: Optional[str],
    accept: Optional[int],
):
    """Propose des tags pour une note, classés par co-occurrence."""
    try:
        config = SuggestConfig(bucket_cap=cap, limit=limit, db_path=db_path)
    except ValueError as e:
        raise click.BadParameter(str(e))

    try:
        result = suggest_tags(
            vault_path=vault_path,
            note=note,
            query=query,
            line_number=line_number,
            cursor_ch=cursor_ch,
            config=config,
            refresh=refresh,
        )
    except (OSError, UnicodeDecodeError) as e:
        raise click.FileError(note, hint=str(e))
    except ValueError as e:
        # Note hors du vault
        raise click.BadParameter(str(e), param_hint="--note")
    if result is None:
        click.echo("Aucun déclencheur avant le curseur.")
        return

    formatter = result["formatter"]
    if output:
        Path(output).parent.mkdir(parents=True, exist_ok=True)
        formatter.save_to_file(output)

    if as_json:
        click.echo(formatter.to_json())
    else:
        for rank, row in enumerate(formatter.render_rows(verbose=logger.isEnabledFor(logging.DEBUG)), 1):
            click.echo(f"{rank:>3}. {row}")
        if not formatter.suggestions:
            click.echo("Aucune suggestion.")

    if accept is not None:
        if not 1 <= accept <= len(formatter.suggestions):
            raise click.BadParameter(f"rang hors de la liste: {accept}", param_hint="--accept")
        chosen = formatter.suggestions[accept - 1]
        new_text = result["session"].select_suggestion(result["context"], chosen)
        with open(result["note_path"], "w", encoding="utf-8") as f:
            f.write(new_text)
        click.echo(f"✓ #{chosen.tag} inséré dans {result['context'].document_id}")


def build_parser(vault_path: str, config: SuggestConfig) -> NoteParser:
    """Parser du vault, partagé par l'indexation et les suggestions."""
    return NoteParser(vault_path, ignored_folders=config.ignored_folders, marker=config.tag_marker)


def index_vault(
    vault_path: str,
    config: Optional[SuggestConfig] = None,
    show_progress: bool = False,
) -> dict:
    """Rafraîchit l'index de métadonnées du vault."""
    start_time = time.time()
    config = config or SuggestConfig()
    Path(config.db_path).parent.mkdir(parents=True, exist_ok=True)

    repository = Repository(str(config.db_path))
    try:
        cache = MetadataCache(build_parser(vault_path, config), repository)
        stats = cache.refresh(show_progress=show_progress)
    finally:
        repository.close()

    return {
        "status": "success",
        "scanned": stats.scanned,
        "updated": stats.updated,
        "unchanged": stats.unchanged,
        "deleted": stats.deleted,
        "errors": stats.errors,
        "execution_time_seconds": time.time() - start_time,
    }


def suggest_tags(
    vault_path: str,
    note: str,
    query: Optional[str] = None,
    line_number: Optional[int] = None,
    cursor_ch: Optional[int] = None,
    config: Optional[SuggestConfig] = None,
    refresh: bool = True,
) -> Optional[dict]:
    """Classe les tags du vault pour une note.

    Avec `line_number`/`cursor_ch`, la requête est lue dans la note via le
    déclencheur ; sinon `query` est utilisée telle quelle. Retourne None si
    aucun déclencheur n'est trouvé avant le curseur.
    """
    config = config or SuggestConfig()
    Path(config.db_path).parent.mkdir(parents=True, exist_ok=True)

    parser = build_parser(vault_path, config)
    note_path = Path(note) if Path(note).is_absolute() else parser.vault_path / note
    document_id = parser.relative_path(note_path)
    text = parser.read_raw(note_path)

    repository = Repository(str(config.db_path))
    try:
        cache = MetadataCache(parser, repository)
        if refresh:
            cache.refresh()
        cache.load()
    finally:
        repository.close()

    corpus = VaultCorpus(parser, cache)
    session = TagSuggest(corpus, config=config)

    if line_number is not None and cursor_ch is not None:
        context = session.build_context(text, EditorPosition(line_number, cursor_ch), document_id)
        if context is None:
            return None
    else:
        # Sans curseur : déclencheur virtuel en fin de note
        lines = text.split("\n")
        end = EditorPosition(len(lines) - 1, len(lines[-1]))
        context = SuggestContext(
            document_id=document_id,
            text=text,
            trigger=TriggerInfo(start=end, end=end, query=query or ""),
        )

    suggestions = session.get_suggestions(context) or []
    formatter = SuggestionFormatter(
        suggestions,
        query=context.query,
        document=document_id,
        corpus_size=len(corpus.list_documents(exclude=document_id)),
        marker=config.tag_marker,
    )

    logger.info(f"{len(suggestions)} suggestions pour {document_id} (requête '{context.query}')")
    return {
        "formatter": formatter,
        "session": session,
        "context": context,
        "note_path": note_path,
    }


if __name__ == "__main__":
    cli()
