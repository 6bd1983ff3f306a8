"""Fixtures partagées : un petit vault Obsidian temporaire."""

from pathlib import Path

import pytest


VAULT_NOTES = {
    "courante.md": "# Note courante\n\nRéunion #project et #urgent.\n\n@",
    "facturation.md": "---\ntags: [project, urgent]\n---\n# Facturation\n\nVoir #billing\n",
    "projet.md": "# Projet\n\n#project\n",
    "divers.md": "Notes en vrac #misc\n",
    "sans-tags.md": "Aucun tag ici.\n",
    ".obsidian/workspace.md": "#ignored\n",
}


def write_vault(root: Path, notes: dict[str, str]) -> Path:
    for relative, content in notes.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def vault(tmp_path) -> Path:
    return write_vault(tmp_path / "vault", VAULT_NOTES)


@pytest.fixture
def db_path(tmp_path) -> str:
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    return str(data_dir / "metadata.db")
