"""Autocomplétion de tags par co-occurrence pour les notes Obsidian."""

__version__ = "0.1.0"
