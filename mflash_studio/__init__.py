"""Editing logic for .mflash flashcard decks: assets, browsing, covers, cards and schema text."""

__version__ = "0.1.4"