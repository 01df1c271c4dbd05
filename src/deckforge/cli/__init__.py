"""CLI module for deckforge.

Provides the command-line interface for generating decks, managing saved
projects and printing export layouts.
"""

from __future__ import annotations

from deckforge.cli.main import Provider, app

__all__ = ["Provider", "app"]
