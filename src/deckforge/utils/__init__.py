"""Shared utilities for deckforge."""
