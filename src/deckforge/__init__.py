"""deckforge - interactive slide deck assembly.

A topic/slide document model with selection invariants, a percentage-relative
layout engine for drag-and-resize editing, and the projection of that layout
into preview and export frames.
"""

__version__ = "0.1.0"
