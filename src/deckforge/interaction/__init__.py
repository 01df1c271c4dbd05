"""Interaction controller for deckforge.

Public API:
    - GestureController: turns pointer gestures into region commits
    - GestureState: IDLE / ACTIVE
    - ActiveGesture: the fixed basis captured at gesture start
"""

from deckforge.interaction.controller import (
    ActiveGesture,
    FrameCallback,
    GestureController,
    GestureState,
)

__all__ = [
    "ActiveGesture",
    "FrameCallback",
    "GestureController",
    "GestureState",
]
