"""Geometry module for deckforge.

This package provides the percentage-relative coordinate primitives, the
pure drag-and-resize engine, and layout validation for slide regions.

Key Components:
    - Primitives: Rect (percent space), Point, PixelDelta, Size (absolute)
    - Edit modes: MoveMode, ResizeMode with a Handle
    - Engine: compute_rect and its move/resize/clamp building blocks
    - Validators: minimum-size checking and repair

Example:
    from deckforge.geometry import MoveMode, PixelDelta, Rect, Size, compute_rect

    start = Rect(x=10, y=10, width=30, height=20)
    container = Size(width=1280, height=720)
    moved = compute_rect(start, MoveMode(), PixelDelta(dx=64, dy=0), container)
    assert moved.x == 15.0
"""

from deckforge.geometry.engine import (
    DEFAULT_MIN_SIZE,
    clamp_to_canvas,
    compute_rect,
    delta_to_percent,
    move_rect,
    resize_rect,
)
from deckforge.geometry.primitives import (
    CANVAS_EXTENT,
    EditMode,
    Handle,
    MoveMode,
    PixelDelta,
    Point,
    Rect,
    ResizeMode,
    Size,
)
from deckforge.geometry.validators import RectValidationError, RectValidator

__all__ = [
    "CANVAS_EXTENT",
    "DEFAULT_MIN_SIZE",
    "EditMode",
    "Handle",
    "MoveMode",
    "PixelDelta",
    "Point",
    "Rect",
    "RectValidationError",
    "RectValidator",
    "ResizeMode",
    "Size",
    "clamp_to_canvas",
    "compute_rect",
    "delta_to_percent",
    "move_rect",
    "resize_rect",
]
