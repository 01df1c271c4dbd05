"""Geometry primitives for deckforge.

This module provides immutable Pydantic models for the two coordinate
spaces used by the editor:

- Relative (percentage) space: ``Rect`` positions a region on a slide
  canvas as percentages of the canvas dimensions, so (0, 0) is the top-left
  corner and (100, 100) the bottom-right.
- Absolute space: ``Size``, ``Point`` and ``PixelDelta`` describe pointer
  positions and container bounds in pixels (or page units for export).
"""

from __future__ import annotations

from enum import Enum
from typing import Literal, Self

from pydantic import BaseModel, Field, model_validator

CANVAS_EXTENT: float = 100.0

# Absorbs float rounding in x + width after clamping against the canvas edge.
EDGE_TOLERANCE: float = 1e-9


class Point(BaseModel, frozen=True):
    """A pointer position in container pixels.

    Pointer coordinates are not constrained: a pointer may travel outside
    the tracking surface during a gesture.

    Attributes:
        x: Horizontal position (pixels from left edge).
        y: Vertical position (pixels from top edge).
    """

    x: float = Field(..., description="X coordinate (pixels from left)")
    y: float = Field(..., description="Y coordinate (pixels from top)")

    def delta_to(self, other: Point) -> PixelDelta:
        """Return the displacement from this point to ``other``."""
        return PixelDelta(dx=other.x - self.x, dy=other.y - self.y)


class PixelDelta(BaseModel, frozen=True):
    """A pointer displacement in container pixels."""

    dx: float = 0.0
    dy: float = 0.0


class Size(BaseModel, frozen=True):
    """A 2D size representing width and height.

    Used for container bounds (pixels) and export pages (page units).
    Both dimensions must be strictly positive (> 0).

    Attributes:
        width: Horizontal extent.
        height: Vertical extent.
    """

    width: float = Field(..., gt=0, description="Width")
    height: float = Field(..., gt=0, description="Height")


class Rect(BaseModel, frozen=True):
    """A rectangular region in percentage-relative canvas coordinates.

    The region is defined by its top-left corner (x, y) and its dimensions,
    all expressed as percentages of the containing canvas. A valid Rect
    always lies inside the canvas:

    - ``0 <= x`` and ``0 <= y``
    - ``x + width <= 100`` and ``y + height <= 100``

    The minimum-size floor is a layout policy rather than a shape property,
    so it is enforced by the drag engine and ``RectValidator`` instead of
    the model itself.

    Attributes:
        x: Left edge (percent of canvas width).
        y: Top edge (percent of canvas height).
        width: Horizontal extent (percent of canvas width, > 0).
        height: Vertical extent (percent of canvas height, > 0).
    """

    x: float = Field(..., ge=0, description="Left edge, percent")
    y: float = Field(..., ge=0, description="Top edge, percent")
    width: float = Field(..., gt=0, le=CANVAS_EXTENT, description="Width, percent")
    height: float = Field(
        ..., gt=0, le=CANVAS_EXTENT, description="Height, percent"
    )

    @model_validator(mode="after")
    def _validate_inside_canvas(self) -> Self:
        if self.x + self.width > CANVAS_EXTENT + EDGE_TOLERANCE:
            raise ValueError(
                f"Rect right edge ({self.x + self.width}) exceeds canvas"
            )
        if self.y + self.height > CANVAS_EXTENT + EDGE_TOLERANCE:
            raise ValueError(
                f"Rect bottom edge ({self.y + self.height}) exceeds canvas"
            )
        return self

    @property
    def right(self) -> float:
        """Return the X coordinate of the right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Return the Y coordinate of the bottom edge."""
        return self.y + self.height

    def to_tuple(self) -> tuple[float, float, float, float]:
        """Convert to (x, y, width, height) tuple."""
        return (self.x, self.y, self.width, self.height)

    @classmethod
    def full_canvas(cls) -> Self:
        """Return the Rect covering the whole canvas."""
        return cls(x=0.0, y=0.0, width=CANVAS_EXTENT, height=CANVAS_EXTENT)


class Handle(str, Enum):
    """Resize handle on a region's border.

    The value spells the edges the handle drags: ``t``/``b`` for the top and
    bottom edges, ``l``/``r`` for the left and right edges.
    """

    TOP_LEFT = "tl"
    TOP = "t"
    TOP_RIGHT = "tr"
    LEFT = "l"
    RIGHT = "r"
    BOTTOM_LEFT = "bl"
    BOTTOM = "b"
    BOTTOM_RIGHT = "br"

    @property
    def moves_top(self) -> bool:
        return "t" in self.value

    @property
    def moves_bottom(self) -> bool:
        return "b" in self.value

    @property
    def moves_left(self) -> bool:
        return "l" in self.value

    @property
    def moves_right(self) -> bool:
        return "r" in self.value


class MoveMode(BaseModel, frozen=True):
    """Translate the whole region; size is preserved."""

    kind: Literal["move"] = "move"


class ResizeMode(BaseModel, frozen=True):
    """Drag the edges named by ``handle``; the opposite edges stay put."""

    kind: Literal["resize"] = "resize"
    handle: Handle


EditMode = MoveMode | ResizeMode
