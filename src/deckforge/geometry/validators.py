"""Layout validation utilities for deckforge.

The drag engine only ever produces valid rects. Rects that come from
outside the engine (loaded projects, generated layouts, hand-written
fixtures) are checked here against the minimum-size policy, and can be
repaired with the same clamping rules the engine uses.
"""

from __future__ import annotations

from deckforge.geometry.engine import DEFAULT_MIN_SIZE, clamp_to_canvas
from deckforge.geometry.primitives import CANVAS_EXTENT, EDGE_TOLERANCE, Rect


class RectValidationError(Exception):
    """Raised when a rect fails layout validation.

    Attributes:
        rect: The invalid rect that was validated.
        min_size: The minimum size it was validated against.
    """

    def __init__(self, message: str, *, rect: Rect, min_size: float) -> None:
        self.rect = rect
        self.min_size = min_size
        super().__init__(f"{message} (rect={rect.to_tuple()}, min_size={min_size})")


class RectValidator:
    """Validator for region rects against the layout policy.

    Stateless: every method operates purely on its inputs.
    """

    def validate(
        self,
        rect: Rect,
        *,
        min_size: float = DEFAULT_MIN_SIZE,
        strict: bool = True,
    ) -> bool:
        """Validate that a rect satisfies the minimum-size floor.

        Containment inside the canvas is already guaranteed by ``Rect``.

        Args:
            rect: The rect to validate.
            min_size: Minimum width and height, percent.
            strict: If True, raise RectValidationError on failure.
                If False, return False instead.

        Returns:
            True if the rect is valid.

        Raises:
            RectValidationError: If strict=True and the rect is too small.
        """
        violations: list[str] = []
        if rect.width < min_size - EDGE_TOLERANCE:
            violations.append(f"width ({rect.width}) below minimum")
        if rect.height < min_size - EDGE_TOLERANCE:
            violations.append(f"height ({rect.height}) below minimum")

        if violations and strict:
            raise RectValidationError(
                f"Rect too small: {'; '.join(violations)}",
                rect=rect,
                min_size=min_size,
            )
        return not violations

    def clamp_rect(self, rect: Rect, *, min_size: float = DEFAULT_MIN_SIZE) -> Rect:
        """Grow a rect to the minimum size and keep it inside the canvas.

        Args:
            rect: The rect to repair.
            min_size: Minimum width and height, percent.

        Returns:
            A new Rect satisfying the layout policy.

        Example:
            >>> RectValidator().clamp_rect(Rect(x=95, y=0, width=5, height=50)).x
            90.0
        """
        width = min(max(rect.width, min_size), CANVAS_EXTENT)
        height = min(max(rect.height, min_size), CANVAS_EXTENT)
        x, y, width, height = clamp_to_canvas(rect.x, rect.y, width, height)
        return Rect(x=x, y=y, width=width, height=height)

    def is_valid(self, rect: Rect, *, min_size: float = DEFAULT_MIN_SIZE) -> bool:
        """Check a rect without raising."""
        return self.validate(rect, min_size=min_size, strict=False)
