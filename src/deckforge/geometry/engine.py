"""Drag-and-resize engine for percentage-relative regions.

Computes the Rect a region should occupy after a pointer drag, given the
Rect it had when the gesture started. The computation is pure: the same
start rect, mode, delta and container always produce the same result, which
is what lets a gesture be replayed deterministically from its basis.

Algorithm:
    1. Convert the pixel delta to percentages of the container.
    2. Move translates the region. Resize adjusts the dragged edges; the
       width/height never drop below ``min_size``, and dragging a top or
       left edge also shifts y/x.
    3. Clamp to the canvas: position first, then size.
"""

from __future__ import annotations

from deckforge.geometry.primitives import (
    CANVAS_EXTENT,
    EditMode,
    Handle,
    MoveMode,
    PixelDelta,
    Rect,
    ResizeMode,
    Size,
)

DEFAULT_MIN_SIZE: float = 10.0


def delta_to_percent(delta: PixelDelta, container: Size) -> tuple[float, float]:
    """Convert a pixel delta into canvas percentages.

    Args:
        delta: Pointer displacement in container pixels.
        container: Size of the tracking container in pixels.

    Returns:
        (dx_pct, dy_pct) tuple.
    """
    dx_pct = delta.dx / container.width * CANVAS_EXTENT
    dy_pct = delta.dy / container.height * CANVAS_EXTENT
    return dx_pct, dy_pct


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def clamp_to_canvas(
    x: float, y: float, width: float, height: float
) -> tuple[float, float, float, float]:
    """Clamp a candidate rectangle into the canvas.

    Position is clamped first against the current size, then the size is
    re-shrunk against the clamped position. A region can never leave the
    canvas, and a size wider than the canvas collapses to the full extent.
    """
    x = _clamp(x, 0.0, CANVAS_EXTENT - width)
    y = _clamp(y, 0.0, CANVAS_EXTENT - height)
    width = min(width, CANVAS_EXTENT - x)
    height = min(height, CANVAS_EXTENT - y)
    return x, y, width, height


def move_rect(start: Rect, dx_pct: float, dy_pct: float) -> Rect:
    """Translate ``start`` by a percentage delta, clamped to the canvas."""
    x, y, width, height = clamp_to_canvas(
        start.x + dx_pct, start.y + dy_pct, start.width, start.height
    )
    return Rect(x=x, y=y, width=width, height=height)


def resize_rect(
    start: Rect,
    handle: Handle,
    dx_pct: float,
    dy_pct: float,
    *,
    min_size: float = DEFAULT_MIN_SIZE,
) -> Rect:
    """Drag the edges named by ``handle`` by a percentage delta.

    Args:
        start: Rect at the start of the gesture.
        handle: Which edges are being dragged.
        dx_pct: Horizontal delta, percent of canvas width.
        dy_pct: Vertical delta, percent of canvas height.
        min_size: Floor for width and height, percent.

    Returns:
        The resized Rect, clamped to the canvas.
    """
    x, y, width, height = start.x, start.y, start.width, start.height

    if handle.moves_right:
        width = max(min_size, start.width + dx_pct)
    if handle.moves_left:
        width = max(min_size, start.width - dx_pct)
        x = start.x + dx_pct
    if handle.moves_bottom:
        height = max(min_size, start.height + dy_pct)
    if handle.moves_top:
        height = max(min_size, start.height - dy_pct)
        y = start.y + dy_pct

    x, y, width, height = clamp_to_canvas(x, y, width, height)
    return Rect(x=x, y=y, width=width, height=height)


def compute_rect(
    start: Rect,
    mode: EditMode,
    delta: PixelDelta,
    container: Size,
    *,
    min_size: float = DEFAULT_MIN_SIZE,
) -> Rect:
    """Compute the Rect produced by dragging ``start`` by ``delta``.

    Args:
        start: Rect at the start of the gesture (the fixed basis).
        mode: MoveMode, or ResizeMode with the dragged handle.
        delta: Total pointer displacement since the gesture started.
        container: Container size in pixels.
        min_size: Floor for width and height when resizing, percent.

    Returns:
        A Rect lying inside the canvas.

    Example:
        >>> start = Rect(x=80, y=10, width=15, height=15)
        >>> compute_rect(
        ...     start, MoveMode(), PixelDelta(dx=500), Size(width=1000, height=500)
        ... ).x
        85.0
    """
    dx_pct, dy_pct = delta_to_percent(delta, container)
    if isinstance(mode, ResizeMode):
        return resize_rect(start, mode.handle, dx_pct, dy_pct, min_size=min_size)
    if isinstance(mode, MoveMode):
        return move_rect(start, dx_pct, dy_pct)
    raise TypeError(f"Unsupported edit mode: {mode!r}")
