"""Unit tests for geometry primitives.

Tests Point, Size, Rect and Handle including:
- Construction and validation against the canvas
- Computed properties (right, bottom)
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from deckforge.geometry import Handle, MoveMode, Point, Rect, ResizeMode, Size


class TestPoint:
    """Tests for the Point model."""

    def test_point_allows_negative_coordinates(self) -> None:
        """Pointers may leave the tracking surface mid-gesture."""
        point = Point(x=-15, y=-3)
        assert (point.x, point.y) == (-15, -3)

    def test_delta_to(self) -> None:
        """Test displacement between two pointer positions."""
        delta = Point(x=10, y=20).delta_to(Point(x=35, y=5))
        assert delta.dx == 25
        assert delta.dy == -15

    def test_point_is_frozen(self) -> None:
        """Test Point is immutable (frozen)."""
        point = Point(x=100, y=200)
        with pytest.raises(ValidationError):
            point.x = 300  # type: ignore[misc]


class TestSize:
    """Tests for the Size model."""

    @pytest.mark.parametrize(("width", "height"), [(0, 10), (10, 0), (-1, 10)])
    def test_size_rejects_non_positive(self, width: float, height: float) -> None:
        """Test Size rejects zero and negative dimensions."""
        with pytest.raises(ValidationError):
            Size(width=width, height=height)


class TestRect:
    """Tests for the Rect model."""

    def test_rect_creation_valid(self) -> None:
        """Test creating a valid Rect."""
        rect = Rect(x=3, y=5, width=45, height=90)
        assert rect.right == 48
        assert rect.bottom == 95

    def test_full_canvas(self) -> None:
        """Test the full canvas rect."""
        assert Rect.full_canvas().to_tuple() == (0.0, 0.0, 100.0, 100.0)

    def test_rect_touching_edges_is_valid(self) -> None:
        """Test that a rect ending exactly at the canvas edge is valid."""
        rect = Rect(x=52, y=5, width=48, height=95)
        assert rect.right == 100
        assert rect.bottom == 100

    def test_rect_rejects_negative_origin(self) -> None:
        """Test Rect rejects negative x."""
        with pytest.raises(ValidationError, match="greater than or equal to 0"):
            Rect(x=-1, y=0, width=10, height=10)

    def test_rect_rejects_zero_width(self) -> None:
        """Test Rect rejects zero width."""
        with pytest.raises(ValidationError, match="greater than 0"):
            Rect(x=0, y=0, width=0, height=10)

    def test_rect_rejects_right_edge_overflow(self) -> None:
        """Test Rect rejects x + width beyond the canvas."""
        with pytest.raises(ValidationError, match="right edge"):
            Rect(x=60, y=0, width=50, height=10)

    def test_rect_rejects_bottom_edge_overflow(self) -> None:
        """Test Rect rejects y + height beyond the canvas."""
        with pytest.raises(ValidationError, match="bottom edge"):
            Rect(x=0, y=95, width=10, height=10)

    def test_rect_tolerates_float_rounding(self) -> None:
        """Test that rounding noise at the canvas edge is absorbed."""
        rect = Rect(x=100 - 33.3, y=0, width=33.3, height=10)
        assert rect.right == pytest.approx(100)

    def test_rect_hashable(self) -> None:
        """Test Rect can be used in sets."""
        rects = {Rect(x=0, y=0, width=10, height=10) for _ in range(3)}
        assert len(rects) == 1


class TestHandle:
    """Tests for resize handles."""

    @pytest.mark.parametrize(
        ("handle", "edges"),
        [
            (Handle.TOP_LEFT, {"top", "left"}),
            (Handle.TOP, {"top"}),
            (Handle.TOP_RIGHT, {"top", "right"}),
            (Handle.LEFT, {"left"}),
            (Handle.RIGHT, {"right"}),
            (Handle.BOTTOM_LEFT, {"bottom", "left"}),
            (Handle.BOTTOM, {"bottom"}),
            (Handle.BOTTOM_RIGHT, {"bottom", "right"}),
        ],
    )
    def test_handle_edges(self, handle: Handle, edges: set[str]) -> None:
        """Each handle drags exactly the edges its name spells."""
        moved = {
            name
            for name in ("top", "bottom", "left", "right")
            if getattr(handle, f"moves_{name}")
        }
        assert moved == edges

    def test_handle_from_value(self) -> None:
        """Handles parse from their short string form."""
        assert Handle("br") is Handle.BOTTOM_RIGHT


class TestEditModes:
    """Tests for MoveMode and ResizeMode."""

    def test_mode_kinds(self) -> None:
        assert MoveMode().kind == "move"
        assert ResizeMode(handle=Handle.LEFT).kind == "resize"

    def test_resize_mode_parses_handle(self) -> None:
        assert ResizeMode.model_validate({"handle": "tl"}).handle is Handle.TOP_LEFT
