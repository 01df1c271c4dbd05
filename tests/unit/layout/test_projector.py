"""Tests for coordinate projection."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from deckforge.config import Settings
from deckforge.geometry import Rect, Size
from deckforge.layout import (
    SPLIT_TEXT,
    Frame,
    FrameTarget,
    SlideLayout,
    project,
    project_layout,
)


class TestFrame:
    """Tests for Frame construction."""

    def test_preview_frame(self) -> None:
        frame = Frame.preview(Size(width=800, height=450))
        assert frame.target is FrameTarget.PREVIEW
        assert frame.size == Size(width=800, height=450)

    def test_export_frame_defaults(self) -> None:
        frame = Frame.export(Settings(_env_file=None))  # type: ignore[call-arg]
        assert frame.target is FrameTarget.EXPORT
        assert (frame.width, frame.height) == (10.0, 5.625)

    def test_export_frame_from_settings(self) -> None:
        config = Settings(
            EXPORT_PAGE_WIDTH=13.333,
            EXPORT_PAGE_HEIGHT=7.5,
            _env_file=None,  # type: ignore[call-arg]
        )
        assert Frame.export(config).width == 13.333

    def test_frame_rejects_zero_size(self) -> None:
        with pytest.raises(ValueError):
            Frame(target=FrameTarget.PREVIEW, width=0, height=10)


class TestProject:
    """Tests for project and project_layout."""

    def test_full_canvas_fills_frame(self) -> None:
        frame = Frame(target=FrameTarget.EXPORT, width=10.0, height=5.625)
        projected = project(Rect.full_canvas(), frame)
        assert projected.to_tuple() == (0.0, 0.0, 10.0, 5.625)
        assert projected.target is FrameTarget.EXPORT

    def test_split_text_in_preview(self) -> None:
        frame = Frame.preview(Size(width=1000, height=500))
        assert project(SPLIT_TEXT, frame).to_tuple() == pytest.approx(
            (30.0, 25.0, 450.0, 450.0)
        )

    @given(
        x=st.floats(min_value=0, max_value=50),
        y=st.floats(min_value=0, max_value=50),
        width=st.floats(min_value=10, max_value=50),
        height=st.floats(min_value=10, max_value=50),
        scale=st.floats(min_value=0.5, max_value=4),
    )
    def test_projection_is_linear(
        self, x: float, y: float, width: float, height: float, scale: float
    ) -> None:
        """Doubling the frame doubles every projected coordinate."""
        rect = Rect(x=x, y=y, width=width, height=height)
        small = Frame(target=FrameTarget.PREVIEW, width=640, height=360)
        large = Frame(
            target=FrameTarget.PREVIEW, width=640 * scale, height=360 * scale
        )
        expected = [value * scale for value in project(rect, small).to_tuple()]
        assert project(rect, large).to_tuple() == pytest.approx(expected)

    def test_project_layout_skips_hidden_regions(self) -> None:
        frame = Frame.preview(Size(width=100, height=100))
        layout = SlideLayout(text_region=Rect.full_canvas(), placeholder=True)
        projected = project_layout(layout, frame)
        assert projected.text_region is not None
        assert projected.media_region is None
        assert projected.placeholder
        assert projected.frame == frame
