"""Coordinate projection from percentage space to absolute frames.

A Rect lives in percentage space. Rendering it needs absolute units: pixels
for the live preview, page units (inches) for export. Projection is a pure
linear scaling with no clamping and no minimum size: the source Rect is
already valid, and the projector does not re-validate it.
"""

from __future__ import annotations

from enum import Enum
from typing import Self

from pydantic import BaseModel, Field

from deckforge.config import Settings, settings
from deckforge.geometry.primitives import CANVAS_EXTENT, Rect, Size
from deckforge.layout.defaults import SlideLayout


class FrameTarget(str, Enum):
    """Named projection targets."""

    PREVIEW = "preview"  # Pixels of the on-screen canvas
    EXPORT = "export"  # Page units of the exported file


class Frame(BaseModel, frozen=True):
    """An absolute target frame for projection."""

    target: FrameTarget
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)

    @property
    def size(self) -> Size:
        return Size(width=self.width, height=self.height)

    @classmethod
    def preview(cls, container: Size) -> Self:
        """Frame for the on-screen canvas of the given pixel size."""
        return cls(
            target=FrameTarget.PREVIEW,
            width=container.width,
            height=container.height,
        )

    @classmethod
    def export(cls, config: Settings | None = None) -> Self:
        """Frame for the export page configured in settings."""
        config = config or settings
        return cls(
            target=FrameTarget.EXPORT,
            width=config.EXPORT_PAGE_WIDTH,
            height=config.EXPORT_PAGE_HEIGHT,
        )


class ProjectedRect(BaseModel, frozen=True):
    """A rectangle in a frame's absolute units."""

    target: FrameTarget
    x: float
    y: float
    width: float
    height: float

    def to_tuple(self) -> tuple[float, float, float, float]:
        """Convert to (x, y, width, height) tuple."""
        return (self.x, self.y, self.width, self.height)


class ProjectedLayout(BaseModel, frozen=True):
    """A slide layout projected into one frame."""

    frame: Frame
    text_region: ProjectedRect | None = None
    media_region: ProjectedRect | None = None
    placeholder: bool = False


def project(rect: Rect, frame: Frame) -> ProjectedRect:
    """Scale a percentage Rect into ``frame``.

    Args:
        rect: Rect in percentage space.
        frame: Target frame.

    Returns:
        The rect in the frame's absolute units.

    Example:
        >>> frame = Frame(target=FrameTarget.EXPORT, width=10.0, height=5.0)
        >>> project(Rect(x=50, y=20, width=25, height=40), frame).to_tuple()
        (5.0, 1.0, 2.5, 2.0)
    """
    return ProjectedRect(
        target=frame.target,
        x=rect.x / CANVAS_EXTENT * frame.width,
        y=rect.y / CANVAS_EXTENT * frame.height,
        width=rect.width / CANVAS_EXTENT * frame.width,
        height=rect.height / CANVAS_EXTENT * frame.height,
    )


def project_layout(layout: SlideLayout, frame: Frame) -> ProjectedLayout:
    """Project every region of ``layout`` into ``frame``."""
    return ProjectedLayout(
        frame=frame,
        text_region=(
            project(layout.text_region, frame)
            if layout.text_region is not None
            else None
        ),
        media_region=(
            project(layout.media_region, frame)
            if layout.media_region is not None
            else None
        ),
        placeholder=layout.placeholder,
    )
