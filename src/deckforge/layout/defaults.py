"""Default slide layouts.

A slide that has never been dragged or resized has no explicit regions.
Its layout is computed from its content instead, and only written back to
the slide when a gesture first commits a region.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from deckforge.document.models import Slide
from deckforge.geometry.primitives import Rect

FULL_CANVAS = Rect(x=0.0, y=0.0, width=100.0, height=100.0)

# Side-by-side split: two 45% columns with a gutter between them.
SPLIT_TEXT = Rect(x=3.0, y=5.0, width=45.0, height=90.0)
SPLIT_MEDIA = Rect(x=52.0, y=5.0, width=45.0, height=90.0)


class RegionKind(str, Enum):
    """The independently positioned regions of a slide."""

    TEXT = "text"
    MEDIA = "media"


class SlideLayout(BaseModel, frozen=True):
    """The regions a slide displays.

    Attributes:
        text_region: Where the title and bullets go, if shown.
        media_region: Where the images or video go, if shown.
        placeholder: True when the slide is empty and the text region only
            holds placeholder text.
    """

    text_region: Rect | None = None
    media_region: Rect | None = None
    placeholder: bool = False

    def region(self, kind: RegionKind) -> Rect | None:
        if kind is RegionKind.TEXT:
            return self.text_region
        return self.media_region


def default_layout(slide: Slide) -> SlideLayout:
    """Compute the layout a slide gets from its content alone.

    - text and media: side-by-side split
    - text only: one full-canvas text region
    - media only: one full-canvas media region
    - neither: one full-canvas placeholder text region
    """
    has_text = slide.has_text
    has_media = slide.has_media
    if has_text and has_media:
        return SlideLayout(text_region=SPLIT_TEXT, media_region=SPLIT_MEDIA)
    if has_media:
        return SlideLayout(media_region=FULL_CANVAS)
    if has_text:
        return SlideLayout(text_region=FULL_CANVAS)
    return SlideLayout(text_region=FULL_CANVAS, placeholder=True)


def resolve_layout(slide: Slide) -> SlideLayout:
    """Return the layout to render: explicit regions over the defaults.

    Which regions are shown is decided by the slide's content; an explicit
    rect only overrides where a shown region sits.
    """
    default = default_layout(slide)
    text_region = default.text_region
    media_region = default.media_region
    if text_region is not None and slide.text_region is not None:
        text_region = slide.text_region
    if media_region is not None and slide.media_region is not None:
        media_region = slide.media_region
    return SlideLayout(
        text_region=text_region,
        media_region=media_region,
        placeholder=default.placeholder,
    )
