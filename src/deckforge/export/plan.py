"""Export plan: the deck laid out in export page units.

The external renderer owns the file format. What it consumes is built
here: an ordered list of pages (a title page, one section page per topic,
one content page per slide) whose boxes are the slides' percentage layouts
projected into the export frame.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from deckforge.document.models import Document, Slide, Topic
from deckforge.geometry.primitives import Rect
from deckforge.layout.defaults import resolve_layout
from deckforge.layout.projector import Frame, ProjectedRect, project
from deckforge.utils.logging import get_logger

logger = get_logger(__name__)

TITLE_RECT = Rect(x=5.0, y=40.0, width=90.0, height=30.0)
SUBTITLE_RECT = Rect(x=5.0, y=75.0, width=90.0, height=15.0)
SECTION_RECT = Rect(x=5.0, y=35.0, width=90.0, height=30.0)

SUBTITLE_TEXT = "Generated with deckforge"

# Font size hints, in points
TITLE_FONT_SIZE = 48
SUBTITLE_FONT_SIZE = 18
SECTION_FONT_SIZE = 36
SLIDE_TITLE_FONT_SIZE = 28
BODY_FONT_SIZE = 20
SPLIT_BODY_FONT_SIZE = 18


class TextBox(BaseModel, frozen=True):
    """A positioned block of text.

    Attributes:
        rect: Position in export units.
        heading: Optional heading line drawn at the top of the box.
        paragraphs: Body lines.
        bullets: Whether the body lines are rendered as a bullet list.
        font_size: Body font size hint, points.
        bold: Whether the box is rendered bold.
        placeholder: True if the box stands in for an empty slide.
    """

    rect: ProjectedRect
    heading: str | None = None
    paragraphs: list[str] = Field(default_factory=list)
    bullets: bool = False
    font_size: int = BODY_FONT_SIZE
    bold: bool = False
    placeholder: bool = False


class MediaItem(BaseModel, frozen=True):
    """One media asset, embedded as a data URI."""

    kind: Literal["image", "video"]
    mime_type: str
    data_uri: str
    name: str = ""


class MediaBox(BaseModel, frozen=True):
    """A positioned media region and the assets it shows."""

    rect: ProjectedRect
    items: list[MediaItem]


class ExportPage(BaseModel, frozen=True):
    """One page of the exported deck."""

    kind: Literal["title", "section", "content"]
    topic_id: str | None = None
    slide_id: str | None = None
    text_boxes: list[TextBox] = Field(default_factory=list)
    media: MediaBox | None = None
    speaker_notes: str | None = None


class ExportPlan(BaseModel, frozen=True):
    """The whole deck in export page units."""

    title: str
    frame: Frame
    pages: list[ExportPage]


def _media_items(slide: Slide) -> list[MediaItem]:
    if slide.video is not None:
        return [
            MediaItem(
                kind="video",
                mime_type=slide.video.mime_type,
                data_uri=slide.video.data_uri,
                name=slide.video.name,
            )
        ]
    return [
        MediaItem(kind="image", mime_type=image.mime_type, data_uri=image.data_uri)
        for image in slide.images
    ]


def build_title_page(title: str, frame: Frame) -> ExportPage:
    return ExportPage(
        kind="title",
        text_boxes=[
            TextBox(
                rect=project(TITLE_RECT, frame),
                paragraphs=[title],
                font_size=TITLE_FONT_SIZE,
                bold=True,
            ),
            TextBox(
                rect=project(SUBTITLE_RECT, frame),
                paragraphs=[SUBTITLE_TEXT],
                font_size=SUBTITLE_FONT_SIZE,
            ),
        ],
    )


def build_section_page(topic: Topic, frame: Frame) -> ExportPage:
    return ExportPage(
        kind="section",
        topic_id=topic.id,
        text_boxes=[
            TextBox(
                rect=project(SECTION_RECT, frame),
                paragraphs=[topic.title],
                font_size=SECTION_FONT_SIZE,
                bold=True,
            )
        ],
    )


def build_content_page(topic: Topic, slide: Slide, frame: Frame) -> ExportPage:
    """Lay out one slide: its effective regions projected into ``frame``."""
    layout = resolve_layout(slide)
    text_boxes: list[TextBox] = []
    if layout.text_region is not None:
        split = layout.media_region is not None
        text_boxes.append(
            TextBox(
                rect=project(layout.text_region, frame),
                heading=slide.title,
                paragraphs=list(slide.bullets),
                bullets=True,
                font_size=SPLIT_BODY_FONT_SIZE if split else BODY_FONT_SIZE,
                placeholder=layout.placeholder,
            )
        )

    media = None
    if layout.media_region is not None:
        media = MediaBox(
            rect=project(layout.media_region, frame), items=_media_items(slide)
        )

    return ExportPage(
        kind="content",
        topic_id=topic.id,
        slide_id=slide.id,
        text_boxes=text_boxes,
        media=media,
        speaker_notes=slide.speaker_notes,
    )


def build_export_plan(document: Document, frame: Frame | None = None) -> ExportPlan:
    """Lay out a whole document for export.

    Args:
        document: The deck to export.
        frame: Export frame; defaults to the configured export page.

    Returns:
        The title page, then per topic a section page followed by one
        content page per slide, in document order.
    """
    frame = frame or Frame.export()
    pages = [build_title_page(document.title, frame)]
    for topic in document.topics:
        pages.append(build_section_page(topic, frame))
        pages.extend(build_content_page(topic, slide, frame) for slide in topic.slides)

    logger.debug("Export plan built", pages=len(pages), frame=frame.target.value)
    return ExportPlan(title=document.title, frame=frame, pages=pages)
