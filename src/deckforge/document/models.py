"""Document models for deckforge.

Data models for the topic/slide tree. Topics and slides are created with a
fresh id, mutated in place through ``DocumentStore`` without changing
identity, and serialized with Pydantic for the project repository.

Partial updates go through explicit patch models and merge functions, so
every mutable field of a slide or topic is enumerated once, here.
"""

from __future__ import annotations

import uuid
from typing import Self

from pydantic import BaseModel, Field, model_validator

from deckforge.geometry.primitives import Rect


def new_topic_id() -> str:
    """Generate a collision-resistant topic id."""
    return f"topic-{uuid.uuid4().hex}"


def new_slide_id() -> str:
    """Generate a collision-resistant slide id."""
    return f"slide-{uuid.uuid4().hex}"


class ImageContent(BaseModel):
    """A still image attached to a slide.

    Attributes:
        data: Base64-encoded image bytes.
        mime_type: MIME type of ``data`` (e.g. ``image/png``).
        prompt: Prompt the image was generated from (empty for uploads).
        original_data: Base64 bytes of the unedited image, kept so the
            external pixel editor can re-edit from the original.
    """

    data: str = Field(..., min_length=1, description="Base64-encoded image")
    mime_type: str = Field(..., min_length=1)
    prompt: str = ""
    original_data: str | None = None

    @property
    def data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


class VideoContent(BaseModel):
    """A video clip attached to a slide."""

    data: str = Field(..., min_length=1, description="Base64-encoded video")
    mime_type: str = Field(..., min_length=1)
    name: str = ""

    @property
    def data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


class Slide(BaseModel):
    """The unit of content: title, bullets, optional media, notes and layout.

    A slide carries either an image set or a video, never both.

    Attributes:
        id: Unique, immutable identifier.
        title: Slide title.
        bullets: Ordered bullet points.
        images: Ordered image set (empty when the slide has no images).
        video: Optional video clip.
        text_region: Explicit position of the text region, if the user has
            moved or resized it.
        media_region: Explicit position of the media region.
        speaker_notes: Optional notes for the presenter.
    """

    id: str = Field(default_factory=new_slide_id)
    title: str = ""
    bullets: list[str] = Field(default_factory=list)
    images: list[ImageContent] = Field(default_factory=list)
    video: VideoContent | None = None
    text_region: Rect | None = None
    media_region: Rect | None = None
    speaker_notes: str | None = None

    @model_validator(mode="after")
    def _validate_media_exclusive(self) -> Self:
        if self.images and self.video is not None:
            raise ValueError("A slide cannot carry both images and a video")
        return self

    @property
    def has_text(self) -> bool:
        return bool(self.title.strip()) or any(b.strip() for b in self.bullets)

    @property
    def has_media(self) -> bool:
        return bool(self.images) or self.video is not None


class Topic(BaseModel):
    """A top-level grouping of slides, displayed and exported in order."""

    id: str = Field(default_factory=new_topic_id)
    title: str = ""
    slides: list[Slide] = Field(default_factory=list)


class Document(BaseModel):
    """A whole deck: a title and its ordered topics."""

    title: str = ""
    topics: list[Topic] = Field(default_factory=list)

    def iter_slides(self) -> list[tuple[Topic, Slide]]:
        """Return every (topic, slide) pair in document order."""
        return [(topic, slide) for topic in self.topics for slide in topic.slides]


class Selection(BaseModel, frozen=True):
    """The current editing target.

    Either both ids are None, or both reference an existing topic/slide
    pair with the slide a member of that topic.
    """

    topic_id: str | None = None
    slide_id: str | None = None

    @classmethod
    def empty(cls) -> Self:
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.topic_id is None and self.slide_id is None


# =============================================================================
# Patches
# =============================================================================


class TopicPatch(BaseModel, frozen=True):
    """Optional topic fields to overwrite. None means "leave unchanged"."""

    title: str | None = None


class SlidePatch(BaseModel, frozen=True):
    """Optional slide text fields to overwrite. None means "leave unchanged"."""

    title: str | None = None
    bullets: list[str] | None = None
    speaker_notes: str | None = None


class LayoutPatch(BaseModel, frozen=True):
    """Region rects to write. An omitted region is left untouched."""

    text_region: Rect | None = None
    media_region: Rect | None = None


def merge_topic(topic: Topic, patch: TopicPatch) -> Topic:
    """Return ``topic`` with the fields set in ``patch`` overwritten."""
    update: dict[str, object] = {}
    if patch.title is not None:
        update["title"] = patch.title
    return topic.model_copy(update=update)


def merge_slide(slide: Slide, patch: SlidePatch) -> Slide:
    """Return ``slide`` with the text fields set in ``patch`` overwritten."""
    update: dict[str, object] = {}
    if patch.title is not None:
        update["title"] = patch.title
    if patch.bullets is not None:
        update["bullets"] = list(patch.bullets)
    if patch.speaker_notes is not None:
        update["speaker_notes"] = patch.speaker_notes
    return slide.model_copy(update=update)


def merge_layout(slide: Slide, patch: LayoutPatch) -> Slide:
    """Return ``slide`` with the regions supplied in ``patch`` written."""
    update: dict[str, object] = {}
    if patch.text_region is not None:
        update["text_region"] = patch.text_region
    if patch.media_region is not None:
        update["media_region"] = patch.media_region
    return slide.model_copy(update=update)
