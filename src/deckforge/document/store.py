"""Document store: the topic/slide tree plus the current selection.

``DocumentStore`` is the single owner of a deck. It is constructed once per
editing session and passed explicitly to whatever needs it.

Every mutation is synchronous and total: an operation addressed to an id
that no longer exists finds nothing to update and returns without raising.
After every structural mutation the selection is recomputed so that it is
either empty or points at an existing topic/slide pair. A topic with no
slides is never selected.
"""

from __future__ import annotations

from collections.abc import Callable

from deckforge.document.models import (
    Document,
    ImageContent,
    LayoutPatch,
    Selection,
    Slide,
    SlidePatch,
    Topic,
    TopicPatch,
    VideoContent,
    merge_layout,
    merge_slide,
    merge_topic,
)
from deckforge.config import settings
from deckforge.geometry.primitives import Rect
from deckforge.geometry.validators import RectValidator
from deckforge.utils.logging import get_logger

logger = get_logger(__name__)


def first_selection(topics: list[Topic]) -> Selection:
    """Select the first slide in document order, or nothing.

    Topics without slides are skipped.
    """
    for topic in topics:
        if topic.slides:
            return Selection(topic_id=topic.id, slide_id=topic.slides[0].id)
    return Selection.empty()


class DocumentStore:
    """Owns a Document and its Selection and exposes their mutations.

    Usage:
        store = DocumentStore()
        store.set_document([Topic(title="Intro", slides=[Slide(title="Hi")])])
        topic_id = store.document.topics[0].id
        slide_id = store.add_slide(topic_id, "Agenda")
        store.update_slide_content(slide_id, ["First", "Second"])
    """

    def __init__(
        self,
        document: Document | None = None,
        *,
        min_region_size: float | None = None,
    ) -> None:
        self._document = document or Document()
        self.min_region_size = (
            settings.MIN_REGION_SIZE if min_region_size is None else min_region_size
        )
        self._validator = RectValidator()
        self._selection = first_selection(self._document.topics)

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def document(self) -> Document:
        return self._document

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def title(self) -> str:
        return self._document.title

    @property
    def topics(self) -> list[Topic]:
        return self._document.topics

    def find_topic(self, topic_id: str) -> Topic | None:
        """Return the topic with ``topic_id``, or None."""
        for topic in self._document.topics:
            if topic.id == topic_id:
                return topic
        return None

    def find_slide(self, slide_id: str) -> Slide | None:
        """Return the slide with ``slide_id`` from any topic, or None."""
        for topic in self._document.topics:
            for slide in topic.slides:
                if slide.id == slide_id:
                    return slide
        return None

    def current_topic(self) -> Topic | None:
        if self._selection.topic_id is None:
            return None
        return self.find_topic(self._selection.topic_id)

    def current_slide(self) -> Slide | None:
        if self._selection.slide_id is None:
            return None
        return self.find_slide(self._selection.slide_id)

    def selection_is_valid(self) -> bool:
        """Check the selection invariant against the current tree."""
        selection = self._selection
        if selection.is_empty:
            return True
        if selection.topic_id is None or selection.slide_id is None:
            return False
        topic = self.find_topic(selection.topic_id)
        if topic is None:
            return False
        return any(slide.id == selection.slide_id for slide in topic.slides)

    # -------------------------------------------------------------------------
    # Whole-document operations
    # -------------------------------------------------------------------------

    def set_document(self, topics: list[Topic], *, title: str | None = None) -> None:
        """Replace the whole tree and select its first slide.

        Args:
            topics: The new topics, in order.
            title: New document title. None keeps the current title.
        """
        self._document = Document(
            title=self._document.title if title is None else title,
            topics=[topic.model_copy(deep=True) for topic in topics],
        )
        self._selection = first_selection(self._document.topics)
        logger.debug(
            "Document replaced",
            topics=len(self._document.topics),
            selected_slide=self._selection.slide_id,
        )

    def load_project(self, document: Document) -> None:
        """Replace the document with a loaded project, title included."""
        self.set_document(document.topics, title=document.title)

    def reset(self) -> None:
        """Clear the document back to an empty, untitled deck."""
        self._document = Document()
        self._selection = Selection.empty()
        logger.debug("Document reset")

    def set_title(self, title: str) -> None:
        self._document.title = title

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def select_slide(self, topic_id: str, slide_id: str) -> None:
        """Set the selection directly.

        No existence check is made: callers pass ids read from the tree.
        """
        self._selection = Selection(topic_id=topic_id, slide_id=slide_id)

    # -------------------------------------------------------------------------
    # Topics
    # -------------------------------------------------------------------------

    def add_topic(self, title: str) -> str:
        """Append an empty topic. The selection is unchanged.

        Returns:
            The new topic's id.
        """
        topic = Topic(title=title)
        self._document.topics.append(topic)
        logger.debug("Topic added", topic_id=topic.id)
        return topic.id

    def delete_topic(self, topic_id: str) -> None:
        """Remove a topic and its slides.

        If it held the selection, the first slide of the remaining topics
        becomes selected, or the selection is cleared.
        """
        remaining = [t for t in self._document.topics if t.id != topic_id]
        if len(remaining) == len(self._document.topics):
            logger.debug("Delete of unknown topic ignored", topic_id=topic_id)
            return

        self._document.topics = remaining
        if self._selection.topic_id == topic_id:
            self._selection = first_selection(remaining)
        logger.debug(
            "Topic deleted",
            topic_id=topic_id,
            selected_slide=self._selection.slide_id,
        )

    def update_topic_title(self, topic_id: str, title: str) -> None:
        self._update_topic(topic_id, TopicPatch(title=title))

    def _update_topic(self, topic_id: str, patch: TopicPatch) -> None:
        topics = self._document.topics
        for index, topic in enumerate(topics):
            if topic.id == topic_id:
                topics[index] = merge_topic(topic, patch)
                return
        logger.debug("Update of unknown topic ignored", topic_id=topic_id)

    # -------------------------------------------------------------------------
    # Slides
    # -------------------------------------------------------------------------

    def add_slide(self, topic_id: str, title: str) -> str | None:
        """Append a slide with no bullets and make it the selection.

        Returns:
            The new slide's id, or None if the topic does not exist.
        """
        topic = self.find_topic(topic_id)
        if topic is None:
            logger.debug("Add slide to unknown topic ignored", topic_id=topic_id)
            return None

        slide = Slide(title=title)
        topic.slides.append(slide)
        self._selection = Selection(topic_id=topic.id, slide_id=slide.id)
        logger.debug("Slide added", topic_id=topic.id, slide_id=slide.id)
        return slide.id

    def delete_slide(self, topic_id: str, slide_id: str) -> None:
        """Remove a slide from its topic.

        If the slide was selected, the previous sibling (or the new first
        slide) of the same topic is selected; when the topic is left empty,
        the first slide of the document is selected instead, or the
        selection is cleared.
        """
        topic = self.find_topic(topic_id)
        if topic is None:
            logger.debug("Delete slide from unknown topic ignored", topic_id=topic_id)
            return

        index = next(
            (i for i, slide in enumerate(topic.slides) if slide.id == slide_id), None
        )
        if index is None:
            logger.debug("Delete of unknown slide ignored", slide_id=slide_id)
            return

        del topic.slides[index]
        if self._selection.slide_id == slide_id:
            if topic.slides:
                sibling = topic.slides[max(0, index - 1)]
                self._selection = Selection(topic_id=topic.id, slide_id=sibling.id)
            else:
                self._selection = first_selection(self._document.topics)
        logger.debug(
            "Slide deleted",
            topic_id=topic_id,
            slide_id=slide_id,
            selected_slide=self._selection.slide_id,
        )

    def update_slide_title(self, slide_id: str, title: str) -> None:
        self._patch_slide(slide_id, lambda s: merge_slide(s, SlidePatch(title=title)))

    def update_slide_content(self, slide_id: str, bullets: list[str]) -> None:
        self._patch_slide(
            slide_id, lambda s: merge_slide(s, SlidePatch(bullets=bullets))
        )

    def set_speaker_notes(self, slide_id: str, notes: str) -> None:
        self._patch_slide(
            slide_id, lambda s: merge_slide(s, SlidePatch(speaker_notes=notes))
        )

    def add_bullet(self, slide_id: str, text: str = "") -> None:
        self._patch_slide(
            slide_id,
            lambda s: merge_slide(s, SlidePatch(bullets=[*s.bullets, text])),
        )

    def update_bullet(self, slide_id: str, index: int, text: str) -> None:
        def _apply(slide: Slide) -> Slide:
            if not 0 <= index < len(slide.bullets):
                return slide
            bullets = list(slide.bullets)
            bullets[index] = text
            return merge_slide(slide, SlidePatch(bullets=bullets))

        self._patch_slide(slide_id, _apply)

    def remove_bullet(self, slide_id: str, index: int) -> None:
        def _apply(slide: Slide) -> Slide:
            if not 0 <= index < len(slide.bullets):
                return slide
            bullets = [b for i, b in enumerate(slide.bullets) if i != index]
            return merge_slide(slide, SlidePatch(bullets=bullets))

        self._patch_slide(slide_id, _apply)

    # -------------------------------------------------------------------------
    # Media
    # -------------------------------------------------------------------------

    def add_image(self, slide_id: str, image: ImageContent) -> None:
        """Append an image; any video on the slide is removed."""
        self._patch_slide(
            slide_id,
            lambda s: s.model_copy(
                update={"images": [*s.images, image], "video": None}
            ),
        )

    def update_image(self, slide_id: str, index: int, image: ImageContent) -> None:
        """Replace the image at ``index``. Out-of-range indices are ignored."""

        def _apply(slide: Slide) -> Slide:
            if not 0 <= index < len(slide.images):
                return slide
            images = list(slide.images)
            images[index] = image
            return slide.model_copy(update={"images": images})

        self._patch_slide(slide_id, _apply)

    def delete_image(self, slide_id: str, index: int) -> None:
        """Remove the image at ``index``. Out-of-range indices are ignored."""

        def _apply(slide: Slide) -> Slide:
            if not 0 <= index < len(slide.images):
                return slide
            images = [img for i, img in enumerate(slide.images) if i != index]
            return slide.model_copy(update={"images": images})

        self._patch_slide(slide_id, _apply)

    def set_video(self, slide_id: str, video: VideoContent) -> None:
        """Attach a video; any images on the slide are removed."""
        self._patch_slide(
            slide_id, lambda s: s.model_copy(update={"video": video, "images": []})
        )

    def delete_video(self, slide_id: str) -> None:
        self._patch_slide(slide_id, lambda s: s.model_copy(update={"video": None}))

    # -------------------------------------------------------------------------
    # Layout
    # -------------------------------------------------------------------------

    def update_layout(
        self,
        slide_id: str,
        *,
        text_region: Rect | None = None,
        media_region: Rect | None = None,
    ) -> None:
        """Write the supplied region(s); an omitted region is left as is.

        Regions below ``min_region_size`` are grown to it before they are
        stored.
        """
        patch = LayoutPatch(
            text_region=self._enforce_min_size(slide_id, text_region),
            media_region=self._enforce_min_size(slide_id, media_region),
        )
        self._patch_slide(slide_id, lambda s: merge_layout(s, patch))

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _enforce_min_size(self, slide_id: str, rect: Rect | None) -> Rect | None:
        if rect is None or self._validator.is_valid(
            rect, min_size=self.min_region_size
        ):
            return rect
        repaired = self._validator.clamp_rect(rect, min_size=self.min_region_size)
        logger.warning(
            "Undersized region grown to minimum",
            slide_id=slide_id,
            rect=rect.to_tuple(),
            repaired=repaired.to_tuple(),
        )
        return repaired

    def _patch_slide(self, slide_id: str, apply: Callable[[Slide], Slide]) -> None:
        for topic in self._document.topics:
            for index, slide in enumerate(topic.slides):
                if slide.id == slide_id:
                    topic.slides[index] = apply(slide)
                    return
        logger.debug("Update of unknown slide ignored", slide_id=slide_id)
