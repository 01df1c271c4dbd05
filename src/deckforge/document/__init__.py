"""Document model for deckforge.

This package owns the topic/slide tree and the current selection.

Public API:
    - Models: Document, Topic, Slide, ImageContent, VideoContent, Selection
    - Patches: TopicPatch, SlidePatch, LayoutPatch and their merge functions
    - DocumentStore: the mutation surface that keeps the selection valid
"""

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
    new_slide_id,
    new_topic_id,
)
from deckforge.document.store import DocumentStore, first_selection

__all__ = [
    "Document",
    "DocumentStore",
    "ImageContent",
    "LayoutPatch",
    "Selection",
    "Slide",
    "SlidePatch",
    "Topic",
    "TopicPatch",
    "VideoContent",
    "first_selection",
    "merge_layout",
    "merge_slide",
    "merge_topic",
    "new_slide_id",
    "new_topic_id",
]
