"""Tests for deckforge.document.models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

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
from deckforge.geometry import Rect

PNG = ImageContent(data="aGVsbG8=", mime_type="image/png")
CLIP = VideoContent(data="dmlkZW8=", mime_type="video/mp4", name="clip.mp4")


class TestIds:
    """Tests for id generation."""

    def test_ids_are_prefixed(self) -> None:
        assert new_topic_id().startswith("topic-")
        assert new_slide_id().startswith("slide-")

    def test_ids_are_unique(self) -> None:
        ids = {new_slide_id() for _ in range(1000)}
        assert len(ids) == 1000

    def test_default_ids_assigned(self) -> None:
        assert Slide().id != Slide().id
        assert Topic().id != Topic().id


class TestSlide:
    """Tests for the Slide model."""

    def test_defaults(self) -> None:
        slide = Slide(title="Intro")
        assert slide.bullets == []
        assert slide.images == []
        assert slide.video is None
        assert slide.text_region is None
        assert slide.media_region is None
        assert slide.speaker_notes is None

    def test_rejects_images_and_video(self) -> None:
        with pytest.raises(ValidationError, match="both images and a video"):
            Slide(images=[PNG], video=CLIP)

    def test_has_text(self) -> None:
        assert Slide(title="Hi").has_text
        assert Slide(bullets=["point"]).has_text
        assert not Slide(title="  ", bullets=["", " "]).has_text

    def test_has_media(self) -> None:
        assert Slide(images=[PNG]).has_media
        assert Slide(video=CLIP).has_media
        assert not Slide().has_media

    def test_data_uri(self) -> None:
        assert PNG.data_uri == "data:image/png;base64,aGVsbG8="
        assert CLIP.data_uri == "data:video/mp4;base64,dmlkZW8="

    def test_json_round_trip_keeps_layout(self) -> None:
        slide = Slide(
            title="A",
            text_region=Rect(x=3, y=5, width=45, height=90),
            speaker_notes="Say hello",
        )
        restored = Slide.model_validate_json(slide.model_dump_json())
        assert restored == slide


class TestDocument:
    """Tests for Document and Selection."""

    def test_iter_slides_in_order(self, sample_document: Document) -> None:
        ids = [slide.id for _, slide in sample_document.iter_slides()]
        assert ids == ["s1", "s2", "s3", "s4"]

    def test_empty_selection(self) -> None:
        assert Selection.empty().is_empty
        assert not Selection(topic_id="t1", slide_id="s1").is_empty


class TestMerges:
    """Tests for patch merge functions."""

    def test_merge_topic_title(self) -> None:
        topic = Topic(id="t1", title="Old")
        merged = merge_topic(topic, TopicPatch(title="New"))
        assert merged.title == "New"
        assert merged.id == "t1"

    def test_merge_topic_empty_patch(self) -> None:
        topic = Topic(id="t1", title="Old")
        assert merge_topic(topic, TopicPatch()) == topic

    def test_merge_slide_only_set_fields(self) -> None:
        slide = Slide(id="s1", title="Old", bullets=["a"], speaker_notes="n")
        merged = merge_slide(slide, SlidePatch(bullets=["b", "c"]))
        assert merged.title == "Old"
        assert merged.bullets == ["b", "c"]
        assert merged.speaker_notes == "n"

    def test_merge_slide_allows_empty_strings(self) -> None:
        slide = Slide(id="s1", title="Old", bullets=["a"])
        merged = merge_slide(slide, SlidePatch(title="", bullets=[]))
        assert merged.title == ""
        assert merged.bullets == []

    def test_merge_layout_leaves_omitted_region(self) -> None:
        text = Rect(x=0, y=0, width=50, height=50)
        media = Rect(x=50, y=50, width=50, height=50)
        slide = Slide(id="s1", text_region=text)
        merged = merge_layout(slide, LayoutPatch(media_region=media))
        assert merged.text_region == text
        assert merged.media_region == media
