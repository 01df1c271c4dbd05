"""Structured-output schemas for generation responses.

The backend is asked for JSON matching these schemas; the parsed payloads
are then mapped onto document models with fresh ids.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, Field

from deckforge.document.models import Slide, Topic

_LIST_MARKER_RE = re.compile(r"^\s*[-*•]\s*")


class OutlineSlide(BaseModel):
    title: str = Field(..., min_length=1)


class OutlineTopic(BaseModel):
    title: str = Field(..., min_length=1)
    slides: list[OutlineSlide] = Field(default_factory=list)


class OutlinePayload(BaseModel):
    """Generated outline: topics with slide titles."""

    topics: list[OutlineTopic]

    def to_topics(self) -> list[Topic]:
        """Map to document topics; every topic and slide gets a fresh id."""
        return [
            Topic(
                title=topic.title,
                slides=[Slide(title=slide.title) for slide in topic.slides],
            )
            for topic in self.topics
        ]


class BulletsPayload(BaseModel):
    """Generated bullet points for one slide."""

    bullets: list[str]

    def cleaned(self) -> list[str]:
        """Strip leading list markers and drop empty bullets."""
        cleaned = [_LIST_MARKER_RE.sub("", bullet).strip() for bullet in self.bullets]
        return [bullet for bullet in cleaned if bullet]


def outline_json_schema() -> dict[str, Any]:
    """Strict JSON schema for ``OutlinePayload``."""
    slide = {
        "type": "object",
        "properties": {"title": {"type": "string"}},
        "required": ["title"],
        "additionalProperties": False,
    }
    topic = {
        "type": "object",
        "properties": {
            "title": {"type": "string"},
            "slides": {"type": "array", "items": slide},
        },
        "required": ["title", "slides"],
        "additionalProperties": False,
    }
    return {
        "type": "object",
        "properties": {"topics": {"type": "array", "items": topic}},
        "required": ["topics"],
        "additionalProperties": False,
    }


def bullets_json_schema() -> dict[str, Any]:
    """Strict JSON schema for ``BulletsPayload``."""
    return {
        "type": "object",
        "properties": {
            "bullets": {"type": "array", "items": {"type": "string"}},
        },
        "required": ["bullets"],
        "additionalProperties": False,
    }
