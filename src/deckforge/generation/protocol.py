"""Generation service protocol and data models for deckforge.

The document model never calls a generation backend itself. An editing
session asks a ``GenerationService`` for an outline, bullets, an image or
speaker notes, and only writes the result into the document once the call
has fully succeeded.
"""

from __future__ import annotations

from typing import Literal, Protocol

from pydantic import BaseModel, Field

from deckforge.document.models import ImageContent, Topic

# =============================================================================
# Input Models
# =============================================================================


class Reference(BaseModel):
    """Reference material that informs outline generation.

    Attributes:
        kind: Where the material came from.
        name: File name or URL, shown to the model as a label.
        content: Extracted text content.
    """

    kind: Literal["file", "url"] = "file"
    name: str = Field(..., min_length=1)
    content: str = ""


# =============================================================================
# Generation Service Protocol
# =============================================================================


class GenerationService(Protocol):
    """Protocol for content generation backends.

    Implementations raise ``GenerationAuthError`` for credential problems,
    ``GenerationParseError`` for malformed responses and ``GenerationError``
    for any other failure.
    """

    async def generate_outline(
        self, prompt: str, references: list[Reference]
    ) -> list[Topic]:
        """Generate an outline of topics, each with titled, empty slides.

        Every returned topic and slide carries a fresh id.
        """
        ...

    async def generate_bullets(self, slide_title: str, deck_title: str) -> list[str]:
        """Draft bullet points for one slide."""
        ...

    async def generate_image(self, prompt: str) -> ImageContent:
        """Generate one image from a text prompt."""
        ...

    async def generate_notes(
        self, slide_title: str, bullets: list[str], deck_title: str
    ) -> str:
        """Write speaker notes for one slide."""
        ...

    def get_model_name(self) -> str:
        """Get the model identifier being used."""
        ...


# =============================================================================
# Exceptions
# =============================================================================


class GenerationError(Exception):
    """Base exception for generation failures.

    Raised when a call fails after retries or the backend returns an
    unusable result.
    """

    def __init__(
        self,
        message: str,
        *,
        provider: str | None = None,
        model: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        """Initialize generation error.

        Args:
            message: Human-readable error description.
            provider: Provider name (e.g., "openai").
            model: Model identifier if known.
            cause: Original exception that caused this error.
        """
        self.provider = provider
        self.model = model
        self.cause = cause
        super().__init__(message)


class GenerationAuthError(GenerationError):
    """Raised when the backend rejects or lacks credentials."""


class GenerationParseError(GenerationError):
    """Raised when a response cannot be parsed into the expected shape."""

    def __init__(
        self,
        message: str,
        *,
        raw_output: str | None = None,
        provider: str | None = None,
        model: str | None = None,
    ) -> None:
        """Initialize parse error.

        Args:
            message: Description of the parsing failure.
            raw_output: The raw output that failed to parse.
            provider: Provider name.
            model: Model identifier.
        """
        self.raw_output = raw_output
        super().__init__(message, provider=provider, model=model)
