"""Content generation for deckforge.

This package provides the abstraction over generation backends that draft
outlines, bullets, images and speaker notes. The document model only ever
receives their finished results.

Public API:
    - Protocol & Data Models: GenerationService, Reference
    - Providers: OpenAIGenerationService
    - Factory: create_generation_service()
    - Exceptions: GenerationError, GenerationAuthError, GenerationParseError
"""

from deckforge.config import Settings, settings
from deckforge.generation.openai_client import OpenAIGenerationService
from deckforge.generation.protocol import (
    GenerationAuthError,
    GenerationError,
    GenerationParseError,
    GenerationService,
    Reference,
)

__all__ = [
    "GenerationAuthError",
    "GenerationError",
    "GenerationParseError",
    "GenerationService",
    "OpenAIGenerationService",
    "Reference",
    "create_generation_service",
]


def create_generation_service(
    provider: str,
    *,
    model: str | None = None,
    config: Settings | None = None,
) -> GenerationService:
    """Factory function to create generation services.

    Args:
        provider: Provider name (only "openai" is supported).
        model: Optional text model override; defaults to settings.OPENAI_MODEL.
        config: Optional settings override.

    Returns:
        A GenerationService instance.

    Raises:
        ValueError: If provider is unknown.
        GenerationAuthError: If the provider's API key is not configured.
    """
    if provider == "openai":
        config = config or settings
        return OpenAIGenerationService(
            model=model or config.OPENAI_MODEL,
            image_model=config.OPENAI_IMAGE_MODEL,
            settings=config,
        )
    raise ValueError(f"Unknown provider: {provider}. Supported providers: 'openai'")
