"""OpenAI generation service for deckforge.

Implements the GenerationService protocol on the OpenAI Responses API
(structured JSON output for outlines and bullets, plain text for notes) and
the Images API.

- Rate limiting via aiolimiter
- Retry on rate-limit and connection errors via tenacity
- Authentication failures surface as GenerationAuthError
- Malformed output surfaces as GenerationParseError
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from aiolimiter import AsyncLimiter
from openai import APIConnectionError, AsyncOpenAI, AuthenticationError, RateLimitError
from pydantic import BaseModel, ValidationError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)

from deckforge.config import ConfigError, Settings, settings
from deckforge.document.models import ImageContent, Topic
from deckforge.generation.protocol import (
    GenerationAuthError,
    GenerationError,
    GenerationParseError,
    Reference,
)
from deckforge.generation.schemas import (
    BulletsPayload,
    OutlinePayload,
    bullets_json_schema,
    outline_json_schema,
)
from deckforge.generation.templates import (
    build_bullets_prompt,
    build_notes_prompt,
    build_outline_prompt,
)

logger = logging.getLogger(__name__)

_PROVIDER = "openai"
_IMAGE_MIME_TYPE = "image/png"

PayloadT = TypeVar("PayloadT", bound=BaseModel)
ResultT = TypeVar("ResultT")


def _parse_json_payload(
    output_text: str | None, payload_type: type[PayloadT], *, model: str
) -> PayloadT:
    """Parse structured output, tolerating trailing text after the JSON."""
    if output_text is None or not output_text.strip():
        raise GenerationParseError(
            "No output text in response", provider=_PROVIDER, model=model
        )
    try:
        decoder = json.JSONDecoder()
        leading_ws = len(output_text) - len(output_text.lstrip())
        raw_data, end_idx = decoder.raw_decode(output_text, idx=leading_ws)
        if end_idx < len(output_text.rstrip()):
            logger.debug(
                "Ignored trailing text after JSON: %s",
                output_text[end_idx:].strip()[:50],
            )
        return payload_type.model_validate(raw_data)
    except json.JSONDecodeError as e:
        raise GenerationParseError(
            f"Failed to parse JSON: {e}",
            raw_output=output_text,
            provider=_PROVIDER,
            model=model,
        ) from e
    except ValidationError as e:
        raise GenerationParseError(
            f"Failed to parse {payload_type.__name__}: {e}",
            raw_output=output_text,
            provider=_PROVIDER,
            model=model,
        ) from e


@dataclass
class OpenAIGenerationService:
    """OpenAI-backed generation service.

    Usage:
        service = OpenAIGenerationService()
        topics = await service.generate_outline("Solar power", references=[])
    """

    model: str = field(default_factory=lambda: settings.OPENAI_MODEL)
    image_model: str = field(default_factory=lambda: settings.OPENAI_IMAGE_MODEL)
    settings: Settings = field(default_factory=lambda: settings)

    _client: AsyncOpenAI = field(init=False, repr=False)
    _limiter: AsyncLimiter = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Initialize the OpenAI client and rate limiter."""
        try:
            api_key = self.settings.require_openai_key()
        except ConfigError as e:
            raise GenerationAuthError(
                str(e), provider=_PROVIDER, model=self.model, cause=e
            ) from e
        self._client = AsyncOpenAI(api_key=api_key)
        self._limiter = AsyncLimiter(
            max_rate=self.settings.OPENAI_RPM,
            time_period=60,
        )

    def get_model_name(self) -> str:
        """Get the model identifier."""
        return self.model

    async def generate_outline(
        self, prompt: str, references: list[Reference]
    ) -> list[Topic]:
        """Generate an outline; every topic and slide gets a fresh id.

        Raises:
            GenerationAuthError: If the API key is rejected.
            GenerationParseError: If the response is not a valid outline.
            GenerationError: If the call fails after retries.
        """
        full_prompt = build_outline_prompt(
            prompt, references, char_limit=self.settings.REFERENCE_CHAR_LIMIT
        )
        output_text = await self._call(
            lambda: self._structured_text(full_prompt, "Outline", outline_json_schema())
        )
        outline = _parse_json_payload(output_text, OutlinePayload, model=self.model)
        return outline.to_topics()

    async def generate_bullets(self, slide_title: str, deck_title: str) -> list[str]:
        """Draft bullet points for a slide, list markers removed."""
        full_prompt = build_bullets_prompt(slide_title, deck_title)
        output_text = await self._call(
            lambda: self._structured_text(full_prompt, "Bullets", bullets_json_schema())
        )
        payload = _parse_json_payload(output_text, BulletsPayload, model=self.model)
        return payload.cleaned()

    async def generate_notes(
        self, slide_title: str, bullets: list[str], deck_title: str
    ) -> str:
        """Write speaker notes for a slide as plain text."""
        full_prompt = build_notes_prompt(slide_title, bullets, deck_title)
        output_text = await self._call(lambda: self._plain_text(full_prompt))
        if output_text is None or not output_text.strip():
            raise GenerationParseError(
                "No speaker notes in response", provider=_PROVIDER, model=self.model
            )
        return output_text.strip()

    async def generate_image(self, prompt: str) -> ImageContent:
        """Generate one PNG image from a prompt."""
        response = await self._call(
            lambda: self._client.images.generate(
                model=self.image_model, prompt=prompt, n=1
            )
        )
        data = response.data or []
        b64_data = data[0].b64_json if data else None
        if not b64_data:
            raise GenerationParseError(
                "No image was generated", provider=_PROVIDER, model=self.image_model
            )
        return ImageContent(data=b64_data, mime_type=_IMAGE_MIME_TYPE, prompt=prompt)

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    async def _structured_text(
        self, prompt: str, schema_name: str, schema: dict[str, Any]
    ) -> str | None:
        response = await self._client.responses.create(  # type: ignore[call-overload]
            model=self.model,
            input=prompt,
            text={
                "format": {
                    "type": "json_schema",
                    "name": schema_name,
                    "schema": schema,
                    "strict": True,
                }
            },
        )
        return response.output_text

    async def _plain_text(self, prompt: str) -> str | None:
        response = await self._client.responses.create(model=self.model, input=prompt)
        return response.output_text

    async def _call(self, request: Callable[[], Awaitable[ResultT]]) -> ResultT:
        """Run a request under the rate limiter and map transport errors.

        Raises:
            GenerationAuthError: If the API key is rejected.
            GenerationError: If the call fails after retries.
        """
        try:
            async with self._limiter:
                return await self._call_with_retry(request)
        except AuthenticationError as e:
            raise GenerationAuthError(
                "Invalid OpenAI API key. Check OPENAI_API_KEY.",
                provider=_PROVIDER,
                model=self.model,
                cause=e,
            ) from e
        except (RateLimitError, APIConnectionError) as e:
            raise GenerationError(
                f"OpenAI API call failed after retries: {e}",
                provider=_PROVIDER,
                model=self.model,
                cause=e,
            ) from e
        except GenerationError:
            raise
        except Exception as e:
            raise GenerationError(
                f"OpenAI API call failed: {e}",
                provider=_PROVIDER,
                model=self.model,
                cause=e,
            ) from e

    @retry(
        wait=wait_random_exponential(min=1, max=60),
        stop=stop_after_attempt(6),
        retry=retry_if_exception_type((RateLimitError, APIConnectionError)),
        reraise=True,
    )
    async def _call_with_retry(
        self, request: Callable[[], Awaitable[ResultT]]
    ) -> ResultT:
        return await request()
