"""Poster Image Client — AsyncOpenAI Images API wrapper with error mapping.

Invariants:
    - Every failure (SDK error, empty data, missing URL) surfaces as ImageGenerationError
    - Returned URLs are provider-hosted; callers persist them as-is

Design Decisions:
    - Separate client per provider: text/vision stays on Anthropic, images on OpenAI
    - No retry loop: a poster generation costs enough that the user retries explicitly
"""

import logging
from dataclasses import dataclass

import openai
from openai import AsyncOpenAI

from curator.core.errors import ImageGenerationError, ErrorContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedImage:
    url: str
    revised_prompt: str | None = None


class PosterImageClient:
    """Generates portrait poster images."""

    def __init__(
        self,
        api_key: str,
        model: str = "dall-e-3",
        size: str = "1024x1792",
        quality: str = "hd",
        timeout_seconds: float = 120,
    ):
        self.client = AsyncOpenAI(api_key=api_key, timeout=timeout_seconds)
        self.model = model
        self.size = size
        self.quality = quality

    async def generate(
        self, prompt: str, context: ErrorContext | None = None,
    ) -> GeneratedImage:
        try:
            result = await self.client.images.generate(
                model=self.model,
                prompt=prompt,
                size=self.size,
                quality=self.quality,
                style="natural",
                n=1,
            )
        except openai.OpenAIError as e:
            logger.error(
                f"Image generation failed: {e}",
                extra={"exhibition_id": context.exhibition_id if context else None},
            )
            raise ImageGenerationError(str(e), context=context)

        if not result.data:
            raise ImageGenerationError("No image returned", context=context)
        image = result.data[0]
        url = getattr(image, "url", None)
        if not url:
            raise ImageGenerationError("Image response missing URL", context=context)
        return GeneratedImage(
            url=url, revised_prompt=getattr(image, "revised_prompt", None),
        )

    async def close(self) -> None:
        await self.client.close()
