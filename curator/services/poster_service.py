"""Poster Service — poster image generation and the placeholder poster.

Invariants:
    - A generated poster URL is appended to exhibitions.posters (list reassigned)
      only when an exhibition id was given, and only for its owner
    - The placeholder endpoint never calls a model: main image or a fixed placeholder
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from curator.core.errors import ErrorContext
from curator.infrastructure.image_client import PosterImageClient
from curator.models.exhibition import Exhibition
from curator.services import prompts

logger = logging.getLogger(__name__)

PLACEHOLDER_POSTER_URL = (
    "https://via.placeholder.com/600x800/333/fff?text=Exhibition+Poster"
)


async def generate_poster(
    db: AsyncSession,
    image_client: PosterImageClient,
    *,
    title: str,
    artist_name: str | None,
    style: str | None,
    keywords: list[str],
    exhibition: Exhibition | None = None,
) -> dict:
    prompt = prompts.poster_image(title, artist_name, style, keywords)
    ctx = ErrorContext(exhibition_id=str(exhibition.id) if exhibition else None)
    image = await image_client.generate(prompt, context=ctx)
    logger.info("Poster generated", extra={"exhibition_id": ctx.exhibition_id})

    if exhibition is not None:
        exhibition.posters = [*(exhibition.posters or []), image.url]
        exhibition.touch()
        await db.commit()

    return {"success": True, "image_url": image.url, "prompt": prompt}


def placeholder_poster(main_image: str | None) -> dict:
    return {
        "poster_url": main_image or PLACEHOLDER_POSTER_URL,
        "message": "Poster generated successfully (placeholder)",
    }
