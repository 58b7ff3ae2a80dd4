"""Image Analysis — vision-model reading of artwork images.

Invariants:
    - analyze_images: one model call per URL, run concurrently, results in input order
    - An unparseable reply yields {"error": ...} for that image, not a failed request
    - Aggregated keywords: first-seen order, unique, at most MAX_AGGREGATED_KEYWORDS
    - Poster style analysis sends at most MAX_POSTER_REFERENCE_IMAGES images, first
      image treated as the primary reference

Design Decisions:
    - Images passed by URL (source.type="url"): no download/re-encode on our side
    - asyncio.gather without return_exceptions: a model outage fails the whole
      request (503) instead of returning a half-empty analysis
"""

import asyncio
import logging

from curator.core.domain_types import Locale
from curator.core.errors import ErrorContext
from curator.core.reply_parsing import extract_json_object
from curator.infrastructure.anthropic_client import ResilientAnthropicClient
from curator.services import prompts

logger = logging.getLogger(__name__)

MAX_AGGREGATED_KEYWORDS = 15
_ANALYSIS_MAX_TOKENS = 1000
_STYLE_MAX_TOKENS = 1200


def image_block(url: str) -> dict:
    return {"type": "image", "source": {"type": "url", "url": url}}


def aggregate_keywords(analyses: list[dict]) -> list[str]:
    seen: dict[str, None] = {}
    for analysis in analyses:
        keywords = analysis.get("keywords")
        if not isinstance(keywords, list):
            continue
        for keyword in keywords:
            if isinstance(keyword, str) and keyword.strip():
                seen.setdefault(keyword.strip(), None)
    return list(seen)[:MAX_AGGREGATED_KEYWORDS]


class ImageAnalyzer:
    """Artwork analysis and poster-style extraction via the vision model."""

    def __init__(self, llm: ResilientAnthropicClient):
        self.llm = llm

    async def analyze_images(
        self, image_urls: list[str], locale: Locale = Locale.KO,
        context: ErrorContext | None = None,
    ) -> dict:
        analyses = await asyncio.gather(*(
            self._analyze_one(url, locale, context) for url in image_urls
        ))
        return {
            "analyses": list(analyses),
            "aggregated_keywords": aggregate_keywords(analyses),
        }

    async def _analyze_one(
        self, url: str, locale: Locale, context: ErrorContext | None,
    ) -> dict:
        p = prompts.for_locale(locale)
        reply = await self.llm.complete_text(
            max_tokens=_ANALYSIS_MAX_TOKENS,
            system=p.system_prompt(),
            messages=[{
                "role": "user",
                "content": [
                    {"type": "text", "text": p.image_analysis()},
                    image_block(url),
                ],
            }],
            context=context,
        )
        parsed = extract_json_object(reply)
        if parsed is None:
            logger.warning("Image analysis reply was not JSON (%s)", url)
            return {"error": "Failed to parse response"}
        return parsed

    async def analyze_poster_style(
        self, image_urls: list[str], context: ErrorContext | None = None,
    ) -> dict:
        """Style guide for poster backgrounds from the first few artworks."""
        urls = image_urls[:prompts.MAX_POSTER_REFERENCE_IMAGES]
        reply = await self.llm.complete_text(
            max_tokens=_STYLE_MAX_TOKENS,
            system="You are an art director. Reply with a single JSON object.",
            messages=[{
                "role": "user",
                "content": [
                    {"type": "text", "text": prompts.poster_style_analysis(len(urls))},
                    *(image_block(url) for url in urls),
                ],
            }],
            context=context,
        )
        parsed = extract_json_object(reply)
        if parsed is None:
            logger.warning("Poster style reply was not JSON")
            return {"error": "Failed to parse response"}
        return parsed
