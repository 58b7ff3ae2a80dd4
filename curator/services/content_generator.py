"""Content Generator — one-shot (non-streamed) generation of exhibition texts.

Invariants:
    - One model call per operation, except artwork descriptions (one per artwork)
    - Model failures propagate as AnthropicAPIError (route maps them to 503),
      except per-artwork descriptions, which degrade to a locale error string
    - Replies always come back in the documented shape, via reply_parsing fallbacks

Design Decisions:
    - Prompt goes in the user turn, persona in `system`: the Messages API needs a user turn
    - Artwork descriptions sequential, not gathered: one slow artwork never
      multiplies rate-limit pressure (ADR: batch sizes are small)
    - RAG context passed in by callers: the generator owns no DB session
"""

import logging

from curator.core.domain_types import Locale
from curator.core.errors import CuratorError, ErrorContext
from curator.core.reply_parsing import (
    clean_press_release,
    parse_marketing_report,
    parse_text_field,
    parse_titles,
)
from curator.infrastructure.anthropic_client import ResilientAnthropicClient
from curator.services import prompts

logger = logging.getLogger(__name__)

# (temperature, max_tokens) per operation
_TITLES = (0.8, 500)
_LONG_TEXT = (0.7, 1000)
_PREFACE = (0.7, 2000)
_DESCRIPTION = (0.7, 600)
_MARKETING = (0.7, 2000)
_PRESS_RELEASE = (0.5, 1500)
_SUMMARY = (0.3, 3000)


class ContentGenerator:
    """Builds prompts, calls the model, parses replies."""

    def __init__(self, llm: ResilientAnthropicClient):
        self.llm = llm

    async def _ask(
        self,
        prompt: str,
        locale: Locale,
        params: tuple[float, int],
        system: str | None = None,
        context: ErrorContext | None = None,
    ) -> str:
        temperature, max_tokens = params
        return await self.llm.complete_text(
            system=system or prompts.for_locale(locale).system_prompt(),
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
            max_tokens=max_tokens,
            context=context,
        )

    # ─── Titles & texts ──────────────────────────────────────────

    async def titles(
        self,
        keywords: list[str],
        artwork_descriptions: list[str],
        conversation_context: str,
        locale: Locale,
    ) -> dict:
        prompt = prompts.for_locale(locale).titles(
            keywords, artwork_descriptions, conversation_context,
        )
        reply = await self._ask(prompt, locale, _TITLES)
        return {"titles": parse_titles(reply)}

    async def introduction(
        self, title: str, keywords: list[str], locale: Locale, rag_context: str,
    ) -> dict:
        prompt = prompts.for_locale(locale).introduction(title, keywords, rag_context)
        reply = await self._ask(prompt, locale, _LONG_TEXT)
        return {"introduction": parse_text_field(reply, "introduction")}

    async def preface(
        self, title: str, keywords: list[str], locale: Locale, rag_context: str,
    ) -> dict:
        prompt = prompts.for_locale(locale).preface(title, keywords, rag_context)
        reply = await self._ask(prompt, locale, _PREFACE)
        return {"preface": parse_text_field(reply, "preface")}

    async def artist_bio(
        self,
        artist_name: str,
        keywords: list[str],
        exhibition_title: str,
        locale: Locale,
        rag_context: str,
    ) -> dict:
        artist_info = {
            "name": artist_name,
            "keywords": keywords,
            "exhibitionTitle": exhibition_title,
        }
        prompt = prompts.for_locale(locale).artist_bio(artist_info, rag_context)
        reply = await self._ask(prompt, locale, _LONG_TEXT)
        return {"artist_bio": parse_text_field(reply, "artistBio")}

    async def artwork_descriptions(
        self,
        artworks: list[dict],
        title: str,
        keywords: list[str],
        locale: Locale,
        rag_context: str,
    ) -> dict:
        """One description per artwork; a failed artwork gets the locale error text."""
        p = prompts.for_locale(locale)
        descriptions = []
        for index, artwork in enumerate(artworks):
            artwork_title = artwork.get("title") or p.default_artwork_title(index + 1)
            prompt = p.artwork_description(title, keywords, artwork, rag_context)
            try:
                reply = await self._ask(prompt, locale, _DESCRIPTION)
                description = parse_text_field(reply, "description")
            except CuratorError as e:
                logger.warning(
                    "Artwork description %d failed: %s", index, e.message,
                )
                description = p.ARTWORK_DESCRIPTION_ERROR
            descriptions.append({
                "artwork_id": artwork.get("id") or index,
                "title": artwork_title,
                "description": description,
            })
        return {"descriptions": descriptions}

    async def marketing_report(
        self, exhibition_data: dict, locale: Locale, rag_context: str,
    ) -> dict:
        prompt = prompts.for_locale(locale).marketing_report(
            exhibition_data, rag_context,
        )
        reply = await self._ask(prompt, locale, _MARKETING)
        return {"marketing_report": parse_marketing_report(reply, locale)}

    async def press_release(
        self, data: dict, locale: Locale, rag_context: str,
    ) -> dict:
        """Full press release: labelled info block, then 3-4 paragraphs."""
        p = prompts.for_locale(locale)
        date_range = prompts.format_date_range(
            data.get("exhibition_date"), data.get("exhibition_end_date"), locale,
        )
        info_text = prompts.build_exhibition_info(
            locale,
            date_range=date_range,
            venue=data.get("venue"),
            location=data.get("location"),
            opening_hours=data.get("opening_hours"),
            admission_fee=data.get("admission_fee"),
        )
        prompt = p.press_release(
            title=data["title"],
            keywords=data.get("keywords") or [],
            artist_name=data.get("artist_name"),
            introduction=data.get("introduction"),
            date_range=date_range,
            venue=data.get("venue"),
            location=data.get("location"),
            opening_hours=data.get("opening_hours"),
            admission_fee=data.get("admission_fee"),
            info_text=info_text,
            context=rag_context,
        )
        reply = await self._ask(
            prompt, locale, _PRESS_RELEASE, system=p.PRESS_RELEASE_SYSTEM,
        )
        return {"press_release": clean_press_release(reply)}

    async def conversation_summary(
        self, conversation: list[dict], exhibition_title: str, locale: Locale,
        context: ErrorContext | None = None,
    ) -> dict:
        prompt = prompts.for_locale(locale).summarize_conversation(
            conversation, exhibition_title,
        )
        reply = await self._ask(prompt, locale, _SUMMARY, context=context)
        return {"summary": parse_text_field(reply, "summary")}
