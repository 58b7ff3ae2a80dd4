"""Chat Runner — streamed curator chat and content regeneration over SSE.

Invariants:
    - Every run ends with exactly one done event (error=True after an error event)
    - Persistence happens only after the model finished; a persistence failure is
      logged and never turns a delivered reply into an error
    - Chat: content row inserted only when both exhibition_id and step are set;
      conversation appended whenever exhibition_id is set
    - Regenerate: upsert by content_type, exhibition updated_at touched

Design Decisions:
    - Anthropic streaming API for real-time text delivery, get_final_message()
      for the full completion (no manual delta concatenation)
    - No retry inside a stream: text already sent cannot be unsent (ADR: the client
      wrapper only retries non-streamed calls)
    - Caller (route) owns the access checks; the runner trusts exhibition ids it gets
"""

import asyncio
import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from curator.core.domain_types import Locale, map_step_to_content_type
from curator.core.errors import CuratorError, ErrorContext
from curator.infrastructure.anthropic_client import (
    ResilientAnthropicClient,
    response_text,
)
from curator.models.exhibition import Exhibition
from curator.schemas.chat import ChatRequest
from curator.services import exhibition_service, prompts
from curator.services.rag import get_rag_context
from curator.services.stream_events import (
    done_event,
    process_stream_event,
    unexpected_error_event,
)

logger = logging.getLogger(__name__)


def to_model_messages(messages: list[dict]) -> list[dict]:
    """Drop empty turns and leading assistant turns (the model must see a user turn first)."""
    cleaned = [
        {"role": m["role"], "content": m["content"]}
        for m in messages
        if m.get("content") and m["content"].strip()
    ]
    while cleaned and cleaned[0]["role"] != "user":
        cleaned.pop(0)
    return cleaned


class CuratorChatRunner:
    """Streams one model reply and persists it afterwards."""

    CHAT_PARAMS = (0.7, 2000)
    REGENERATE_PARAMS = (0.8, 2000)

    def __init__(
        self, db: AsyncSession, anthropic_client: ResilientAnthropicClient,
    ):
        self.db = db
        self.client = anthropic_client
        self._last_text: str | None = None

    # ─── Chat ────────────────────────────────────────────────────

    async def chat(self, request: ChatRequest, user_id: str | None = None):
        """Async generator yielding SSE events for one chat turn."""
        exhibition_id = request.exhibition_id
        ctx = ErrorContext(
            exhibition_id=str(exhibition_id) if exhibition_id else None,
            user_id=user_id,
            content_type=request.step,
        )
        try:
            rag_context = await get_rag_context(self.db, request.step)
            system = prompts.chat_system_prompt(
                request.step, request.data, request.locale, rag_context,
            )
            raw_messages = [m.model_dump() for m in request.messages]
            messages = to_model_messages(raw_messages)
            if not messages:
                messages = [{
                    "role": "user",
                    "content": prompts.for_locale(request.locale).system_prompt(),
                }]

            self._last_text = None
            async for sse in self._stream_api_call(
                system, messages, self.CHAT_PARAMS, ctx,
            ):
                yield sse
            if self._last_text is None:
                return  # error events already yielded

            if exhibition_id:
                await self._save_chat(
                    exhibition_id, request.step, raw_messages, self._last_text,
                )
            yield done_event(error=False)
        except asyncio.CancelledError:
            logger.info("Chat stream cancelled (client disconnect)",
                extra={"exhibition_id": ctx.exhibition_id})
            raise
        except Exception as e:
            logger.error("Unexpected error in chat runner: %s", e,
                extra={"exhibition_id": ctx.exhibition_id}, exc_info=True)
            yield unexpected_error_event()
            yield done_event(error=True)

    async def _save_chat(
        self,
        exhibition_id: UUID,
        step: str | None,
        messages: list[dict],
        completion: str,
    ) -> None:
        if step:
            try:
                await exhibition_service.insert_content(
                    self.db, exhibition_id, map_step_to_content_type(step),
                    {"text": completion},
                )
            except SQLAlchemyError as e:
                await self.db.rollback()
                logger.error("Failed to save chat content: %s", e,
                    extra={"exhibition_id": str(exhibition_id), "content_type": step})

        now = datetime.now(timezone.utc).isoformat()
        entries = [
            {"role": m["role"], "content": m["content"], "timestamp": now, "step": step}
            for m in messages
        ]
        entries.append(
            {"role": "assistant", "content": completion, "timestamp": now, "step": step},
        )
        try:
            await exhibition_service.append_conversation(
                self.db, exhibition_id, entries,
            )
        except (SQLAlchemyError, CuratorError) as e:
            await self.db.rollback()
            logger.error("Failed to save conversation: %s", e,
                extra={"exhibition_id": str(exhibition_id)})

    # ─── Regenerate ──────────────────────────────────────────────

    async def regenerate(
        self,
        exhibition: Exhibition,
        content_type: str,
        exhibition_data: dict,
        locale: Locale,
    ):
        """Async generator: re-run one content block's prompt, upsert the result."""
        ctx = ErrorContext(
            exhibition_id=str(exhibition.id),
            user_id=exhibition.user_id,
            content_type=content_type,
        )
        try:
            rag_context = await get_rag_context(self.db, content_type)
            system = prompts.regenerate_system_prompt(
                content_type, exhibition_data, locale, rag_context,
            )
            messages = [{
                "role": "user",
                "content": prompts.for_locale(locale).regenerate_request(content_type),
            }]

            self._last_text = None
            async for sse in self._stream_api_call(
                system, messages, self.REGENERATE_PARAMS, ctx,
            ):
                yield sse
            if self._last_text is None:
                return

            try:
                await exhibition_service.upsert_content(
                    self.db, exhibition, content_type, {"text": self._last_text},
                )
            except SQLAlchemyError as e:
                await self.db.rollback()
                logger.error("Failed to save regenerated content: %s", e,
                    extra={"exhibition_id": ctx.exhibition_id,
                           "content_type": content_type})
            yield done_event(error=False)
        except asyncio.CancelledError:
            logger.info("Regenerate stream cancelled (client disconnect)",
                extra={"exhibition_id": ctx.exhibition_id})
            raise
        except Exception as e:
            logger.error("Unexpected error in regenerate: %s", e,
                extra={"exhibition_id": ctx.exhibition_id}, exc_info=True)
            yield unexpected_error_event()
            yield done_event(error=True)

    # ─── Streaming ───────────────────────────────────────────────

    async def _stream_api_call(self, system, messages, params, ctx):
        """Async generator: yields text_delta events, sets self._last_text."""
        temperature, max_tokens = params
        try:
            async with self.client.stream_message(
                max_tokens=max_tokens,
                system=system,
                messages=messages,
                temperature=temperature,
                context=ctx,
            ) as stream:
                async for event in stream:
                    sse = process_stream_event(event)
                    if sse:
                        yield sse
                response = await stream.get_final_message()
            self._last_text = response_text(response)
            usage = getattr(response, "usage", None)
            if usage is not None:
                logger.info(
                    "Stream completed",
                    extra={
                        "exhibition_id": ctx.exhibition_id,
                        "input_tokens": usage.input_tokens,
                        "output_tokens": usage.output_tokens,
                    },
                )
        except CuratorError as e:
            logger.error("Anthropic API error: %s", e.message,
                extra={"exhibition_id": ctx.exhibition_id, "error_code": e.code})
            yield e.to_sse_event()
            yield done_event(error=True)
