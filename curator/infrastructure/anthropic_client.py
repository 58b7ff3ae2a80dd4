"""Resilient Anthropic Client — wraps AsyncAnthropic with retry, backoff, and error mapping.

Invariants:
    - Rate limits (429): exponential backoff with jitter, respects Retry-After header
    - Transient errors (5xx, 529, connection): max 3 retries with exponential backoff
    - Client errors (4xx except 429) and timeouts: immediate failure, no retry
    - All failures mapped to AnthropicAPIError (core/errors.py)
    - Streams are never retried: partial text may already be on the wire

Design Decisions:
    - Wrapper over raw client: isolates retry logic from generators and routes (ADR: single responsibility)
    - ±25% jitter on backoff: prevents thundering herd on shared rate limits
    - temperature omitted from the request when None: the API default applies
"""

import asyncio
import random
import logging
from contextlib import asynccontextmanager

import anthropic
from anthropic import (
    APIError,
    APIConnectionError,
    APIStatusError,
    RateLimitError,
    APITimeoutError,
    InternalServerError,
)

from curator.core.errors import AnthropicAPIError, ErrorContext

logger = logging.getLogger(__name__)

# ADR: OverloadedError (HTTP 529) is not re-exported by every SDK release.
# Detect via status code on APIStatusError instead of relying on private import.
_OVERLOADED_STATUS = 529


def _is_overloaded(e: APIError) -> bool:
    """Check if error is Anthropic 529 Overloaded."""
    return isinstance(e, APIStatusError) and e.status_code == _OVERLOADED_STATUS


def response_text(response) -> str:
    """Concatenate the text blocks of a Messages API response."""
    return "".join(
        block.text for block in response.content
        if getattr(block, "type", None) == "text"
    )


class ResilientAnthropicClient:
    """Wraps Anthropic client with retry logic, timeouts, and error mapping."""

    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-5",
        max_retries: int = 3,
        base_delay_ms: int = 1000,
        max_delay_ms: int = 60_000,
        timeout_seconds: int = 120,
    ):
        self.client = anthropic.AsyncAnthropic(
            api_key=api_key,
            timeout=timeout_seconds,
        )
        self.model = model
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms

    async def create_message(
        self,
        *,
        max_tokens: int,
        system: str,
        messages: list,
        temperature: float | None = None,
        model: str | None = None,
        context: ErrorContext | None = None,
    ):
        """Create message with automatic retry on transient failures."""
        kwargs = self._request_kwargs(
            model, max_tokens, system, messages, temperature,
        )
        for attempt in range(self.max_retries + 1):
            try:
                response = await self.client.messages.create(**kwargs)
                self._log_success(response, attempt)
                return response

            except RateLimitError as e:
                await self._handle_rate_limit(e, attempt, context)

            except (APIConnectionError, InternalServerError) as e:
                await self._handle_transient_error(e, attempt, context)

            except APITimeoutError:
                raise AnthropicAPIError(
                    "API timeout", "timeout", context=context,
                )

            except APIError as e:
                if _is_overloaded(e):
                    await self._handle_transient_error(e, attempt, context)
                    continue
                raise AnthropicAPIError(
                    str(e), "client_error", context=context,
                )

            except Exception as e:
                logger.error(
                    f"Unexpected Anthropic error: {e}", exc_info=True,
                )
                raise AnthropicAPIError(
                    str(e), "unknown", context=context,
                )

    async def complete_text(self, **kwargs) -> str:
        """create_message() reduced to the reply text."""
        response = await self.create_message(**kwargs)
        return response_text(response)

    @asynccontextmanager
    async def stream_message(
        self,
        *,
        max_tokens: int,
        system: str,
        messages: list,
        temperature: float | None = None,
        model: str | None = None,
        context: ErrorContext | None = None,
    ):
        """Stream message with Anthropic error → AnthropicAPIError mapping.

        No retry — caller decides. Catches errors from both connection
        setup AND mid-stream (errors from the caller's async for propagate
        through the yield in asynccontextmanager).
        CancelledError (BaseException) passes through uncaught.
        """
        kwargs = self._request_kwargs(
            model, max_tokens, system, messages, temperature,
        )
        try:
            async with self.client.messages.stream(**kwargs) as stream:
                yield stream
        except RateLimitError as e:
            raise AnthropicAPIError(
                "Rate limit exceeded (streaming)",
                "rate_limit",
                retry_after_ms=self._extract_retry_after(e),
                context=context,
            )
        except (APIConnectionError, InternalServerError) as e:
            raise AnthropicAPIError(
                f"Connection error during stream: {e}",
                "connection_error",
                context=context,
            )
        except APITimeoutError:
            raise AnthropicAPIError(
                "API timeout during stream", "timeout", context=context,
            )
        except APIError as e:
            if _is_overloaded(e):
                raise AnthropicAPIError(
                    "Anthropic API overloaded (529)",
                    "overloaded",
                    context=context,
                )
            raise AnthropicAPIError(
                str(e), "client_error", context=context,
            )

    async def close(self) -> None:
        await self.client.close()

    def _request_kwargs(
        self, model, max_tokens, system, messages, temperature,
    ) -> dict:
        kwargs = {
            "model": model or self.model,
            "max_tokens": max_tokens,
            "system": system,
            "messages": messages,
        }
        if temperature is not None:
            kwargs["temperature"] = temperature
        return kwargs

    def _log_success(self, response, attempt: int) -> None:
        usage = response.usage
        logger.info(
            "Anthropic API success",
            extra={
                "attempt": attempt + 1,
                "input_tokens": usage.input_tokens,
                "output_tokens": usage.output_tokens,
            },
        )

    async def _handle_rate_limit(
        self, e: RateLimitError, attempt: int, context: ErrorContext | None,
    ) -> None:
        """Handle rate limit error with retry or raise."""
        retry_after_ms = self._extract_retry_after(e)
        if attempt >= self.max_retries:
            raise AnthropicAPIError(
                "Rate limit exceeded after retries",
                "rate_limit",
                retry_after_ms=retry_after_ms,
                context=context,
            )
        delay = retry_after_ms or self._backoff(attempt)
        logger.warning(
            f"Rate limit hit, retry after {delay}ms (attempt {attempt + 1})",
        )
        await asyncio.sleep(delay / 1000)

    async def _handle_transient_error(
        self, e: Exception, attempt: int, context: ErrorContext | None,
    ) -> None:
        """Handle transient errors with retry or raise."""
        if attempt >= self.max_retries:
            raise AnthropicAPIError(
                f"Transient failure after {self.max_retries} retries: {e}",
                "connection_error",
                context=context,
            )
        delay = self._backoff(attempt)
        logger.warning(f"Transient error, retry after {delay}ms: {e}")
        await asyncio.sleep(delay / 1000)

    def _backoff(self, attempt: int) -> int:
        """Exponential backoff with ±25% jitter."""
        delay = min(self.max_delay_ms, (2 ** attempt) * self.base_delay_ms)
        return int(delay * random.uniform(0.75, 1.25))  # nosec B311

    def _extract_retry_after(self, error: RateLimitError) -> int | None:
        """Extract Retry-After header (returns milliseconds)."""
        try:
            if hasattr(error, "response") and error.response:
                val = error.response.headers.get("retry-after")
                if val:
                    return int(float(val) * 1000)
        except (AttributeError, TypeError, ValueError):
            return None
        return None
