"""Stream Helpers — SSE wiring shared by the chat and regenerate routes.

Invariants:
    - Each event becomes one `data: {json}\\n\\n` line
    - Client disconnects end the generator quietly (logged, not raised)
"""

import asyncio
import json
import logging
from typing import AsyncIterator

from fastapi.responses import StreamingResponse

logger = logging.getLogger(__name__)

# ADR: SSE headers prevent proxy/browser buffering of streamed events.
SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "X-Accel-Buffering": "no",
    "Connection": "keep-alive",
}


def sse_line(event: dict) -> str:
    """Format event as SSE data line."""
    return f"data: {json.dumps(event, ensure_ascii=False)}\n\n"


def sse_response(events: AsyncIterator[dict], label: str) -> StreamingResponse:
    """Wrap an async generator of event dicts in a text/event-stream response."""

    async def event_generator():
        try:
            async for event in events:
                yield sse_line(event)
        except asyncio.CancelledError:
            logger.info("Client disconnected from %s stream", label)
            return

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
