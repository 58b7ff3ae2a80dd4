"""Stream Events — pure SSE event builders and Anthropic stream-event translation.

Invariants:
    - Every event is {"type": ..., "data": ...}
    - A stream always ends with exactly one done event
    - process_stream_event returns None for events the client never sees
"""

from typing import Any

from curator.core.errors import ErrorSeverity


# -- SSE event builders --------------------------------------------------------

def done_event(error: bool = False) -> dict:
    return {"type": "done", "data": {"error": error}}


def text_delta_event(text: str) -> dict:
    return {"type": "text_delta", "data": text}


def unexpected_error_event() -> dict:
    return {
        "type": "error",
        "data": {
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
            "severity": ErrorSeverity.CRITICAL.value,
            "recoverable": False,
        },
    }


# -- Anthropic stream processing -----------------------------------------------

def process_stream_event(event: Any) -> dict | None:
    """Translate one Anthropic stream event into an SSE event (text only)."""
    if getattr(event, "type", None) != "content_block_delta":
        return None
    delta = event.delta
    if getattr(delta, "type", None) == "text_delta" and delta.text:
        return text_delta_event(delta.text)
    return None
