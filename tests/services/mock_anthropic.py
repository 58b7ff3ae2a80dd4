"""Mock Anthropic Client — simulates the streamed and one-shot Messages API.

Invariants:
    - MockAnthropicClient sequences streamed responses (one per stream_message call)
      and one-shot replies (one per complete_text/create_message call) separately
    - _Stream supports both `async for event` and `await get_final_message()`
    - A queued Exception instance is raised instead of returned

Design Decisions:
    - Flat mock classes (no inheritance): simple, explicit, easy to debug
    - Builders return _Stream objects: events for streaming, message for persistence
"""

import json
from contextlib import asynccontextmanager


# -- Mock Anthropic SDK objects ------------------------------------------------


class _Block:
    """Mock content block (text only)."""

    def __init__(self, **kwargs):
        for k, v in kwargs.items():
            setattr(self, k, v)


class _Usage:
    def __init__(self, input_tokens=100, output_tokens=50):
        self.input_tokens = input_tokens
        self.output_tokens = output_tokens


class _Message:
    """Mock Message returned by stream.get_final_message() and create_message()."""

    def __init__(self, content, stop_reason="end_turn", input_tokens=100, output_tokens=50):
        self.content = content
        self.stop_reason = stop_reason
        self.usage = _Usage(input_tokens, output_tokens)


class _StreamEvent:
    def __init__(self, type, content_block=None, delta=None):
        self.type = type
        self.content_block = content_block
        self.delta = delta


class _Delta:
    def __init__(self, type, text=None):
        self.type = type
        self.text = text


class _Stream:
    """Mock async iterable stream with get_final_message()."""

    def __init__(self, events, message):
        self._events = events
        self._message = message
        self._idx = 0

    def __aiter__(self):
        return self

    async def __anext__(self):
        if self._idx >= len(self._events):
            raise StopAsyncIteration
        ev = self._events[self._idx]
        self._idx += 1
        if isinstance(ev, Exception):
            raise ev
        return ev

    async def get_final_message(self):
        return self._message


class MockAnthropicClient:
    """Replaces ResilientAnthropicClient. Sequences pre-configured responses."""

    def __init__(self, streams=None, replies=None):
        self.streams = list(streams or [])
        self.replies = list(replies or [])
        self.calls = []

    @asynccontextmanager
    async def stream_message(self, **kwargs):
        self.calls.append(kwargs)
        if not self.streams:
            raise RuntimeError("MockAnthropicClient: no stream configured")
        stream = self.streams.pop(0)
        if isinstance(stream, Exception):
            raise stream
        yield stream

    async def create_message(self, **kwargs):
        self.calls.append(kwargs)
        if not self.replies:
            raise RuntimeError("MockAnthropicClient: no reply configured")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return _Message([_Block(type="text", text=reply)])

    async def complete_text(self, **kwargs) -> str:
        response = await self.create_message(**kwargs)
        return "".join(b.text for b in response.content)


# -- Builder helpers -----------------------------------------------------------


def text_stream(*chunks, tokens=(100, 50)):
    """Streamed text reply delivered as one text_delta per chunk."""
    events = [
        _StreamEvent("content_block_start", content_block=_Block(type="text", text="")),
    ]
    events.extend(
        _StreamEvent("content_block_delta", delta=_Delta("text_delta", text=c))
        for c in chunks
    )
    message = _Message([_Block(type="text", text="".join(chunks))], "end_turn", *tokens)
    return _Stream(events, message)


def failing_stream(error, *chunks):
    """Stream that yields `chunks` then raises `error` mid-iteration."""
    stream = text_stream(*chunks)
    stream._events.append(error)
    return stream


def parse_sse(body: str) -> list[dict]:
    """Decode a text/event-stream body into its event dicts."""
    return [
        json.loads(line[len("data: "):])
        for line in body.splitlines()
        if line.startswith("data: ")
    ]
