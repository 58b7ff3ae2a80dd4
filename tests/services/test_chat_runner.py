"""Chat & Regenerate Streams — SSE delivery, persistence and error handling.

Invariants:
    - Every stream ends with exactly one done event
    - Chat persists a content block only when exhibition_id and step are set,
      and appends the conversation whenever exhibition_id is set
    - Model errors become an error event + done(error=True), nothing is persisted
    - Regenerate upserts the block and bumps its version
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from curator.core.errors import AnthropicAPIError
from curator.models.exhibition_content import ExhibitionContent
from curator.models.reference_sample import ReferenceSample
from curator.services import exhibition_service, prompts_ko
from tests.services.conftest import OWNER, STRANGER, auth_headers
from tests.services.mock_anthropic import failing_stream, parse_sse, text_stream


async def _contents(test_db, exhibition_id):
    result = await test_db.execute(
        select(ExhibitionContent)
        .where(ExhibitionContent.exhibition_id == exhibition_id)
        .order_by(ExhibitionContent.created_at),
    )
    return list(result.scalars().all())


# --- Chat ---------------------------------------------------------------------


async def test_chat_requires_auth(client):
    res = await client.post(
        "/api/v1/chat", json={"messages": [{"role": "user", "content": "Hi"}]},
    )
    assert res.status_code == 401


async def test_chat_rejects_empty_message_list(client):
    res = await client.post(
        "/api/v1/chat", json={"messages": []}, headers=auth_headers(OWNER),
    )
    assert res.status_code == 400


async def test_chat_streams_text_then_done(client, llm):
    llm.streams = [text_stream("Hel", "lo")]
    res = await client.post(
        "/api/v1/chat",
        json={"messages": [{"role": "user", "content": "Hi"}]},
        headers=auth_headers(OWNER),
    )
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/event-stream")
    assert res.headers["cache-control"] == "no-cache"
    assert parse_sse(res.text) == [
        {"type": "text_delta", "data": "Hel"},
        {"type": "text_delta", "data": "lo"},
        {"type": "done", "data": {"error": False}},
    ]
    assert llm.calls[0]["system"] == prompts_ko.system_prompt()
    assert llm.calls[0]["temperature"] == 0.7


async def test_chat_drops_leading_assistant_turns(client, llm):
    llm.streams = [text_stream("ok")]
    await client.post(
        "/api/v1/chat",
        json={"messages": [
            {"role": "assistant", "content": "Welcome!"},
            {"role": "user", "content": "Hi"},
            {"role": "assistant", "content": "   "},
        ]},
        headers=auth_headers(OWNER),
    )
    assert llm.calls[0]["messages"] == [{"role": "user", "content": "Hi"}]


async def test_chat_persists_content_and_conversation(
    client, llm, make_exhibition, test_db,
):
    exhibition = await make_exhibition(OWNER)
    llm.streams = [text_stream("Intro text")]
    res = await client.post(
        "/api/v1/chat",
        json={
            "messages": [{"role": "user", "content": "Write the intro"}],
            "exhibition_id": str(exhibition.id),
            "step": "introduction",
            "data": {"title": "Blue Hour", "keywords": ["dusk"]},
        },
        headers=auth_headers(OWNER),
    )
    assert parse_sse(res.text)[-1]["data"]["error"] is False

    contents = await _contents(test_db, exhibition.id)
    assert [(c.content_type, c.content) for c in contents] == [
        ("introduction", {"text": "Intro text"}),
    ]
    await test_db.refresh(exhibition)
    conversation = exhibition.curator_conversation
    assert [(m["role"], m["content"]) for m in conversation] == [
        ("user", "Write the intro"), ("assistant", "Intro text"),
    ]
    assert all(m["step"] == "introduction" for m in conversation)


async def test_chat_titles_step_stored_as_title_suggestions(
    client, llm, make_exhibition, test_db,
):
    exhibition = await make_exhibition(OWNER)
    llm.streams = [text_stream('{"titles": ["A"]}')]
    await client.post(
        "/api/v1/chat",
        json={
            "messages": [{"role": "user", "content": "titles please"}],
            "exhibition_id": str(exhibition.id),
            "step": "titles",
        },
        headers=auth_headers(OWNER),
    )
    contents = await _contents(test_db, exhibition.id)
    assert [c.content_type for c in contents] == ["title_suggestions"]


async def test_chat_without_step_only_appends_conversation(
    client, llm, make_exhibition, test_db,
):
    exhibition = await make_exhibition(OWNER)
    llm.streams = [text_stream("Let's talk")]
    await client.post(
        "/api/v1/chat",
        json={
            "messages": [{"role": "user", "content": "Hello"}],
            "exhibition_id": str(exhibition.id),
        },
        headers=auth_headers(OWNER),
    )
    assert await _contents(test_db, exhibition.id) == []
    await test_db.refresh(exhibition)
    assert len(exhibition.curator_conversation) == 2


async def test_chat_on_foreign_exhibition_is_404(client, llm, make_exhibition):
    exhibition = await make_exhibition(OWNER)
    res = await client.post(
        "/api/v1/chat",
        json={
            "messages": [{"role": "user", "content": "Hi"}],
            "exhibition_id": str(exhibition.id),
        },
        headers=auth_headers(STRANGER),
    )
    assert res.status_code == 404
    assert llm.calls == []


async def test_chat_injects_reference_samples(client, llm, test_db):
    test_db.add(ReferenceSample(content_type="introduction", text="SAMPLE-STYLE"))
    await test_db.commit()
    llm.streams = [text_stream("ok")]
    await client.post(
        "/api/v1/chat",
        json={
            "messages": [{"role": "user", "content": "Hi"}],
            "step": "introduction",
            "data": {"title": "T"},
        },
        headers=auth_headers(OWNER),
    )
    assert "SAMPLE-STYLE" in llm.calls[0]["system"]


async def test_model_error_yields_error_then_done(client, llm, make_exhibition, test_db):
    exhibition = await make_exhibition(OWNER)
    llm.streams = [AnthropicAPIError("overloaded", "overloaded_error")]
    res = await client.post(
        "/api/v1/chat",
        json={
            "messages": [{"role": "user", "content": "Hi"}],
            "exhibition_id": str(exhibition.id),
            "step": "preface",
        },
        headers=auth_headers(OWNER),
    )
    events = parse_sse(res.text)
    assert [e["type"] for e in events] == ["error", "done"]
    assert events[0]["data"]["code"] == "ANTHROPIC_API_ERROR"
    assert events[1]["data"]["error"] is True
    assert await _contents(test_db, exhibition.id) == []


async def test_unexpected_error_mid_stream(client, llm):
    llm.streams = [failing_stream(RuntimeError("socket closed"), "partial")]
    res = await client.post(
        "/api/v1/chat",
        json={"messages": [{"role": "user", "content": "Hi"}]},
        headers=auth_headers(OWNER),
    )
    events = parse_sse(res.text)
    assert events[0] == {"type": "text_delta", "data": "partial"}
    assert events[1]["data"]["code"] == "INTERNAL_ERROR"
    assert events[-1] == {"type": "done", "data": {"error": True}}
    assert sum(e["type"] == "done" for e in events) == 1


# --- Regenerate ---------------------------------------------------------------


async def test_regenerate_upserts_block(client, llm, make_exhibition, test_db):
    exhibition = await make_exhibition(OWNER)
    url = f"/api/v1/exhibitions/{exhibition.id}/regenerate"
    llm.streams = [text_stream("first"), text_stream("second")]

    await client.post(url, json={"content_type": "preface"}, headers=auth_headers(OWNER))
    res = await client.post(
        url, json={"content_type": "preface", "locale": "en"}, headers=auth_headers(OWNER),
    )

    assert parse_sse(res.text)[-1]["data"]["error"] is False
    contents = await _contents(test_db, exhibition.id)
    assert len(contents) == 1
    await test_db.refresh(contents[0])
    assert contents[0].content == {"text": "second"}
    assert contents[0].version == 2
    assert llm.calls[1]["messages"] == [
        {"role": "user", "content": "Please regenerate the preface."},
    ]
    assert llm.calls[1]["temperature"] == 0.8


async def test_regenerate_by_stranger_is_403(client, llm, make_exhibition):
    exhibition = await make_exhibition(OWNER)
    res = await client.post(
        f"/api/v1/exhibitions/{exhibition.id}/regenerate",
        json={"content_type": "preface"},
        headers=auth_headers(STRANGER),
    )
    assert res.status_code == 403


# --- Persistence failures after the stream ------------------------------------


def _db_down(*args, **kwargs):
    raise OperationalError("INSERT", {}, Exception("database is locked"))


async def test_chat_content_save_failure_still_appends_conversation(
    client, llm, make_exhibition, test_db, monkeypatch, caplog,
):
    exhibition = await make_exhibition(OWNER)
    llm.streams = [text_stream("Intro text")]
    monkeypatch.setattr(exhibition_service, "insert_content", _db_down)

    with caplog.at_level(logging.ERROR, logger="curator.services.chat_runner"):
        res = await client.post(
            "/api/v1/chat",
            json={
                "messages": [{"role": "user", "content": "Write the intro"}],
                "exhibition_id": str(exhibition.id),
                "step": "introduction",
            },
            headers=auth_headers(OWNER),
        )

    events = parse_sse(res.text)
    assert [e["type"] for e in events] == ["text_delta", "done"]
    assert events[-1]["data"] == {"error": False}
    assert "Failed to save chat content" in caplog.text
    assert await _contents(test_db, exhibition.id) == []
    await test_db.refresh(exhibition)
    assert len(exhibition.curator_conversation) == 2


async def test_chat_conversation_save_failure_keeps_stream_clean(
    client, llm, make_exhibition, test_db, monkeypatch, caplog,
):
    exhibition = await make_exhibition(OWNER)
    llm.streams = [text_stream("Intro text")]
    monkeypatch.setattr(exhibition_service, "append_conversation", _db_down)

    with caplog.at_level(logging.ERROR, logger="curator.services.chat_runner"):
        res = await client.post(
            "/api/v1/chat",
            json={
                "messages": [{"role": "user", "content": "Write the intro"}],
                "exhibition_id": str(exhibition.id),
                "step": "introduction",
            },
            headers=auth_headers(OWNER),
        )

    assert parse_sse(res.text)[-1] == {"type": "done", "data": {"error": False}}
    assert "Failed to save conversation" in caplog.text
    contents = await _contents(test_db, exhibition.id)
    assert [c.content for c in contents] == [{"text": "Intro text"}]
