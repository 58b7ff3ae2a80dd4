"""External Clients — storage and auth-provider REST wrappers, token resolution, shutdown.

Invariants:
    - Storage delete_images never raises; unparseable URLs and failed batches
      are reported in the summary
    - A rejected bearer token resolves to None; other provider failures raise
    - Email lookup is case-insensitive and walks every admin page
    - close_clients closes and forgets every shared client
"""

import json
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from curator.api import dependencies
from curator.core.errors import AuthProviderError
from curator.infrastructure import auth_provider as auth_provider_module
from curator.infrastructure.anthropic_client import ResilientAnthropicClient
from curator.infrastructure.auth_provider import AuthProviderClient
from curator.infrastructure.object_storage import ObjectStorageClient
from curator.main import app

BASE = "https://project.test"


def _storage(handler) -> ObjectStorageClient:
    return ObjectStorageClient(
        base_url=BASE, service_key="svc", bucket="artworks",
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


def _auth(handler, service_key="svc") -> AuthProviderClient:
    return AuthProviderClient(
        base_url=BASE, anon_key="anon", service_key=service_key,
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


# --- Object storage -----------------------------------------------------------


def test_extract_file_path_from_public_url():
    storage = _storage(lambda request: httpx.Response(200))
    url = f"{BASE}/storage/v1/object/public/artworks/1700-abc123.png"
    assert storage.extract_file_path(url) == "1700-abc123.png"
    assert storage.extract_file_path("https://elsewhere.test/x.png") is None
    assert storage.public_url("a/b.jpg") == (
        f"{BASE}/storage/v1/object/public/artworks/a/b.jpg"
    )


async def test_upload_posts_bytes_and_returns_public_url():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"Key": "artworks/p.png"})

    storage = _storage(handler)
    url = await storage.upload("p.png", b"data", "image/png")

    assert url == f"{BASE}/storage/v1/object/public/artworks/p.png"
    assert seen[0].method == "POST"
    assert seen[0].url.path == "/storage/v1/object/artworks/p.png"
    assert seen[0].headers["x-upsert"] == "false"
    assert seen[0].headers["content-type"] == "image/png"


async def test_delete_images_batches_known_paths():
    bodies = []

    def handler(request):
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json=[])

    storage = _storage(handler)
    summary = await storage.delete_images([
        f"{BASE}/storage/v1/object/public/artworks/a.png",
        f"{BASE}/storage/v1/object/public/artworks/b.png",
        "https://elsewhere.test/c.png",
    ])

    assert bodies == [{"prefixes": ["a.png", "b.png"]}]
    assert summary.deleted_count == 2
    assert summary.failed_urls == ["https://elsewhere.test/c.png"]
    assert summary.success is False


async def test_delete_images_reports_failed_batch():
    storage = _storage(lambda request: httpx.Response(500, text="boom"))
    url = f"{BASE}/storage/v1/object/public/artworks/a.png"
    summary = await storage.delete_images([url])
    assert summary.deleted_count == 0
    assert summary.failed_urls == [url]


async def test_delete_images_reports_transport_error():
    def handler(request):
        raise httpx.ConnectError("down", request=request)

    storage = _storage(handler)
    summary = await storage.delete_images(
        [f"{BASE}/storage/v1/object/public/artworks/a.png"],
    )
    assert summary.success is False


# --- Auth provider ------------------------------------------------------------


def _user_payload(user_id="u-1", email="kim@art.kr", **extra):
    return {"id": user_id, "email": email, "user_metadata": {}, **extra}


async def test_get_user_resolves_token():
    def handler(request):
        assert request.headers["authorization"] == "Bearer good"
        assert request.headers["apikey"] == "anon"
        return httpx.Response(200, json=_user_payload(
            user_metadata={"role": "admin"}, email_confirmed_at="2025-01-01T00:00:00Z",
        ))

    user = await _auth(handler).get_user("good")
    assert user.id == "u-1"
    assert user.is_admin is True
    assert user.is_confirmed is True


@pytest.mark.parametrize("status_code", [401, 403])
async def test_get_user_rejected_token_is_none(status_code):
    user = await _auth(lambda request: httpx.Response(status_code)).get_user("bad")
    assert user is None


async def test_get_user_server_error_raises():
    with pytest.raises(AuthProviderError):
        await _auth(lambda request: httpx.Response(500)).get_user("t")


async def test_find_user_by_email_is_case_insensitive():
    def handler(request):
        return httpx.Response(200, json={"users": [_user_payload(email="Kim@Art.kr")]})

    user = await _auth(handler).find_user_by_email("  kim@ART.kr ")
    assert user.email == "Kim@Art.kr"


async def test_find_user_by_email_walks_pages(monkeypatch):
    monkeypatch.setattr(auth_provider_module, "_ADMIN_PAGE_SIZE", 2)
    pages = {
        "1": [_user_payload("a", "a@x.kr"), _user_payload("b", "b@x.kr")],
        "2": [_user_payload("c", "c@x.kr")],
    }
    requested = []

    def handler(request):
        page = request.url.params["page"]
        requested.append(page)
        return httpx.Response(200, json={"users": pages.get(page, [])})

    client = _auth(handler)
    assert (await client.find_user_by_email("c@x.kr")).id == "c"
    assert requested == ["1", "2"]

    requested.clear()
    assert await client.find_user_by_email("nobody@x.kr") is None
    assert requested == ["1", "2"]


async def test_admin_calls_need_service_key():
    client = _auth(lambda request: httpx.Response(200), service_key="")
    assert client.has_service_credentials is False
    with pytest.raises(AuthProviderError):
        await client.find_user_by_email("kim@art.kr")


# --- Bearer token resolution --------------------------------------------------


def _token_provider():
    def handler(request):
        if request.headers["authorization"] == "Bearer good":
            return httpx.Response(200, json=_user_payload())
        return httpx.Response(401)

    return _auth(handler)


@pytest.mark.parametrize("header", [None, "", "Basic abc", "Bearer ", "bearer    "])
async def test_missing_or_foreign_scheme_is_anonymous(header):
    assert await dependencies.get_optional_user(header, _token_provider()) is None


async def test_bearer_token_is_case_insensitive_scheme():
    user = await dependencies.get_optional_user("bearer good", _token_provider())
    assert user.id == "u-1"


async def test_routes_resolve_real_bearer_tokens(client):
    app.dependency_overrides.pop(dependencies.get_optional_user)
    app.dependency_overrides[dependencies.get_auth_provider] = _token_provider

    ok = await client.get(
        "/api/v1/exhibitions", headers={"Authorization": "Bearer good"},
    )
    rejected = await client.get(
        "/api/v1/exhibitions", headers={"Authorization": "Bearer expired"},
    )
    assert ok.status_code == 200
    assert rejected.status_code == 401


# --- Shutdown -----------------------------------------------------------------


async def test_close_clients_closes_every_client(monkeypatch):
    clients = {
        name: MagicMock(close=AsyncMock())
        for name in ("_anthropic_client", "_image_client", "_storage_client", "_auth_client")
    }
    for name, fake in clients.items():
        monkeypatch.setattr(dependencies, name, fake)

    await dependencies.close_clients()

    for name, fake in clients.items():
        fake.close.assert_awaited_once()
        assert getattr(dependencies, name) is None


async def test_anthropic_wrapper_close_closes_sdk_client():
    wrapper = ResilientAnthropicClient(api_key="sk-ant-test")
    wrapper.client = MagicMock(close=AsyncMock())
    await wrapper.close()
    wrapper.client.close.assert_awaited_once()
