"""Service test fixtures — async DB, fake external clients, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db overridden to use the test DB session factory
    - Caller identity comes from a `Bearer <user id>` header; ids starting with
      "admin" carry the admin role
    - Model, image, storage and auth-provider clients are in-memory fakes
    - Module-level rate limiters are reset around every test

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features are not exercised here)
    - Fakes over MagicMock for clients with several call sites: assertions read
      recorded calls instead of mock call_args plumbing
"""

import pytest
from fastapi import Header
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

import curator.models  # noqa: F401
from curator.api import dependencies
from curator.api.routes import auth as auth_routes
from curator.db.base import Base
from curator.infrastructure.auth_provider import AuthUser
from curator.infrastructure.database import get_db
from curator.infrastructure.image_client import GeneratedImage
from curator.infrastructure.object_storage import DeleteSummary
from curator.main import app
from curator.models.exhibition import Exhibition
from tests.services.mock_anthropic import MockAnthropicClient

OWNER = "user-owner"
STRANGER = "user-stranger"
ADMIN = "admin-1"


def auth_headers(user_id: str) -> dict:
    return {"Authorization": f"Bearer {user_id}"}


# -- Fake external clients -----------------------------------------------------


class FakeStorage:
    def __init__(self):
        self.uploads: list[str] = []
        self.deleted: list[str] = []
        self.fail_delete = False

    async def upload(self, object_name, data, content_type=None):
        self.uploads.append(object_name)
        return f"https://storage.test/artworks/{object_name}"

    async def delete_images(self, urls):
        if self.fail_delete:
            return DeleteSummary(0, list(urls))
        self.deleted.extend(urls)
        return DeleteSummary(len(urls), [])


class FakeImageClient:
    def __init__(self):
        self.prompts: list[str] = []

    async def generate(self, prompt, context=None):
        self.prompts.append(prompt)
        return GeneratedImage(url=f"https://images.test/poster-{len(self.prompts)}.png")


class FakeAuthProvider:
    def __init__(self):
        self.has_service_credentials = True
        self.users: dict[str, AuthUser] = {}
        self.resent: list[tuple[str, str]] = []
        self.deleted: list[str] = []

    async def find_user_by_email(self, email):
        return self.users.get(email.lower())

    async def resend_signup_email(self, email, redirect_to):
        self.resent.append((email, redirect_to))

    async def delete_user(self, user_id):
        self.deleted.append(user_id)


async def fake_optional_user(authorization: str | None = Header(None)):
    if not authorization or not authorization.startswith("Bearer "):
        return None
    user_id = authorization[7:].strip()
    metadata = {"role": "admin"} if user_id.startswith("admin") else {}
    return AuthUser(id=user_id, email=f"{user_id}@example.com", user_metadata=metadata)


# -- Fixtures ------------------------------------------------------------------


@pytest.fixture
async def test_engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def llm():
    return MockAnthropicClient()


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def image_client():
    return FakeImageClient()


@pytest.fixture
def auth_provider():
    return FakeAuthProvider()


@pytest.fixture(autouse=True)
def reset_rate_limiters():
    auth_routes.check_email_limiter.reset()
    auth_routes.resend_limiter.reset()
    yield
    auth_routes.check_email_limiter.reset()
    auth_routes.resend_limiter.reset()


@pytest.fixture
async def client(test_session_factory, llm, storage, image_client, auth_provider):
    """FastAPI test client with DB, identity and external clients overridden."""

    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[dependencies.get_optional_user] = fake_optional_user
    app.dependency_overrides[dependencies.get_llm_client] = lambda: llm
    app.dependency_overrides[dependencies.get_storage] = lambda: storage
    app.dependency_overrides[dependencies.get_image_client] = lambda: image_client
    app.dependency_overrides[dependencies.get_auth_provider] = lambda: auth_provider

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def make_exhibition(test_db):
    """Insert an exhibition directly; returns the persisted row."""

    async def _make(user_id: str = OWNER, **fields) -> Exhibition:
        exhibition = Exhibition(
            user_id=user_id,
            title=fields.pop("title", "Blue Hour"),
            keywords=fields.pop("keywords", ["dusk", "blue"]),
            status=fields.pop("status", "draft"),
            is_public=fields.pop("is_public", False),
            **fields,
        )
        test_db.add(exhibition)
        await test_db.commit()
        await test_db.refresh(exhibition)
        return exhibition

    return _make
