"""API Dependencies — authentication, client IP, rate limits and shared clients.

Invariants:
    - get_current_user raises 401 when no valid bearer token is present
    - require_admin raises 403 for authenticated non-admins
    - External clients are process-wide singletons, closed on shutdown
    - Client IP: first X-Forwarded-For entry, else X-Real-IP, else "unknown"

Design Decisions:
    - Clients exposed as dependencies so tests swap them via app.dependency_overrides
    - Singleton clients: httpx/SDK clients are connection-pool-safe; one per process
      amortizes pool setup + TLS handshakes (ADR: shared client singleton)
    - Rate limiting as a dependency: it runs before body validation, so malformed
      requests still spend budget
"""

import logging
from typing import Callable

from fastapi import Depends, Header, Request

from curator.config import get_settings
from curator.core.errors import (
    AuthenticationRequiredError,
    PermissionDeniedError,
    RateLimitExceededError,
)
from curator.core.rate_limit import FixedWindowRateLimiter
from curator.infrastructure.anthropic_client import ResilientAnthropicClient
from curator.infrastructure.auth_provider import AuthProviderClient, AuthUser
from curator.infrastructure.image_client import PosterImageClient
from curator.infrastructure.object_storage import ObjectStorageClient

logger = logging.getLogger(__name__)

# --- Shared clients -----------------------------------------------------------

_anthropic_client: ResilientAnthropicClient | None = None
_image_client: PosterImageClient | None = None
_storage_client: ObjectStorageClient | None = None
_auth_client: AuthProviderClient | None = None


def get_llm_client() -> ResilientAnthropicClient:
    global _anthropic_client
    if _anthropic_client is None:
        settings = get_settings()
        _anthropic_client = ResilientAnthropicClient(
            api_key=settings.anthropic_api_key,
            model=settings.anthropic_model,
            max_retries=settings.anthropic_max_retries,
            base_delay_ms=settings.anthropic_base_delay_ms,
            max_delay_ms=settings.anthropic_max_delay_ms,
            timeout_seconds=settings.anthropic_timeout_seconds,
        )
    return _anthropic_client


def get_image_client() -> PosterImageClient:
    global _image_client
    if _image_client is None:
        settings = get_settings()
        _image_client = PosterImageClient(
            api_key=settings.openai_api_key,
            model=settings.openai_image_model,
            size=settings.poster_image_size,
            quality=settings.poster_image_quality,
        )
    return _image_client


def get_storage() -> ObjectStorageClient:
    global _storage_client
    if _storage_client is None:
        settings = get_settings()
        _storage_client = ObjectStorageClient(
            base_url=settings.auth_provider_url,
            service_key=settings.auth_provider_service_key,
            bucket=settings.storage_bucket,
            timeout_seconds=settings.http_timeout_seconds,
        )
    return _storage_client


def get_auth_provider() -> AuthProviderClient:
    global _auth_client
    if _auth_client is None:
        settings = get_settings()
        _auth_client = AuthProviderClient(
            base_url=settings.auth_provider_url,
            anon_key=settings.auth_provider_anon_key,
            service_key=settings.auth_provider_service_key,
            timeout_seconds=settings.http_timeout_seconds,
        )
    return _auth_client


async def close_clients() -> None:
    """Close every client that was created (lifespan shutdown)."""
    global _anthropic_client, _image_client, _storage_client, _auth_client
    for client in (_anthropic_client, _image_client, _storage_client, _auth_client):
        if client is not None:
            await client.close()
    _anthropic_client = _image_client = _storage_client = _auth_client = None


# --- Authentication -----------------------------------------------------------

async def get_optional_user(
    authorization: str | None = Header(None),
    auth: AuthProviderClient = Depends(get_auth_provider),
) -> AuthUser | None:
    """Caller resolved from the bearer token, or None for anonymous requests."""
    if not authorization or not authorization.lower().startswith("bearer "):
        return None
    token = authorization[7:].strip()
    if not token:
        return None
    return await auth.get_user(token)


async def get_current_user(
    user: AuthUser | None = Depends(get_optional_user),
) -> AuthUser:
    if user is None:
        raise AuthenticationRequiredError()
    return user


async def require_admin(user: AuthUser = Depends(get_current_user)) -> AuthUser:
    if not user.is_admin:
        raise PermissionDeniedError("Admin privileges required")
    return user


# --- Client IP + rate limiting ------------------------------------------------

def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    return "unknown"


def rate_limited(limiter: FixedWindowRateLimiter) -> Callable:
    """Dependency factory: 429 once the caller's IP exhausts `limiter`."""

    async def check(request: Request) -> None:
        key = client_ip(request)
        if not limiter.check(key):
            logger.warning(
                "Rate limit exceeded on %s", request.url.path,
                extra={"client_ip": key, "path": request.url.path},
            )
            raise RateLimitExceededError(limiter.retry_after_ms(key))

    return check
