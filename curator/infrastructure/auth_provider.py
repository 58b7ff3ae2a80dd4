"""Auth Provider Client — httpx wrapper over a Supabase-compatible GoTrue REST API.

Invariants:
    - Accounts, sessions and passwords live with the provider; we only read users
      and trigger provider-side actions (resend, delete)
    - A rejected bearer token (401/403) yields None, never an exception
    - Every other transport or HTTP failure maps to AuthProviderError
    - Admin endpoints require the service role key (has_service_credentials)

Design Decisions:
    - httpx.AsyncClient injected for tests (httpx.MockTransport), created lazily otherwise
    - Role read from user_metadata.role: the provider is the source of truth for admins
"""

import logging
from dataclasses import dataclass, field

import httpx

from curator.core.domain_types import Role
from curator.core.errors import AuthProviderError

logger = logging.getLogger(__name__)

_ADMIN_PAGE_SIZE = 1000


@dataclass(frozen=True)
class AuthUser:
    id: str
    email: str | None = None
    user_metadata: dict = field(default_factory=dict)
    email_confirmed_at: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.user_metadata.get("role") == Role.ADMIN.value

    @property
    def is_confirmed(self) -> bool:
        return self.email_confirmed_at is not None

    @classmethod
    def from_payload(cls, data: dict) -> "AuthUser":
        return cls(
            id=str(data["id"]),
            email=data.get("email"),
            user_metadata=data.get("user_metadata") or {},
            email_confirmed_at=data.get("email_confirmed_at"),
        )


class AuthProviderClient:
    """Token verification and admin user operations."""

    def __init__(
        self,
        base_url: str,
        anon_key: str,
        service_key: str = "",
        timeout_seconds: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.anon_key = anon_key
        self.service_key = service_key
        self._http = client or httpx.AsyncClient(timeout=timeout_seconds)

    @property
    def has_service_credentials(self) -> bool:
        return bool(self.base_url and self.service_key)

    # ─── Public API ──────────────────────────────────────────────

    async def get_user(self, access_token: str) -> AuthUser | None:
        """Resolve a bearer token to its user; None when the token is rejected."""
        response = await self._request(
            "GET", "/auth/v1/user", "get_user",
            headers={
                "apikey": self.anon_key,
                "Authorization": f"Bearer {access_token}",
            },
            allow_status=(401, 403),
        )
        if response.status_code in (401, 403):
            return None
        return AuthUser.from_payload(response.json())

    async def find_user_by_email(self, email: str) -> AuthUser | None:
        """Case-insensitive email lookup through the admin users listing."""
        target = email.strip().lower()
        page = 1
        while True:
            response = await self._request(
                "GET", "/auth/v1/admin/users", "list_users",
                headers=self._admin_headers(),
                params={"page": page, "per_page": _ADMIN_PAGE_SIZE},
            )
            users = response.json().get("users", [])
            for data in users:
                if (data.get("email") or "").lower() == target:
                    return AuthUser.from_payload(data)
            if len(users) < _ADMIN_PAGE_SIZE:
                return None
            page += 1

    async def resend_signup_email(self, email: str, redirect_to: str) -> None:
        await self._request(
            "POST", "/auth/v1/resend", "resend",
            headers={"apikey": self.anon_key},
            params={"redirect_to": redirect_to},
            json={"type": "signup", "email": email},
        )

    async def delete_user(self, user_id: str) -> None:
        await self._request(
            "DELETE", f"/auth/v1/admin/users/{user_id}", "delete_user",
            headers=self._admin_headers(),
        )

    async def close(self) -> None:
        await self._http.aclose()

    # ─── Internals ───────────────────────────────────────────────

    def _admin_headers(self) -> dict[str, str]:
        if not self.has_service_credentials:
            raise AuthProviderError("Service credentials not configured", "admin")
        return {
            "apikey": self.service_key,
            "Authorization": f"Bearer {self.service_key}",
        }

    async def _request(
        self, method: str, path: str, operation: str,
        allow_status: tuple[int, ...] = (), **kwargs,
    ) -> httpx.Response:
        try:
            response = await self._http.request(
                method, f"{self.base_url}{path}", **kwargs,
            )
        except httpx.HTTPError as e:
            logger.error(f"Auth provider {operation} transport error: {e}")
            raise AuthProviderError(str(e), operation)
        if response.status_code in allow_status:
            return response
        if response.is_error:
            logger.error(
                f"Auth provider {operation} returned {response.status_code}",
            )
            raise AuthProviderError(
                f"HTTP {response.status_code}: {response.text[:200]}", operation,
            )
        return response
