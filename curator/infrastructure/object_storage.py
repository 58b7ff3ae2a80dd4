"""Object Storage Client — httpx wrapper over a Supabase-compatible storage REST API.

Invariants:
    - Uploads are never upserts: generated names are unique per upload
    - delete_images never raises: failures are reported in the summary and logged
    - Public URLs have the form <base>/storage/v1/object/public/<bucket>/<path>

Design Decisions:
    - One batch DELETE for many objects (prefixes list) instead of one call per file
    - Path extraction by regex on the public URL: rows store URLs, not object keys
"""

import logging
import random
import re
import string
import time
from dataclasses import dataclass, field

import httpx

from curator.core.errors import StorageError

logger = logging.getLogger(__name__)


@dataclass
class DeleteSummary:
    deleted_count: int = 0
    failed_urls: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failed_urls


def generate_object_name(original_filename: str | None) -> str:
    """Safe storage name: <epoch-ms>-<6 random [a-z0-9]>.<ext> (ext defaults to jpg)."""
    ext = "jpg"
    if original_filename and "." in original_filename:
        candidate = original_filename.rsplit(".", 1)[1].lower()
        if candidate.isalnum():
            ext = candidate
    suffix = "".join(
        random.choices(string.ascii_lowercase + string.digits, k=6),  # nosec B311
    )
    return f"{int(time.time() * 1000)}-{suffix}.{ext}"


class ObjectStorageClient:
    """Upload, public URL and batch delete for one bucket."""

    def __init__(
        self,
        base_url: str,
        service_key: str,
        bucket: str = "artworks",
        timeout_seconds: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.service_key = service_key
        self.bucket = bucket
        self._path_re = re.compile(rf"/{re.escape(bucket)}/(.+)$")
        self._http = client or httpx.AsyncClient(timeout=timeout_seconds)

    def public_url(self, path: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{self.bucket}/{path}"

    def extract_file_path(self, url: str) -> str | None:
        match = self._path_re.search(url or "")
        return match.group(1) if match else None

    async def upload(
        self, path: str, data: bytes, content_type: str | None = None,
    ) -> str:
        """Upload bytes under `path`; returns the public URL."""
        await self._request(
            "POST", f"/storage/v1/object/{self.bucket}/{path}", "upload",
            content=data,
            headers={
                **self._headers(),
                "Content-Type": content_type or "application/octet-stream",
                "x-upsert": "false",
            },
        )
        return self.public_url(path)

    async def remove(self, paths: list[str]) -> None:
        if not paths:
            return
        await self._request(
            "DELETE", f"/storage/v1/object/{self.bucket}", "delete",
            json={"prefixes": paths},
            headers=self._headers(),
        )

    async def delete_images(self, urls: list[str]) -> DeleteSummary:
        """Delete the objects behind public URLs in one batch call."""
        summary = DeleteSummary()
        paths: list[str] = []
        path_urls: list[str] = []
        for url in urls:
            path = self.extract_file_path(url)
            if path is None:
                logger.warning(f"Could not extract storage path from URL: {url}")
                summary.failed_urls.append(url)
            else:
                paths.append(path)
                path_urls.append(url)

        if not paths:
            return summary
        try:
            await self.remove(paths)
            summary.deleted_count = len(paths)
        except StorageError as e:
            logger.error(f"Batch storage delete failed: {e.message}")
            summary.failed_urls.extend(path_urls)
        return summary

    async def close(self) -> None:
        await self._http.aclose()

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self.service_key,
            "Authorization": f"Bearer {self.service_key}",
        }

    async def _request(
        self, method: str, path: str, operation: str, **kwargs,
    ) -> httpx.Response:
        try:
            response = await self._http.request(
                method, f"{self.base_url}{path}", **kwargs,
            )
        except httpx.HTTPError as e:
            raise StorageError(str(e), operation)
        if response.is_error:
            raise StorageError(
                f"HTTP {response.status_code}: {response.text[:200]}", operation,
            )
        return response
