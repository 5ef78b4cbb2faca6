"""Supabase Storage implementation of the object store."""

from urllib.parse import quote

import httpx
import structlog

from core.config import settings
from core.exceptions import StorageError

logger = structlog.get_logger()


class SupabaseObjectStorage:
    """Object store backed by a Supabase Storage bucket.

    Uploads use the service role key, so the bucket can stay write-protected
    for browsers. The bucket is expected to be public for reads.
    """

    def __init__(
        self,
        base_url: str = settings.supabase_url,
        service_key: str = settings.supabase_service_role_key,
        bucket: str = settings.storage_bucket,
        timeout: float = settings.http_timeout_seconds,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._service_key = service_key
        self._bucket = bucket
        self._timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=f"{self._base_url}/storage/v1",
            headers={
                "apikey": self._service_key,
                "Authorization": f"Bearer {self._service_key}",
            },
            timeout=self._timeout,
            transport=self._transport,
        )

    async def upload(
        self, path: str, data: bytes, content_type: str = "application/octet-stream"
    ) -> None:
        """Upload (or overwrite) an object."""
        try:
            async with self._client() as client:
                response = await client.post(
                    f"/object/{self._bucket}/{quote(path)}",
                    content=data,
                    headers={"Content-Type": content_type, "x-upsert": "true"},
                )
        except httpx.HTTPError as exc:
            raise StorageError(f"Object storage unreachable: {exc}") from exc

        if response.status_code >= 400:
            logger.warning(
                "storage_upload_failed",
                path=path,
                status_code=response.status_code,
            )
            raise StorageError(f"Upload failed with HTTP {response.status_code}")

        logger.info("storage_upload_completed", path=path, size=len(data))

    async def get_download_url(self, path: str) -> str:
        """Public URL of an object in the bucket."""
        return f"{self._base_url}/storage/v1/object/public/{self._bucket}/{quote(path)}"
