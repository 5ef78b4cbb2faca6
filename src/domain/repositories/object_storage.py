"""Object storage protocol."""

from typing import Protocol


class IObjectStorage(Protocol):
    """Binary object store used for uploaded images."""

    async def upload(
        self, path: str, data: bytes, content_type: str = "application/octet-stream"
    ) -> None:
        """Store ``data`` at ``path``, overwriting any existing object."""
        ...

    async def get_download_url(self, path: str) -> str:
        """Public URL for the object at ``path``."""
        ...
