"""
Local filesystem blob store.
Stores images on the local filesystem for development and tests.
"""

from pathlib import Path

import aiofiles
import aiofiles.os

from portfolio_api.config import get_settings
from portfolio_api.core.exceptions import StoreDeleteError, StoreUploadError
from portfolio_api.storage.base import BlobStore


class LocalBlobStore(BlobStore):
    """
    Local filesystem implementation.

    Objects are stored flat under the configured LOCAL_STORAGE_PATH directory.
    """

    def __init__(self, base_path: str | None = None, public_url: str = "/storage"):
        """
        Initialize local blob store.

        Args:
            base_path: Base directory for storage. Defaults to settings.LOCAL_STORAGE_PATH
            public_url: URL prefix the directory is served under
        """
        self.base_path = Path(base_path or get_settings().LOCAL_STORAGE_PATH)
        self.public_url = public_url.rstrip("/")
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _get_full_path(self, key: str) -> Path:
        return self.base_path / key

    async def upload(self, key: str, data: bytes) -> str:
        full_path = self._get_full_path(key)
        try:
            async with aiofiles.open(full_path, "wb") as f:
                await f.write(data)
        except OSError as e:
            raise StoreUploadError(key, str(e)) from e
        return self.get_url(key)

    async def delete(self, key: str) -> bool:
        full_path = self._get_full_path(key)
        try:
            await aiofiles.os.remove(full_path)
        except OSError as e:
            raise StoreDeleteError(key, str(e)) from e
        return True

    async def exists(self, key: str) -> bool:
        """Check whether an object is stored under ``key``."""
        return self._get_full_path(key).exists()

    async def read(self, key: str) -> bytes:
        """
        Read an object back from disk.

        Raises:
            FileNotFoundError: If no object is stored under ``key``
        """
        async with aiofiles.open(self._get_full_path(key), "rb") as f:
            return await f.read()

    def get_url(self, key: str) -> str:
        return f"{self.public_url}/{key}"
