"""
HTTP file bucket client.

Talks to a small bucket service that mimics a subset of an object store's
REST API: multipart PUT to upload, DELETE to remove. Requests are
authenticated with a static ``x-api-key`` header.
"""

import logging

import httpx

from portfolio_api.config import get_settings
from portfolio_api.core.exceptions import StoreDeleteError, StoreUploadError
from portfolio_api.storage.base import BlobStore

logger = logging.getLogger(__name__)


class HttpBucketStore(BlobStore):
    """
    File bucket reached over HTTP.

    Configured via FILE_BUCKET_* / BUCKET_* environment variables.
    """

    def __init__(
        self,
        endpoint: str | None = None,
        api_key: str | None = None,
        bucket_name: str | None = None,
        public_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the HTTP bucket client.

        Args:
            endpoint: Base URL of the bucket service
            api_key: Value sent in the x-api-key header
            bucket_name: Bucket to store objects in
            public_url: Base URL objects are served from
            timeout: Per-request timeout in seconds
            client: Pre-built httpx client (tests inject a mock transport)
        """
        settings = get_settings()
        self.endpoint = (endpoint or settings.FILE_BUCKET_ENDPOINT).rstrip("/")
        self.api_key = api_key or settings.FILE_BUCKET_API_KEY or ""
        self.bucket_name = bucket_name or settings.BUCKET_NAME
        self.public_url = (public_url or settings.public_bucket_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.BUCKET_TIMEOUT

        self.client = client or httpx.AsyncClient(
            base_url=self.endpoint,
            timeout=self.timeout,
        )

    @property
    def _headers(self) -> dict[str, str]:
        return {"x-api-key": self.api_key}

    async def upload(self, key: str, data: bytes) -> str:
        """Upload an image as a multipart form with a single ``file`` part."""
        try:
            response = await self.client.put(
                f"/{self.bucket_name}",
                files={"file": (key, data)},
                headers=self._headers,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Bucket rejected upload of {key}: HTTP {e.response.status_code}")
            raise StoreUploadError(key, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error(f"Error sending upload of {key} to bucket: {e!r}")
            raise StoreUploadError(key, str(e) or type(e).__name__) from e

        return self.get_url(key)

    async def delete(self, key: str) -> bool:
        try:
            response = await self.client.delete(
                f"/{self.bucket_name}/{key}",
                headers=self._headers,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Bucket rejected delete of {key}: HTTP {e.response.status_code}")
            raise StoreDeleteError(key, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error(f"Error sending delete of {key} to bucket: {e!r}")
            raise StoreDeleteError(key, str(e) or type(e).__name__) from e

        return True

    def get_url(self, key: str) -> str:
        return f"{self.public_url}/{key}"

    async def close(self) -> None:
        await self.client.aclose()
