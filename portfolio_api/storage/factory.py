"""
Blob store factory.
Provides configuration-driven backend selection.
"""

from portfolio_api.config import Settings
from portfolio_api.storage.base import BlobStore
from portfolio_api.storage.http_bucket import HttpBucketStore
from portfolio_api.storage.local import LocalBlobStore


def create_blob_store(settings: Settings) -> BlobStore:
    """
    Build the configured blob store.

    Backend selection is based on the STORAGE_BACKEND setting. The caller
    owns the returned store and must close it.

    Raises:
        ValueError: If unknown storage backend is configured
    """
    backend = settings.STORAGE_BACKEND.lower()

    if backend == "http":
        return HttpBucketStore(
            endpoint=settings.FILE_BUCKET_ENDPOINT,
            api_key=settings.FILE_BUCKET_API_KEY,
            bucket_name=settings.BUCKET_NAME,
            public_url=settings.public_bucket_url,
            timeout=settings.BUCKET_TIMEOUT,
        )
    elif backend == "local":
        return LocalBlobStore(base_path=settings.LOCAL_STORAGE_PATH)
    else:
        raise ValueError(f"Unknown storage backend: {backend}")
