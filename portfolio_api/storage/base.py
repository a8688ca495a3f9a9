"""
Abstract blob store interface.
Defines the contract for all file bucket implementations.
"""

from abc import ABC, abstractmethod


class BlobStore(ABC):
    """
    Abstract base class for blob stores.

    A blob store holds image bytes in a flat namespace keyed by filename.
    It has no transactional semantics: each call either fully succeeds or
    raises, and nothing is retried internally.
    """

    @abstractmethod
    async def upload(self, key: str, data: bytes) -> str:
        """
        Upload an object to the bucket.

        Args:
            key: Object key (the sanitized filename)
            data: Raw file bytes

        Returns:
            Location of the stored object

        Raises:
            StoreUploadError: On any non-2xx response or transport failure
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Delete an object from the bucket.

        Args:
            key: Object key

        Returns:
            True once the bucket acknowledged the delete

        Raises:
            StoreDeleteError: On any non-2xx response or transport failure
        """
        pass

    @abstractmethod
    def get_url(self, key: str) -> str:
        """Public URL the object is served from."""
        pass

    async def close(self) -> None:
        """Release any client resources held by the store."""
        return None
