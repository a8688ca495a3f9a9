"""
Asset coordinator - keeps the database and the file bucket consistent.

The two systems cannot share a transaction, so publishing and retracting an
asset run as sagas. On publish the metadata is written before the bytes are
uploaded, and a failed upload deletes the metadata again. On retract the
metadata is deleted before the bytes; a failed bucket delete leaves an orphan
object behind, which is logged but never undone by re-inserting the row.
"""

import asyncio
import logging
from collections.abc import Awaitable, Iterable
from typing import TypeVar

from portfolio_api.core.exceptions import (
    ConflictError,
    MissingFieldError,
    StoreDeleteError,
    StoreUploadError,
    ValidationError,
)
from portfolio_api.core.security import is_valid_filename
from portfolio_api.db import queries
from portfolio_api.db.executor import QueryExecutor
from portfolio_api.services.saga import Saga, SagaStep
from portfolio_api.storage.base import BlobStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AssetCoordinator:
    """Publishes and retracts assets across the database and the file bucket."""

    def __init__(
        self,
        executor: QueryExecutor,
        blob_store: BlobStore,
        blob_timeout: float | None = None,
    ):
        self.executor = executor
        self.blob_store = blob_store
        self.blob_timeout = blob_timeout

    async def publish(
        self,
        filename: str,
        content: bytes,
        description: str,
        alt_text: str,
        tags: Iterable[str] | None = None,
    ) -> str:
        """
        Publish an image: write its metadata, then upload its bytes.

        Args:
            filename: Sanitized filename, used as the bucket key
            content: Image bytes
            description: Sanitized description
            alt_text: Sanitized alt text
            tags: Requested tag names; unknown names are dropped

        Returns:
            Success message naming the bucket location and any dropped tags

        Raises:
            ValidationError: If filename or content is missing or malformed
            ConflictError: If an asset with this filename already exists
            StoreUploadError: If the upload failed and the metadata was removed
            CompensationFailureError: If removing the metadata also failed
        """
        self._validate_publish(filename, content)
        requested = _unique(tags or [])

        known_tags = await self._check_publish_preconditions(filename)
        accepted = [tag for tag in requested if tag in known_tags]
        dropped = [tag for tag in requested if tag not in known_tags]
        if dropped:
            logger.warning(f"Dropping unknown tags for {filename}: {dropped}")

        bucket_url = self.blob_store.get_url(filename)

        async def write_metadata() -> None:
            associations = [queries.insert_association(filename, tag) for tag in accepted]
            batch = [queries.insert_asset(filename, bucket_url, description, alt_text), *associations]
            try:
                await self.executor.execute(batch)
            except ConflictError as e:
                raise ConflictError(
                    f"Image '{filename}' already exists in the database. Remove the "
                    "existing entry for this image or use a different filename.",
                    constraint=e.constraint,
                    detail=e.detail,
                ) from e

            # A tag removed after the pre-check links nothing
            vanished = [tag for tag, query in zip(accepted, associations) if query.rowcount == 0]
            if vanished:
                logger.warning(f"Tags removed while publishing {filename}, dropping: {vanished}")
                dropped.extend(vanished)

        async def remove_metadata() -> None:
            await self.executor.execute(queries.delete_asset_with_associations(filename))

        async def upload_blob() -> str:
            return await self._bounded(
                self.blob_store.upload(filename, content),
                StoreUploadError,
                filename,
            )

        saga = Saga(
            f"publish {filename}",
            [
                SagaStep("write metadata", write_metadata, compensation=remove_metadata),
                SagaStep("upload to bucket", upload_blob),
            ],
        )
        await saga.run()

        logger.info(f"Published {filename} to {bucket_url}")
        message = f"Successfully uploaded: {bucket_url}"
        if dropped:
            message += f". Dropped unknown tags: {', '.join(dropped)}"
        return message

    async def retract(self, filename: str | None) -> str:
        """
        Retract an image: delete its metadata, then delete its bytes.

        A missing row still deletes the bucket object, so a retract that
        failed at the bucket step can be retried.

        Raises:
            MissingFieldError: If no filename was given
            StoreDeleteError: If the metadata is gone but the bucket delete failed
        """
        if not filename:
            raise MissingFieldError("filename")

        async def delete_metadata() -> None:
            batch = queries.delete_asset_with_associations(filename)
            await self.executor.execute(batch)
            if batch[-1].rowcount == 0:
                logger.warning(f"No metadata found for {filename}; deleting from bucket only")

        async def delete_blob() -> bool:
            return await self._bounded(
                self.blob_store.delete(filename),
                StoreDeleteError,
                filename,
            )

        saga = Saga(
            f"retract {filename}",
            [
                SagaStep("delete metadata", delete_metadata),
                SagaStep("delete from bucket", delete_blob),
            ],
        )
        try:
            await saga.run()
        except StoreDeleteError:
            logger.error(
                f"Metadata for {filename} was removed but the bucket object was not; "
                "it is now an orphan awaiting cleanup"
            )
            raise

        logger.info(f"Retracted {filename}")
        return f"{filename} removed successfully."

    def _validate_publish(self, filename: str, content: bytes) -> None:
        if not filename:
            raise MissingFieldError("filename")
        if not content:
            raise MissingFieldError("file")
        if not is_valid_filename(filename):
            raise ValidationError(
                "Filename must be letters, digits, underscores or dashes followed by an extension",
                details={"filename": filename},
            )

    async def _check_publish_preconditions(self, filename: str) -> set[str]:
        """Reject duplicates and return the set of existing tag names."""
        existing = queries.fetch_asset(filename)
        tag_names = queries.fetch_all_tag_names()
        await self.executor.execute([existing, tag_names])

        if existing.rows:
            raise ConflictError(
                f"Image '{filename}' already exists in the database. Remove the "
                "existing entry for this image or use a different filename.",
                constraint="assets_pkey",
            )
        return {row["tag_name"] for row in tag_names.rows}

    async def _bounded(
        self,
        awaitable: Awaitable[T],
        error_cls: type[StoreUploadError] | type[StoreDeleteError],
        key: str,
    ) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=self.blob_timeout)
        except asyncio.TimeoutError as e:
            raise error_cls(key, f"timed out after {self.blob_timeout}s") from e


def _unique(names: Iterable[str]) -> list[str]:
    seen: dict[str, None] = {}
    for name in names:
        name = name.strip()
        if name:
            seen.setdefault(name, None)
    return list(seen)
