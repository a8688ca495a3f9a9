"""
Tag service - Business logic for tag operations.
"""

import logging

from portfolio_api.core.exceptions import ConflictError, NotFoundError, ValidationError
from portfolio_api.core.security import is_valid_tag_name
from portfolio_api.db import queries
from portfolio_api.db.executor import QueryExecutor

logger = logging.getLogger(__name__)


class TagService:
    """Service class for tag and association mutations."""

    def __init__(self, executor: QueryExecutor):
        self.executor = executor

    async def add_tag(self, tag_name: str) -> str:
        """
        Add a new tag.

        Raises:
            ValidationError: If the name is not lowercase alphanumeric + dash
            ConflictError: If the tag already exists
        """
        if not is_valid_tag_name(tag_name):
            raise ValidationError(
                "Tag names must be lowercase letters, digits and dashes",
                details={"tag_name": tag_name},
            )
        try:
            await self.executor.execute([queries.insert_tag(tag_name)])
        except ConflictError as e:
            raise ConflictError(
                f"Tag '{tag_name}' already exists",
                constraint=e.constraint,
                detail=e.detail,
            ) from e

        logger.info(f"Added tag {tag_name}")
        return f"Tag '{tag_name}' added successfully."

    async def remove_tag(self, tag_name: str) -> str:
        """
        Remove a tag and every association that references it.

        Assets left without tags are kept.

        Raises:
            NotFoundError: If the tag does not exist
        """
        batch = queries.delete_tag_with_associations(tag_name)
        await self.executor.execute(batch)
        if batch[-1].rowcount == 0:
            raise NotFoundError(f"Tag '{tag_name}' not found", details={"tag_name": tag_name})

        logger.info(f"Removed tag {tag_name}")
        return f"Tag '{tag_name}' removed successfully."

    async def add_association(self, filename: str, tag_name: str) -> str:
        """
        Associate an existing asset with an existing tag.

        Raises:
            NotFoundError: If either the asset or the tag does not exist
            ConflictError: If the association already exists
        """
        query = queries.insert_association(filename, tag_name)
        try:
            await self.executor.execute([query])
        except ConflictError as e:
            raise ConflictError(
                f"'{filename}' is already tagged '{tag_name}'",
                constraint=e.constraint,
                detail=e.detail,
            ) from e

        if query.rowcount == 0:
            raise NotFoundError(
                f"Image '{filename}' or tag '{tag_name}' not found",
                details={"filename": filename, "tag_name": tag_name},
            )
        return f"Tagged '{filename}' with '{tag_name}'."

    async def remove_association(self, filename: str, tag_name: str) -> str:
        query = queries.delete_association(filename, tag_name)
        await self.executor.execute([query])
        if query.rowcount == 0:
            raise NotFoundError(
                f"'{filename}' is not tagged '{tag_name}'",
                details={"filename": filename, "tag_name": tag_name},
            )
        return f"Removed tag '{tag_name}' from '{filename}'."
