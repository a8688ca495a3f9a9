"""
Catalog service - read-only queries over portfolio metadata.

Read paths bypass the asset coordinator and go straight to the query
library. Rows come back as fresh dicts owned by the caller.
"""

from typing import Any

from portfolio_api.db import queries
from portfolio_api.db.executor import QueryExecutor


class CatalogService:
    """Service class for listing assets, tags and associations."""

    def __init__(self, executor: QueryExecutor):
        self.executor = executor

    async def list_all_assets(self) -> list[dict[str, Any]]:
        return await self.executor.fetch(queries.fetch_all_assets())

    async def list_assets_by_tag(self, tag_name: str) -> list[dict[str, Any]]:
        """Every asset associated with ``tag_name``."""
        return await self.executor.fetch(queries.fetch_assets_by_tag(tag_name))

    async def list_untagged_assets(self) -> list[dict[str, Any]]:
        """Assets that have no tag association at all."""
        return await self.executor.fetch(queries.fetch_untagged_assets())

    async def list_all_tag_names(self) -> list[str]:
        rows = await self.executor.fetch(queries.fetch_all_tag_names())
        return [row["tag_name"] for row in rows]

    async def list_all_filenames(self) -> list[str]:
        rows = await self.executor.fetch(queries.fetch_all_filenames())
        return [row["filename"] for row in rows]

    async def list_all_associations(self) -> list[dict[str, Any]]:
        """(filename, tag_name) pairs."""
        return await self.executor.fetch(queries.fetch_all_associations())
