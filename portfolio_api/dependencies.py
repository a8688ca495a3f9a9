"""
FastAPI dependency injection functions.

The database handle and the blob store are created by the application
lifespan and kept on ``app.state``; everything else is built per request
on top of them. Tests override ``get_database`` and ``get_blob_store``.
"""

from typing import Annotated

from fastapi import Depends, Request

from portfolio_api.config import Settings, get_settings
from portfolio_api.db.executor import QueryExecutor
from portfolio_api.db.session import Database
from portfolio_api.services.asset_coordinator import AssetCoordinator
from portfolio_api.services.catalog import CatalogService
from portfolio_api.services.tag_service import TagService
from portfolio_api.storage.base import BlobStore


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_blob_store(request: Request) -> BlobStore:
    return request.app.state.blob_store


AppSettings = Annotated[Settings, Depends(get_settings)]


def get_executor(
    database: Annotated[Database, Depends(get_database)],
    settings: AppSettings,
) -> QueryExecutor:
    return QueryExecutor(
        database,
        acquire_timeout=settings.DB_ACQUIRE_TIMEOUT,
        batch_timeout=settings.DB_BATCH_TIMEOUT,
    )


Executor = Annotated[QueryExecutor, Depends(get_executor)]


def get_coordinator(
    executor: Executor,
    blob_store: Annotated[BlobStore, Depends(get_blob_store)],
    settings: AppSettings,
) -> AssetCoordinator:
    return AssetCoordinator(executor, blob_store, blob_timeout=settings.BUCKET_TIMEOUT)


def get_catalog(executor: Executor) -> CatalogService:
    return CatalogService(executor)


def get_tag_service(executor: Executor) -> TagService:
    return TagService(executor)


# Type aliases for cleaner endpoint signatures
DatabaseHandle = Annotated[Database, Depends(get_database)]
Coordinator = Annotated[AssetCoordinator, Depends(get_coordinator)]
Catalog = Annotated[CatalogService, Depends(get_catalog)]
Tags = Annotated[TagService, Depends(get_tag_service)]
