"""
Pytest configuration and fixtures for portfolio API tests.
"""

import asyncio
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from portfolio_api.config import Settings, get_settings
from portfolio_api.db import queries
from portfolio_api.db.executor import QueryExecutor
from portfolio_api.db.session import Database
from portfolio_api.dependencies import get_blob_store, get_database
from portfolio_api.main import create_app
from portfolio_api.services.asset_coordinator import AssetCoordinator
from portfolio_api.services.catalog import CatalogService
from portfolio_api.storage.base import BlobStore

TEST_API_KEY = "test-backend-key"
BUCKET_URL = "https://bucket.test/portfolio-images"

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64
GIF_BYTES = b"GIF89a" + b"\x00" * 64


class FakeBlobStore(BlobStore):
    """In-memory blob store with failure injection and a call log."""

    def __init__(self) -> None:
        self.objects: dict[str, bytes] = {}
        self.calls: list[tuple[str, str]] = []
        self.upload_error: Exception | None = None
        self.delete_error: Exception | None = None
        self.delay: float = 0

    async def upload(self, key: str, data: bytes) -> str:
        self.calls.append(("upload", key))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.upload_error is not None:
            raise self.upload_error
        self.objects[key] = data
        return self.get_url(key)

    async def delete(self, key: str) -> bool:
        self.calls.append(("delete", key))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.delete_error is not None:
            raise self.delete_error
        self.objects.pop(key, None)
        return True

    def get_url(self, key: str) -> str:
        return f"{BUCKET_URL}/{key}"


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Get test settings."""
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        STORAGE_BACKEND="local",
        LOCAL_STORAGE_PATH=str(tmp_path / "storage"),
        BACKEND_API_KEY=TEST_API_KEY,
        DEV_MODE=False,
        MAX_UPLOAD_SIZE=64 * 1024,
        DB_ACQUIRE_TIMEOUT=5,
        DB_BATCH_TIMEOUT=5,
        BUCKET_TIMEOUT=5,
    )


@pytest_asyncio.fixture
async def database(test_settings: Settings) -> AsyncGenerator[Database, None]:
    """Open a database on a fresh SQLite file with the schema created."""
    db = Database(test_settings.active_database_url)
    await db.open()
    await db.create_schema()

    yield db

    await db.close()


@pytest.fixture
def executor(database: Database) -> QueryExecutor:
    return QueryExecutor(database, acquire_timeout=5, batch_timeout=5)


@pytest.fixture
def blob_store() -> FakeBlobStore:
    return FakeBlobStore()


@pytest.fixture
def coordinator(executor: QueryExecutor, blob_store: FakeBlobStore) -> AssetCoordinator:
    return AssetCoordinator(executor, blob_store, blob_timeout=5)


@pytest.fixture
def catalog(executor: QueryExecutor) -> CatalogService:
    return CatalogService(executor)


@pytest_asyncio.fixture
async def seed_tags(executor: QueryExecutor) -> list[str]:
    """Create the tags most tests rely on."""
    names = ["animals", "cats", "landscapes"]
    await executor.execute([queries.insert_tag(name) for name in names])
    return names


@pytest.fixture
def app(test_settings: Settings, database: Database, blob_store: FakeBlobStore) -> FastAPI:
    """Application wired to the test database and the fake blob store."""
    app = create_app(test_settings)
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_database] = lambda: database
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    return app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Headers carrying the backend API key."""
    return {"x-api-key": TEST_API_KEY}


@pytest.fixture
def png_bytes() -> bytes:
    """Minimal content with a PNG magic number."""
    return PNG_BYTES


@pytest.fixture
def jpeg_bytes() -> bytes:
    return JPEG_BYTES


@pytest.fixture
def gif_bytes() -> bytes:
    return GIF_BYTES
