"""
Database handle for async SQLAlchemy.

The connection pool lives on an explicitly constructed ``Database`` object
with an ``open``/``close`` lifecycle. The application lifespan owns one and
hands it to the query executor; tests build their own.
PostgreSQL is the default, with SQLite fallback for dev.
"""

import logging

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine

from portfolio_api.config import Settings
from portfolio_api.db.base import Base

logger = logging.getLogger(__name__)


class Database:
    """Owner of the shared connection pool."""

    def __init__(
        self,
        url: str,
        echo: bool = False,
        pool_size: int = 5,
        max_overflow: int = 10,
    ):
        self.url = url
        self.echo = echo
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self._engine: AsyncEngine | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.active_database_url,
            echo=settings.DEBUG,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
        )

    @property
    def is_sqlite(self) -> bool:
        return "sqlite" in self.url

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not open")
        return self._engine

    async def open(self) -> None:
        """Create the engine and its connection pool."""
        if self._engine is not None:
            logger.error("Tried to open database pool, but pool was already open")
            return

        if self.is_sqlite:
            engine = create_async_engine(
                self.url,
                echo=self.echo,
                connect_args={"check_same_thread": False},
            )

            # SQLite does NOT enforce foreign keys by default.
            @event.listens_for(engine.sync_engine, "connect")
            def _set_sqlite_pragma(dbapi_connection, connection_record):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()
        else:
            engine = create_async_engine(
                self.url,
                echo=self.echo,
                pool_size=self.pool_size,
                max_overflow=self.max_overflow,
                pool_pre_ping=True,
            )

        self._engine = engine
        logger.info("Database pool open")

    async def close(self) -> None:
        """Dispose of the pool. Safe to call on a closed handle."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        logger.info("Database pool closed")

    async def connect(self) -> AsyncConnection:
        """Check a connection out of the pool. The caller must close it."""
        return await self.engine.connect()

    async def create_schema(self) -> None:
        """Create all tables (SQLite development fallback and tests)."""
        # Import all models to register them
        from portfolio_api.models import Asset, Tag, asset_tag_assoc  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_schema(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def ping(self) -> None:
        """Run a trivial query; raises if the database is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
