"""
Portfolio Art API - Main Application Entry Point.

Backend for a personal art-portfolio site: image uploads with metadata,
kept in sync between a relational database and an external file bucket.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from portfolio_api import __version__
from portfolio_api.api.v1.router import api_router
from portfolio_api.config import Settings, get_settings
from portfolio_api.core.exceptions import PortfolioAPIException
from portfolio_api.core.middleware import RequestLoggingMiddleware
from portfolio_api.db.session import Database
from portfolio_api.storage.factory import create_blob_store

logger = logging.getLogger(__name__)

# Messages returned to clients for infrastructure failures.
# Full details only go to the server log.
GENERIC_ERROR_MESSAGES = {
    "store_upload_failure": "The upload failed. Please try again later.",
    "store_delete_failure": "The image metadata was removed but the file could not be deleted from the bucket.",
    "compensation_failure": "The upload failed and could not be fully undone. Manual cleanup may be required.",
    "db_connection_failure": "The database is unavailable. Please try again later.",
}
DEFAULT_ERROR_MESSAGE = "An internal database error occurred."


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


async def portfolio_exception_handler(request: Request, exc: PortfolioAPIException) -> JSONResponse:
    """
    Render portfolio API exceptions.

    Client errors carry their own message. Infrastructure errors are logged
    with full detail and the client receives a generic message.
    """
    if exc.is_client_error:
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    logger.error(
        f"{request.method} {request.url.path} failed with {exc.error}: {exc.message}",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.error,
            "message": GENERIC_ERROR_MESSAGES.get(exc.error, DEFAULT_ERROR_MESSAGE),
        },
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Catch-all exception handler for unexpected errors.
    Logs the full error but returns a sanitized response.
    """
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_error",
            "message": "An unexpected error occurred",
        },
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """
        Application lifespan manager.
        Opens the database pool and the blob store, closes them on shutdown.
        """
        logger.info(f"Starting {settings.PROJECT_NAME}")
        logger.info(f"Storage backend: {settings.STORAGE_BACKEND}")
        logger.info(f"Dev mode (bypass API key): {settings.DEV_MODE}")

        database = Database.from_settings(settings)
        await database.open()

        if database.is_sqlite:
            logger.warning("[DEV MODE] Using SQLite fallback database")
            logger.info("Creating SQLite development tables...")
            await database.create_schema()
            logger.info("Development database ready")
        else:
            logger.info("Database: PostgreSQL")

        blob_store = create_blob_store(settings)

        app.state.database = database
        app.state.blob_store = blob_store

        try:
            yield
        finally:
            logger.info(f"Shutting down {settings.PROJECT_NAME}")
            await blob_store.close()
            await database.close()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="""
## Portfolio Art API

Backend for a personal art-portfolio site.

### Features
- **Uploads**: Images go to the file bucket, metadata to the database
- **Tagging**: Filter the portfolio by tag
- **Consistency**: Failed uploads roll back their metadata
        """,
        version=__version__,
        openapi_tags=[
            {"name": "uploads", "description": "Image upload and delete"},
            {"name": "art", "description": "Portfolio read operations"},
            {"name": "tags", "description": "Tag management operations"},
            {"name": "health", "description": "Service health checks"},
        ],
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(PortfolioAPIException, portfolio_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(api_router, prefix=settings.API_V1_PREFIX)

    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "name": settings.PROJECT_NAME,
            "version": __version__,
            "docs": "/docs",
            "api": settings.API_V1_PREFIX,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "portfolio_api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=get_settings().DEBUG,
    )
