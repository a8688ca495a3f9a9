"""
Health endpoint.
No authentication required.
"""

import logging

from fastapi import APIRouter
from sqlalchemy.exc import SQLAlchemyError

from portfolio_api.dependencies import DatabaseHandle

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(database: DatabaseHandle):
    """
    Service health check endpoint.

    Returns:
        {"status": "ok", "database": ...} when service is healthy
        {"status": "degraded", "issues": [...]} when there are issues
    """
    try:
        await database.ping()
    except (SQLAlchemyError, OSError, RuntimeError) as e:
        logger.warning(f"Health check failed: {e}")
        return {
            "status": "degraded",
            "issues": [f"Database: {e}"],
        }

    return {
        "status": "ok",
        "database": "sqlite (dev fallback)" if database.is_sqlite else "postgresql",
    }
