"""
API v1 Router - Aggregates all v1 endpoints.
Base Path: /api/v1
"""

from fastapi import APIRouter

from portfolio_api.api.v1 import art, health, tags, uploads

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(health.router, tags=["health"])
api_router.include_router(uploads.router, tags=["uploads"])
api_router.include_router(art.router, prefix="/db", tags=["art"])
api_router.include_router(tags.router, prefix="/db", tags=["tags"])
