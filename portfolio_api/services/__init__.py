"""
Business logic services for the portfolio API.
Services handle core operations separate from API endpoints.
"""

from portfolio_api.services.asset_coordinator import AssetCoordinator
from portfolio_api.services.catalog import CatalogService
from portfolio_api.services.saga import Saga, SagaStep
from portfolio_api.services.tag_service import TagService

__all__ = [
    "AssetCoordinator",
    "CatalogService",
    "Saga",
    "SagaStep",
    "TagService",
]
