"""SQLAlchemy ORM models for the portfolio API."""

from portfolio_api.models.asset import Asset
from portfolio_api.models.tag import Tag
from portfolio_api.models.associations import asset_tag_assoc

__all__ = [
    "Asset",
    "Tag",
    "asset_tag_assoc",
]
