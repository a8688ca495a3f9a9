"""
Pydantic schemas for request/response validation.
"""

from portfolio_api.schemas.asset import AssetResponse, MessageResponse
from portfolio_api.schemas.tag import AssociationCreate, AssociationResponse, TagCreate
from portfolio_api.schemas.error import ErrorResponse

__all__ = [
    "AssetResponse",
    "MessageResponse",
    "TagCreate",
    "AssociationCreate",
    "AssociationResponse",
    "ErrorResponse",
]
