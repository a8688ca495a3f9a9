"""
Pydantic schemas for asset request/response validation.
"""

from pydantic import BaseModel, ConfigDict, Field


class AssetResponse(BaseModel):
    """Response schema for a single portfolio image."""

    filename: str
    bucket_url: str = Field(alias="bucketUrl")
    description: str
    alt_text: str = Field(alias="altText")

    model_config = ConfigDict(
        populate_by_name=True,
    )


class MessageResponse(BaseModel):
    """Response schema for mutations: a single human-readable message."""

    message: str
