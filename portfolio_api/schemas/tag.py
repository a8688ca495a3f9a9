"""
Pydantic schemas for Tag request/response validation.
"""

from pydantic import BaseModel, ConfigDict, Field


class TagCreate(BaseModel):
    """Request schema for adding a tag."""

    tag_name: str = Field(
        ...,
        alias="tagName",
        min_length=1,
        max_length=50,
        pattern=r"^[a-z0-9-]+$",
        description="Lowercase letters, digits and dashes",
        examples=["animals"],
    )

    model_config = ConfigDict(populate_by_name=True)


class AssociationCreate(BaseModel):
    """Request schema for tagging an existing image."""

    filename: str = Field(..., min_length=1, max_length=255)
    tag_name: str = Field(..., alias="tagName", min_length=1, max_length=50)

    model_config = ConfigDict(populate_by_name=True)


class AssociationResponse(BaseModel):
    """One (filename, tag) pair."""

    filename: str
    tag_name: str = Field(alias="tagName")

    model_config = ConfigDict(populate_by_name=True)
