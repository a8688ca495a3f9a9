"""
Association tables for many-to-many relationships.
"""

from sqlalchemy import Column, ForeignKey, Integer, String, Table

from portfolio_api.db.base import Base

# Asset-Tag many-to-many association table
asset_tag_assoc = Table(
    "asset_tag_assoc",
    Base.metadata,
    Column(
        "filename",
        String(255),
        ForeignKey("assets.filename", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "tag_id",
        Integer,
        ForeignKey("tags.tag_id", ondelete="CASCADE"),
        primary_key=True,
    ),
)
