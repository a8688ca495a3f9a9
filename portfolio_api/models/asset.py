"""
Asset SQLAlchemy model.
One row per uploaded image; the filename doubles as the file bucket key.
"""

from typing import TYPE_CHECKING

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portfolio_api.db.base import Base

if TYPE_CHECKING:
    from portfolio_api.models.tag import Tag


class Asset(Base):
    """Image metadata row mirrored by an object in the file bucket."""
    __tablename__ = "assets"

    filename: Mapped[str] = mapped_column(
        String(255),
        primary_key=True,
        comment="Sanitized filename, also the file bucket key",
    )
    bucket_url: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        comment="Fully-qualified location of the image in the file bucket",
    )
    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        comment="HTML-sanitized description",
    )
    alt_text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        comment="HTML-sanitized alt text",
    )

    tags: Mapped[list["Tag"]] = relationship(
        "Tag",
        secondary="asset_tag_assoc",
        back_populates="assets",
        viewonly=True,
    )

    def __repr__(self) -> str:
        return f"<Asset(filename={self.filename})>"
