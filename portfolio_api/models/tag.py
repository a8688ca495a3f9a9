"""
Tag SQLAlchemy model.
Tags are created and removed independently of assets.
"""

from typing import TYPE_CHECKING

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portfolio_api.db.base import Base

if TYPE_CHECKING:
    from portfolio_api.models.asset import Asset


class Tag(Base):
    """Named label used to group portfolio images."""
    __tablename__ = "tags"

    tag_id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    tag_name: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
        index=True,
        comment="Lowercase alphanumeric and dashes",
    )

    assets: Mapped[list["Asset"]] = relationship(
        "Asset",
        secondary="asset_tag_assoc",
        back_populates="tags",
        viewonly=True,
    )

    def __repr__(self) -> str:
        return f"<Tag(tag_name={self.tag_name})>"
