"""Initial portfolio schema

Adds:
- assets (filename PK, bucket_url, description, alt_text)
- tags (tag_id PK, unique tag_name)
- asset_tag_assoc (filename, tag_id) with cascading foreign keys

Revision ID: 001
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "assets",
        sa.Column("filename", sa.String(255), primary_key=True, comment="Sanitized filename, also the file bucket key"),
        sa.Column("bucket_url", sa.String(1024), nullable=False, comment="Fully-qualified location of the image in the file bucket"),
        sa.Column("description", sa.Text(), nullable=False, server_default="", comment="HTML-sanitized description"),
        sa.Column("alt_text", sa.Text(), nullable=False, server_default="", comment="HTML-sanitized alt text"),
    )

    op.create_table(
        "tags",
        sa.Column("tag_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("tag_name", sa.String(50), nullable=False, comment="Lowercase alphanumeric and dashes"),
    )
    op.create_index("ix_tags_tag_name", "tags", ["tag_name"], unique=True)

    op.create_table(
        "asset_tag_assoc",
        sa.Column(
            "filename",
            sa.String(255),
            sa.ForeignKey("assets.filename", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "tag_id",
            sa.Integer(),
            sa.ForeignKey("tags.tag_id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )


def downgrade() -> None:
    op.drop_table("asset_tag_assoc")
    op.drop_index("ix_tags_tag_name", table_name="tags")
    op.drop_table("tags")
    op.drop_table("assets")
