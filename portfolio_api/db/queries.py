"""
Metadata query library.

Canonical parameterized statements for the assets, tags and association
tables. Every place that joins assets to tags goes through these templates
so the join semantics stay identical between the coordinator and the read
endpoints. Each helper returns a fresh ``BatchQuery`` ready to be submitted
to the ``QueryExecutor``.
"""

from sqlalchemy import and_, bindparam, delete, exists, insert, select, true

from portfolio_api.db.executor import BatchQuery
from portfolio_api.models import Asset, Tag, asset_tag_assoc

ASSET_COLUMNS = (Asset.filename, Asset.bucket_url, Asset.description, Asset.alt_text)

# ===================
# Read templates
# ===================

SELECT_ALL_ASSETS = select(*ASSET_COLUMNS).order_by(Asset.filename)

SELECT_ASSET_BY_FILENAME = select(*ASSET_COLUMNS).where(
    Asset.filename == bindparam("filename")
)

# Join tag to association on tag name, then on tag id, then to assets
SELECT_ASSETS_BY_TAG = (
    select(*ASSET_COLUMNS)
    .select_from(Tag)
    .join(
        asset_tag_assoc,
        and_(
            Tag.tag_name == bindparam("tag_name"),
            Tag.tag_id == asset_tag_assoc.c.tag_id,
        ),
    )
    .join(Asset, Asset.filename == asset_tag_assoc.c.filename)
    .order_by(Asset.filename)
)

SELECT_UNTAGGED_ASSETS = (
    select(*ASSET_COLUMNS)
    .where(~exists().where(asset_tag_assoc.c.filename == Asset.filename))
    .order_by(Asset.filename)
)

SELECT_ALL_TAG_NAMES = select(Tag.tag_name).order_by(Tag.tag_name)

SELECT_ALL_FILENAMES = select(Asset.filename).order_by(Asset.filename)

SELECT_ALL_ASSOCIATIONS = (
    select(asset_tag_assoc.c.filename, Tag.tag_name)
    .join(Tag, Tag.tag_id == asset_tag_assoc.c.tag_id)
    .order_by(asset_tag_assoc.c.filename, Tag.tag_name)
)

# ===================
# Write templates
# ===================

INSERT_ASSET = insert(Asset)

# Inserts nothing unless both the asset and the tag exist
INSERT_ASSOCIATION = insert(asset_tag_assoc).from_select(
    ["filename", "tag_id"],
    select(Asset.filename, Tag.tag_id)
    .join_from(Asset, Tag, true())
    .where(
        Asset.filename == bindparam("assoc_filename"),
        Tag.tag_name == bindparam("assoc_tag_name"),
    ),
)

_TAG_ID_BY_NAME = select(Tag.tag_id).where(Tag.tag_name == bindparam("tag_name"))

DELETE_ASSOCIATIONS_FOR_ASSET = delete(asset_tag_assoc).where(
    asset_tag_assoc.c.filename == bindparam("filename")
)

DELETE_ASSET = delete(Asset).where(Asset.filename == bindparam("filename"))

INSERT_TAG = insert(Tag)

DELETE_ASSOCIATIONS_FOR_TAG = delete(asset_tag_assoc).where(
    asset_tag_assoc.c.tag_id.in_(_TAG_ID_BY_NAME.scalar_subquery())
)

DELETE_TAG = delete(Tag).where(Tag.tag_name == bindparam("tag_name"))

DELETE_ASSOCIATION = delete(asset_tag_assoc).where(
    asset_tag_assoc.c.filename == bindparam("filename"),
    asset_tag_assoc.c.tag_id.in_(_TAG_ID_BY_NAME.scalar_subquery()),
)


def fetch_all_assets() -> BatchQuery:
    return BatchQuery(SELECT_ALL_ASSETS)


def fetch_asset(filename: str) -> BatchQuery:
    return BatchQuery(SELECT_ASSET_BY_FILENAME, {"filename": filename})


def fetch_assets_by_tag(tag_name: str) -> BatchQuery:
    return BatchQuery(SELECT_ASSETS_BY_TAG, {"tag_name": tag_name})


def fetch_untagged_assets() -> BatchQuery:
    return BatchQuery(SELECT_UNTAGGED_ASSETS)


def fetch_all_tag_names() -> BatchQuery:
    return BatchQuery(SELECT_ALL_TAG_NAMES)


def fetch_all_filenames() -> BatchQuery:
    return BatchQuery(SELECT_ALL_FILENAMES)


def fetch_all_associations() -> BatchQuery:
    return BatchQuery(SELECT_ALL_ASSOCIATIONS)


def insert_asset(filename: str, bucket_url: str, description: str, alt_text: str) -> BatchQuery:
    return BatchQuery(
        INSERT_ASSET,
        {
            "filename": filename,
            "bucket_url": bucket_url,
            "description": description,
            "alt_text": alt_text,
        },
    )


def insert_association(filename: str, tag_name: str) -> BatchQuery:
    return BatchQuery(
        INSERT_ASSOCIATION,
        {"assoc_filename": filename, "assoc_tag_name": tag_name},
    )


def delete_asset_with_associations(filename: str) -> list[BatchQuery]:
    """Associations first, then the asset row."""
    return [
        BatchQuery(DELETE_ASSOCIATIONS_FOR_ASSET, {"filename": filename}),
        BatchQuery(DELETE_ASSET, {"filename": filename}),
    ]


def insert_tag(tag_name: str) -> BatchQuery:
    return BatchQuery(INSERT_TAG, {"tag_name": tag_name})


def delete_tag_with_associations(tag_name: str) -> list[BatchQuery]:
    """Associations first, then the tag row."""
    return [
        BatchQuery(DELETE_ASSOCIATIONS_FOR_TAG, {"tag_name": tag_name}),
        BatchQuery(DELETE_TAG, {"tag_name": tag_name}),
    ]


def delete_association(filename: str, tag_name: str) -> BatchQuery:
    return BatchQuery(DELETE_ASSOCIATION, {"filename": filename, "tag_name": tag_name})
