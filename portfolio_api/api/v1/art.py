"""
Read-only portfolio endpoints.
No API key required; these back the public site.
"""

from fastapi import APIRouter

from portfolio_api.dependencies import Catalog
from portfolio_api.schemas.asset import AssetResponse
from portfolio_api.schemas.tag import AssociationResponse

router = APIRouter()


@router.get("/all-art", response_model=list[AssetResponse])
async def list_all_art(catalog: Catalog):
    """Get all image information in the database."""
    return await catalog.list_all_assets()


@router.get("/art/{tag_name}", response_model=list[AssetResponse])
async def list_art_by_tag(tag_name: str, catalog: Catalog):
    """Get all images tagged with ``tag_name``."""
    return await catalog.list_assets_by_tag(tag_name)


@router.get("/untagged-art", response_model=list[AssetResponse])
async def list_untagged_art(catalog: Catalog):
    """Get all images without any tag."""
    return await catalog.list_untagged_assets()


@router.get("/all-tags", response_model=list[str])
async def list_all_tags(catalog: Catalog):
    return await catalog.list_all_tag_names()


@router.get("/all-filenames", response_model=list[str])
async def list_all_filenames(catalog: Catalog):
    return await catalog.list_all_filenames()


@router.get("/all-assocs", response_model=list[AssociationResponse])
async def list_all_assocs(catalog: Catalog):
    """Get every (filename, tag name) association."""
    return await catalog.list_all_associations()
