"""
Tag administration endpoints.
All mutations require the backend API key.
"""

from fastapi import APIRouter

from portfolio_api.auth import RequireApiKey
from portfolio_api.dependencies import Tags
from portfolio_api.schemas.asset import MessageResponse
from portfolio_api.schemas.tag import AssociationCreate, TagCreate

router = APIRouter(dependencies=[RequireApiKey])


@router.post("/tags", response_model=MessageResponse, status_code=201)
async def add_tag(payload: TagCreate, tags: Tags):
    return {"message": await tags.add_tag(payload.tag_name)}


@router.delete("/tags/{tag_name}", response_model=MessageResponse)
async def remove_tag(tag_name: str, tags: Tags):
    """
    Remove a tag and its associations.
    Images that lose their last tag are kept.
    """
    return {"message": await tags.remove_tag(tag_name)}


@router.post("/assocs", response_model=MessageResponse, status_code=201)
async def add_association(payload: AssociationCreate, tags: Tags):
    return {"message": await tags.add_association(payload.filename, payload.tag_name)}


@router.delete("/assocs/{filename}/{tag_name}", response_model=MessageResponse)
async def remove_association(filename: str, tag_name: str, tags: Tags):
    return {"message": await tags.remove_association(filename, tag_name)}
