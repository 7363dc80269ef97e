"""
Noteful Backend — Tag Route Handlers
======================================

GET / POST /api/tags, GET / PUT / DELETE /api/tags/{id}.
Deleting a tag also removes it from every note that held it.
"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.schemas.common import ErrorResponse
from noteful.schemas.folder import NamedResourceIn, TagResponse
from noteful.services.tag_service import tag_service

router = APIRouter(prefix="/api/tags", tags=["Tags"])

_ERRORS = {
    400: {"description": "Malformed id, missing name or duplicate name", "model": ErrorResponse},
    404: {"description": "Tag not found", "model": ErrorResponse},
}


@router.get("", response_model=List[TagResponse], summary="List tags by name")
async def list_tags(db: AsyncSession = Depends(get_db_session)) -> List[TagResponse]:
    return await tag_service.list(db)


@router.get("/{tag_id}", response_model=TagResponse, responses=_ERRORS)
async def get_tag(tag_id: str, db: AsyncSession = Depends(get_db_session)) -> TagResponse:
    return await tag_service.get(db, tag_id)


@router.post("", status_code=201, response_model=TagResponse, responses={400: _ERRORS[400]})
async def create_tag(
    payload: NamedResourceIn,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> TagResponse:
    tag = await tag_service.create(db, payload.name)
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{tag.id}"
    return tag


@router.put("/{tag_id}", response_model=TagResponse, responses=_ERRORS)
async def update_tag(
    tag_id: str,
    payload: NamedResourceIn,
    db: AsyncSession = Depends(get_db_session),
) -> TagResponse:
    return await tag_service.update(db, tag_id, payload.name)


@router.delete("/{tag_id}", status_code=204, response_class=Response, responses=_ERRORS)
async def delete_tag(tag_id: str, db: AsyncSession = Depends(get_db_session)) -> Response:
    """Delete the tag and pull it out of every note's tag set."""
    await tag_service.delete(db, tag_id)
    return Response(status_code=204)
