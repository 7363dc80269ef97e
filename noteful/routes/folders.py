"""
Noteful Backend — Folder Route Handlers
=========================================

GET / POST /api/folders, GET / PUT / DELETE /api/folders/{id}.
Folders are listed by name; deleting one keeps its notes but clears their
folder reference.
"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.schemas.common import ErrorResponse
from noteful.schemas.folder import FolderResponse, NamedResourceIn
from noteful.services.folder_service import folder_service

router = APIRouter(prefix="/api/folders", tags=["Folders"])

_ERRORS = {
    400: {"description": "Malformed id, missing name or duplicate name", "model": ErrorResponse},
    404: {"description": "Folder not found", "model": ErrorResponse},
}


@router.get("", response_model=List[FolderResponse], summary="List folders by name")
async def list_folders(db: AsyncSession = Depends(get_db_session)) -> List[FolderResponse]:
    return await folder_service.list(db)


@router.get("/{folder_id}", response_model=FolderResponse, responses=_ERRORS)
async def get_folder(folder_id: str, db: AsyncSession = Depends(get_db_session)) -> FolderResponse:
    return await folder_service.get(db, folder_id)


@router.post("", status_code=201, response_model=FolderResponse, responses={400: _ERRORS[400]})
async def create_folder(
    payload: NamedResourceIn,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> FolderResponse:
    folder = await folder_service.create(db, payload.name)
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{folder.id}"
    return folder


@router.put("/{folder_id}", response_model=FolderResponse, responses=_ERRORS)
async def update_folder(
    folder_id: str,
    payload: NamedResourceIn,
    db: AsyncSession = Depends(get_db_session),
) -> FolderResponse:
    return await folder_service.update(db, folder_id, payload.name)


@router.delete("/{folder_id}", status_code=204, response_class=Response, responses=_ERRORS)
async def delete_folder(folder_id: str, db: AsyncSession = Depends(get_db_session)) -> Response:
    await folder_service.delete(db, folder_id)
    return Response(status_code=204)
