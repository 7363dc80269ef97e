"""
Noteful Backend — Notes Route Handlers
========================================

What:  CRUD endpoints under /api/notes.
How:   Extracts path/query/body data, delegates to NoteService, sets status
       codes and the Location header. No query logic lives here.

Route Inventory:
    GET    /api/notes          list (searchTerm, folderId, tagId filters)
    GET    /api/notes/{id}     single note, folder and tags populated
    POST   /api/notes          create → 201 + Location
    PUT    /api/notes/{id}     update → 200 with the new state
    DELETE /api/notes/{id}     delete → 204
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.schemas.common import ErrorResponse
from noteful.schemas.note import NoteIn, NoteResponse
from noteful.services.note_service import note_service

router = APIRouter(prefix="/api/notes", tags=["Notes"])

_ERRORS = {
    400: {"description": "Malformed id or missing/invalid field", "model": ErrorResponse},
    404: {"description": "Note not found", "model": ErrorResponse},
}


@router.get(
    "",
    response_model=List[NoteResponse],
    responses={400: _ERRORS[400]},
    summary="List notes",
    description=(
        "Returns notes sorted by last update, newest first. `searchTerm` matches "
        "title or content case-insensitively; `folderId` and `tagId` restrict to a "
        "folder or tag. Supplied filters are combined."
    ),
)
async def list_notes(
    search_term: Optional[str] = Query(default=None, alias="searchTerm"),
    folder_id: Optional[str] = Query(default=None, alias="folderId"),
    tag_id: Optional[str] = Query(default=None, alias="tagId"),
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    return await note_service.list_notes(
        db=db,
        search_term=search_term,
        folder_id=folder_id,
        tag_id=tag_id,
    )


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    responses=_ERRORS,
    summary="Get a single note by ID",
)
async def get_note(
    note_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.get_note(db=db, note_id=note_id)


@router.post(
    "",
    status_code=201,
    response_model=NoteResponse,
    responses={400: _ERRORS[400]},
    summary="Create a note",
)
async def create_note(
    payload: NoteIn,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """
    Create a note and point the Location header at it.

    `tags` may also be sent as `tagId` (array of tag ObjectIds).
    """
    note = await note_service.create_note(db=db, payload=payload)
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{note.id}"
    return note


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    responses=_ERRORS,
    summary="Update a note",
)
async def update_note(
    note_id: str,
    payload: NoteIn,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.update_note(db=db, note_id=note_id, payload=payload)


@router.delete(
    "/{note_id}",
    status_code=204,
    response_class=Response,
    responses=_ERRORS,
    summary="Delete a note",
)
async def delete_note(
    note_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await note_service.delete_note(db=db, note_id=note_id)
    return Response(status_code=204)
