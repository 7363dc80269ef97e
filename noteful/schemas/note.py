"""
Noteful Backend — Note Request/Response Schemas
=================================================

What:  Pydantic models defining the notes API contract.
How:   FastAPI validates request bodies against NoteIn and serializes
       NoteResponse by alias (camelCase).

Contract notes:
    - `folderId` in a response holds the populated folder object (or null),
      not the bare id. Internally the field is called `folder`.
    - Requests may send tag ids as `tags` or `tagId`.
    - Every NoteIn field is optional at the schema level. Required-field and
      ObjectId checks live in NoteService so their messages match the API.
"""

from typing import List, Optional

from pydantic import AliasChoices, Field

from noteful.schemas.common import CamelModel, UTCDateTime
from noteful.schemas.folder import FolderResponse, TagResponse


class NoteIn(CamelModel):
    """
    Body of POST /api/notes and PUT /api/notes/{id}.

    On PUT, fields absent from the body are left unchanged; NoteService
    checks `model_fields_set` to tell "absent" from "explicit null".
    """
    title: Optional[str] = Field(default=None, description="Required, non-empty")
    content: Optional[str] = Field(default=None)
    folder_id: Optional[str] = Field(default=None, description="Folder ObjectId or null")
    tags: Optional[List[str]] = Field(
        default=None,
        validation_alias=AliasChoices("tags", "tagId"),
        description="Tag ObjectIds",
    )


class NoteResponse(CamelModel):
    """
    What:  Full note with its folder and tags populated.
    Who:   Returned by every /api/notes endpoint except DELETE.
    """
    id: str = Field(description="ObjectId (24 hex chars)")
    title: str
    content: Optional[str] = None
    folder: Optional[FolderResponse] = Field(default=None, alias="folderId")
    tags: List[TagResponse] = Field(default_factory=list)
    created_at: UTCDateTime
    updated_at: UTCDateTime
