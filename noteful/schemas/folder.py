"""
Noteful Backend — Folder and Tag Schemas
==========================================

Folders and tags share one shape: a unique `name` plus timestamps. The
request model keeps `name` optional so that a missing name reaches the
service and produces the API's own 400 message instead of FastAPI's 422.
"""

from typing import Optional

from pydantic import Field

from noteful.schemas.common import CamelModel, UTCDateTime


class NamedResourceIn(CamelModel):
    """Body of POST/PUT for folders and tags."""
    name: Optional[str] = Field(default=None, description="Unique display name")


class FolderResponse(CamelModel):
    """
    What:  Wire representation of a folder.
    Who:   Returned by /api/folders and embedded as `folderId` in notes.
    """
    id: str = Field(description="ObjectId (24 hex chars)")
    name: str
    created_at: UTCDateTime
    updated_at: UTCDateTime


class TagResponse(CamelModel):
    """Wire representation of a tag; embedded in a note's `tags` list."""
    id: str = Field(description="ObjectId (24 hex chars)")
    name: str
    created_at: UTCDateTime
    updated_at: UTCDateTime
