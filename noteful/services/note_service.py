"""
Noteful Backend — Note Service
================================

What:  Business logic for notes: list with filters, get, create, update, delete.
How:   Validates ids and required fields, resolves folder/tag references,
       and runs the SQLAlchemy queries. Returns NoteResponse schemas with the
       folder and tags populated.
Who:   Called by the /api/notes route handlers.

Listing (GET /api/notes):
    Filters are optional and combined with AND:
        searchTerm → title ILIKE %term% OR content ILIKE %term%
        folderId   → notes.folder_id = :folder_id
        tagId      → EXISTS (note_tags WHERE tag_id = :tag_id)
    Always ordered by updated_at DESC (id DESC breaks ties), with folder and
    tags loaded via selectinload (two extra IN queries, no N+1).

Reference validation:
    A folderId/tag id must be a well-formed ObjectId AND name an existing
    row; otherwise the request is rejected with "The `folderId` is not
    valid" / "The `tagId` is not valid".
"""

import logging
from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from noteful.exceptions import DatabaseError, NotFoundError, ValidationError
from noteful.models.folder import Folder
from noteful.models.note import Note
from noteful.models.tag import Tag
from noteful.models.timestamps import utcnow
from noteful.schemas.note import NoteIn, NoteResponse
from noteful.validation import require_object_id, require_object_ids

logger = logging.getLogger(__name__)


def _require_title(title: Optional[str]) -> str:
    if title is None or not title.strip():
        raise ValidationError(message="Missing `title` in request body", field="title")
    return title


def _like_pattern(term: str) -> str:
    """Substring pattern with LIKE wildcards in `term` escaped."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _populated():
    return (selectinload(Note.folder), selectinload(Note.tags))


class NoteService:
    """
    Stateless note operations; the session is passed in on every call.

    Error Handling Strategy:
        Client mistakes raise ValidationError / NotFoundError before any
        write happens. Unexpected SQLAlchemy failures are wrapped in
        DatabaseError so internals never reach the response body.
    """

    async def list_notes(
        self,
        db: AsyncSession,
        search_term: Optional[str] = None,
        folder_id: Optional[str] = None,
        tag_id: Optional[str] = None,
    ) -> List[NoteResponse]:
        """
        List notes matching every supplied filter, newest update first.

        Empty-string filters are treated as absent, so a form that submits
        `?searchTerm=&folderId=` lists everything.
        """
        query = select(Note).options(*_populated())

        if search_term:
            pattern = _like_pattern(search_term)
            query = query.where(
                or_(
                    Note.title.ilike(pattern, escape="\\"),
                    Note.content.ilike(pattern, escape="\\"),
                )
            )
        if folder_id:
            query = query.where(Note.folder_id == require_object_id(folder_id, "folderId"))
        if tag_id:
            query = query.where(Note.tags.any(Tag.id == require_object_id(tag_id, "tagId")))

        query = query.order_by(Note.updated_at.desc(), Note.id.desc())

        try:
            result = await db.execute(query)
            notes = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        logger.debug(
            "Listed %d notes (searchTerm=%r, folderId=%s, tagId=%s)",
            len(notes), search_term, folder_id, tag_id,
        )
        return [NoteResponse.model_validate(note) for note in notes]

    async def get_note(self, db: AsyncSession, note_id: str) -> NoteResponse:
        """
        Raises:
            ValidationError: malformed id (→ 400)
            NotFoundError: no note with that id (→ 404)
        """
        note = await self._load_note(db, require_object_id(note_id))
        return NoteResponse.model_validate(note)

    async def create_note(self, db: AsyncSession, payload: NoteIn) -> NoteResponse:
        """
        Create a note. A missing folder becomes null, missing tags an empty set.
        """
        title = _require_title(payload.title)
        folder_oid = self._folder_oid(payload.folder_id)
        tag_oids = self._tag_oids(payload.tags)

        folder = await self._resolve_folder(db, folder_oid)
        tags = await self._resolve_tags(db, tag_oids)

        note = Note(title=title, content=payload.content, folder=folder, tags=tags)
        db.add(note)
        await self._flush(db, action="create")

        logger.info("Created note %s (folder=%s, %d tags)", note.id, note.folder_id, len(tags))
        return NoteResponse.model_validate(note)

    async def update_note(self, db: AsyncSession, note_id: str, payload: NoteIn) -> NoteResponse:
        """
        Update a note in place and return the new state.

        `title` is always required. `content`, `folderId` and `tags` are only
        touched when present in the body; an explicit null folder clears it
        and an explicit null tag list empties it.
        """
        # Body problems are reported ahead of a malformed path id
        title = _require_title(payload.title)
        provided = payload.model_fields_set
        folder_oid = self._folder_oid(payload.folder_id)
        tag_oids = self._tag_oids(payload.tags)
        oid = require_object_id(note_id)

        note = await self._load_note(db, oid)

        note.title = title
        if "content" in provided:
            note.content = payload.content
        if "folder_id" in provided:
            note.folder = await self._resolve_folder(db, folder_oid)
        if "tags" in provided:
            note.tags = await self._resolve_tags(db, tag_oids)
        note.updated_at = utcnow()

        await self._flush(db, action="update")
        return NoteResponse.model_validate(note)

    async def delete_note(self, db: AsyncSession, note_id: str) -> None:
        # Tags are loaded with the note so the association rows can be
        # removed without a lazy load.
        oid = require_object_id(note_id)
        note = await self._load_note(db, oid)
        await db.delete(note)
        await self._flush(db, action="delete")
        logger.info("Deleted note %s", oid)

    # ── Helpers ───────────────────────────────────────────────────────────

    @staticmethod
    def _folder_oid(folder_id: Optional[str]) -> Optional[str]:
        if not folder_id:
            return None
        return require_object_id(folder_id, "folderId")

    @staticmethod
    def _tag_oids(tag_ids: Optional[List[str]]) -> List[str]:
        if not tag_ids:
            return []
        return require_object_ids(tag_ids, "tagId")

    async def _load_note(self, db: AsyncSession, oid: str) -> Note:
        try:
            result = await db.execute(select(Note).options(*_populated()).where(Note.id == oid))
            note = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching note %s: %s", oid, str(e))
            raise DatabaseError(
                message="Could not retrieve the note. Please try again.",
                context={"note_id": oid},
            ) from e
        if note is None:
            raise NotFoundError(resource="note", resource_id=oid)
        return note

    async def _resolve_folder(self, db: AsyncSession, folder_oid: Optional[str]) -> Optional[Folder]:
        if folder_oid is None:
            return None
        folder = await db.get(Folder, folder_oid)
        if folder is None:
            raise ValidationError(
                message="The `folderId` is not valid",
                field="folderId",
                context={"reason": "folder does not exist"},
            )
        return folder

    async def _resolve_tags(self, db: AsyncSession, tag_oids: List[str]) -> List[Tag]:
        if not tag_oids:
            return []
        result = await db.execute(select(Tag).where(Tag.id.in_(tag_oids)))
        found = {tag.id: tag for tag in result.scalars().all()}
        missing = [oid for oid in tag_oids if oid not in found]
        if missing:
            raise ValidationError(
                message="The `tagId` is not valid",
                field="tagId",
                context={"reason": "tag does not exist", "missing": missing},
            )
        return sorted(found.values(), key=lambda tag: tag.name)

    async def _flush(self, db: AsyncSession, action: str) -> None:
        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error on note %s: %s", action, str(e), exc_info=True)
            raise DatabaseError(
                message=f"Could not {action} the note. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e


note_service = NoteService()
