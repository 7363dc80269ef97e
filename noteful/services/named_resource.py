"""
Noteful Backend — Named Resource Service (Folders & Tags)
===========================================================

What:  CRUD for resources that are just a unique `name` plus timestamps.
How:   FolderService and TagService subclass NamedResourceService and only
       differ in their model, response schema, and what happens to notes
       that reference a deleted row (`_release_references`).

Error Handling Strategy:
    - Malformed id           → ValidationError ("The `id` is not valid")
    - Missing/blank name     → ValidationError ("Missing `name` in request body")
    - Unique name violation  → DuplicateKeyError ("The folder name already exists")
    - Row not found          → NotFoundError
    - Any other DB failure   → DatabaseError (details logged, not returned)
"""

import logging
from typing import Generic, List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.exceptions import DatabaseError, DuplicateKeyError, NotFoundError, ValidationError
from noteful.models.timestamps import utcnow
from noteful.schemas.common import CamelModel
from noteful.validation import require_object_id

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")
ResponseT = TypeVar("ResponseT", bound=CamelModel)


def require_name(name: Optional[str]) -> str:
    """Returns the stripped name or raises the API's missing-name error."""
    if name is None or not name.strip():
        raise ValidationError(message="Missing `name` in request body", field="name")
    return name.strip()


class NamedResourceService(Generic[ModelT, ResponseT]):
    """
    Shared list/get/create/update/delete for folders and tags.

    Subclasses set `model`, `response_model` and `resource` (used in
    messages such as "The tag name already exists").
    """

    model: Type[ModelT]
    response_model: Type[ResponseT]
    resource: str = "resource"

    async def list(self, db: AsyncSession) -> List[ResponseT]:
        """All rows sorted by name ascending."""
        try:
            result = await db.execute(select(self.model).order_by(self.model.name.asc()))
            rows = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing %ss: %s", self.resource, str(e), exc_info=True)
            raise DatabaseError(
                message=f"Could not retrieve {self.resource}s. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e
        return [self.response_model.model_validate(row) for row in rows]

    async def get(self, db: AsyncSession, resource_id: str) -> ResponseT:
        oid = require_object_id(resource_id)
        row = await self._load(db, oid)
        return self.response_model.model_validate(row)

    async def create(self, db: AsyncSession, name: Optional[str]) -> ResponseT:
        row = self.model(name=require_name(name))
        db.add(row)
        await self._flush(db, action="create")
        logger.info("Created %s %s (%s)", self.resource, row.id, row.name)
        return self.response_model.model_validate(row)

    async def update(self, db: AsyncSession, resource_id: str, name: Optional[str]) -> ResponseT:
        oid = require_object_id(resource_id)
        new_name = require_name(name)
        row = await self._load(db, oid)
        row.name = new_name
        row.updated_at = utcnow()
        await self._flush(db, action="update")
        return self.response_model.model_validate(row)

    async def delete(self, db: AsyncSession, resource_id: str) -> None:
        """
        Removes the row after detaching it from any notes.

        Both steps share the request transaction, so a failure in either
        leaves notes and the row untouched.
        """
        oid = require_object_id(resource_id)
        row = await self._load(db, oid)
        try:
            await self._release_references(db, oid)
            await db.delete(row)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting %s %s: %s", self.resource, oid, str(e), exc_info=True)
            raise DatabaseError(
                message=f"Could not delete the {self.resource}. Please try again.",
                context={"resource_id": oid, "error_type": type(e).__name__},
            ) from e
        logger.info("Deleted %s %s", self.resource, oid)

    # ── Hooks & helpers ───────────────────────────────────────────────────

    async def _release_references(self, db: AsyncSession, oid: str) -> None:
        """Detach notes from the row about to be deleted. Overridden per resource."""

    async def _load(self, db: AsyncSession, oid: str) -> ModelT:
        try:
            result = await db.execute(select(self.model).where(self.model.id == oid))
            row = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching %s %s: %s", self.resource, oid, str(e))
            raise DatabaseError(
                message=f"Could not retrieve the {self.resource}. Please try again.",
                context={"resource_id": oid},
            ) from e
        if row is None:
            raise NotFoundError(resource=self.resource, resource_id=oid)
        return row

    async def _flush(self, db: AsyncSession, action: str) -> None:
        try:
            await db.flush()
        except IntegrityError as e:
            logger.info("Duplicate %s name rejected on %s", self.resource, action)
            raise DuplicateKeyError(resource=self.resource, field="name") from e
        except SQLAlchemyError as e:
            logger.error("Database error on %s %s: %s", self.resource, action, str(e), exc_info=True)
            raise DatabaseError(
                message=f"Could not {action} the {self.resource}. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e
