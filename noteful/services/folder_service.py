"""
Folder service: named-resource CRUD where deleting a folder clears the
folder reference on its notes (the notes themselves are kept).
"""

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.models.folder import Folder
from noteful.models.note import Note
from noteful.models.timestamps import utcnow
from noteful.schemas.folder import FolderResponse
from noteful.services.named_resource import NamedResourceService


class FolderService(NamedResourceService[Folder, FolderResponse]):
    model = Folder
    response_model = FolderResponse
    resource = "folder"

    async def _release_references(self, db: AsyncSession, oid: str) -> None:
        await db.execute(
            update(Note)
            .where(Note.folder_id == oid)
            .values(folder_id=None, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )


folder_service = FolderService()
