"""
Tag service: named-resource CRUD where deleting a tag pulls it out of the
tag set of every note that held it.
"""

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.models.note import Note, note_tags
from noteful.models.tag import Tag
from noteful.models.timestamps import utcnow
from noteful.schemas.folder import TagResponse
from noteful.services.named_resource import NamedResourceService


class TagService(NamedResourceService[Tag, TagResponse]):
    model = Tag
    response_model = TagResponse
    resource = "tag"

    async def _release_references(self, db: AsyncSession, oid: str) -> None:
        # Touch the affected notes before their association rows disappear
        holders = select(note_tags.c.note_id).where(note_tags.c.tag_id == oid)
        await db.execute(
            update(Note)
            .where(Note.id.in_(holders))
            .values(updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        await db.execute(delete(note_tags).where(note_tags.c.tag_id == oid))


tag_service = TagService()
