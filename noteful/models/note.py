"""
Noteful Backend — Note SQLAlchemy Model
=========================================

What:  ORM model for the `notes` table plus the `note_tags` association table.
Who:   Used by NoteService for CRUD and by Alembic for schema management.

Table Design Rationale:
    - id: 24-char ObjectId hex string (clients see the same id format
      regardless of backing database)
    - folder_id: nullable FK; ON DELETE SET NULL so a removed folder leaves
      its notes in place without a folder
    - note_tags: composite primary key (note_id, tag_id); both FKs cascade
    - updated_at: indexed, because every listing sorts on it (newest first)

Relationship loading:
    Async sessions cannot lazy-load. NoteService always loads `folder` and
    `tags` with selectinload() before touching them.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import Column, DateTime, ForeignKey, Index, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from noteful.database import Base
from noteful.models.folder import Folder
from noteful.models.tag import Tag
from noteful.models.timestamps import utcnow
from noteful.validation import new_object_id


note_tags = Table(
    "note_tags",
    Base.metadata,
    Column("note_id", String(24), ForeignKey("notes.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", String(24), ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
    Index("idx_note_tags_tag_id", "tag_id"),
)


class Note(Base):
    """
    A note with a required title, optional content, at most one folder
    and any number of tags.

    Query Patterns:
        - List:   ORDER BY updated_at DESC, optional title/content ILIKE,
                  folder_id equality, EXISTS on note_tags
        - Single: WHERE id = :oid
    """

    __tablename__ = "notes"

    id: Mapped[str] = mapped_column(
        String(24),
        primary_key=True,
        default=new_object_id,
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)

    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)

    folder_id: Mapped[Optional[str]] = mapped_column(
        String(24),
        ForeignKey("folders.id", ondelete="SET NULL"),
        nullable=True,
        default=None,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    folder: Mapped[Optional[Folder]] = relationship(Folder)
    tags: Mapped[List[Tag]] = relationship(Tag, secondary=note_tags, order_by=Tag.name)

    __table_args__ = (
        Index("idx_notes_updated_at", updated_at.desc()),
        Index("idx_notes_folder_id", folder_id),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title}', folder_id={self.folder_id})>"
