"""
Noteful Backend — Folder SQLAlchemy Model
===========================================

What:  ORM model for the `folders` table.
Who:   Queried by FolderService; referenced by Note.folder_id.

Table Design:
    - id: 24-char ObjectId hex string, generated in Python
    - name: unique; the unique index is what produces duplicate-key errors
    - created_at / updated_at: UTC, maintained by the application
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from noteful.database import Base
from noteful.models.timestamps import utcnow
from noteful.validation import new_object_id


class Folder(Base):
    """A named container; a note belongs to at most one folder."""

    __tablename__ = "folders"

    id: Mapped[str] = mapped_column(
        String(24),
        primary_key=True,
        default=new_object_id,
    )

    name: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        unique=True,
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

    def __repr__(self) -> str:
        return f"<Folder(id={self.id}, name='{self.name}')>"
