"""
Noteful Backend — Tag SQLAlchemy Model
========================================

What:  ORM model for the `tags` table.
Who:   Queried by TagService; linked to notes through `note_tags`.

Tag deletion is handled explicitly by TagService (rows in `note_tags`
are removed first), so Tag carries no back-reference to notes.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from noteful.database import Base
from noteful.models.timestamps import utcnow
from noteful.validation import new_object_id


class Tag(Base):
    """A named label; many notes can hold the same tag."""

    __tablename__ = "tags"

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
        return f"<Tag(id={self.id}, name='{self.name}')>"
