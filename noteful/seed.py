"""
Noteful Backend — Database Seeding
====================================

What:  Drops and recreates the schema, then inserts a known set of folders,
       tags and notes.
Who:   `noteful-seed` console script for local development; the test suite
       calls `seed_database()` against its in-memory database.

The ids are fixed so that manual testing and tests can refer to them:
    folders  111111111111111111111100 … 111111111111111111111103
    tags     222222222222222222222200 … 222222222222222222222203
    notes    000000000000000000000000 … 000000000000000000000007
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Dict

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from noteful.database import Base
from noteful.models import Folder, Note, Tag

logger = logging.getLogger(__name__)

SEED_FOLDERS = [
    {"id": "111111111111111111111100", "name": "Archive"},
    {"id": "111111111111111111111101", "name": "Drafts"},
    {"id": "111111111111111111111102", "name": "Personal"},
    {"id": "111111111111111111111103", "name": "Work"},
]

SEED_TAGS = [
    {"id": "222222222222222222222200", "name": "breed"},
    {"id": "222222222222222222222201", "name": "hybrid"},
    {"id": "222222222222222222222202", "name": "domestic"},
    {"id": "222222222222222222222203", "name": "feral"},
]

SEED_NOTES = [
    {
        "id": "000000000000000000000000",
        "title": "5 life lessons learned from cats",
        "content": "Lorem ipsum dolor sit amet, consectetur adipiscing elit.",
        "folder_id": "111111111111111111111100",
        "tags": ["222222222222222222222200"],
    },
    {
        "id": "000000000000000000000001",
        "title": "What the government doesn't want you to know about cats",
        "content": "Posuere sollicitudin aliquam ultrices sagittis orci a.",
        "folder_id": "111111111111111111111100",
        "tags": ["222222222222222222222200", "222222222222222222222203"],
    },
    {
        "id": "000000000000000000000002",
        "title": "The most boring article about cats you'll ever read",
        "content": "Feugiat in ante metus dictum at tempor commodo ullamcorper.",
        "folder_id": "111111111111111111111101",
        "tags": ["222222222222222222222201"],
    },
    {
        "id": "000000000000000000000003",
        "title": "7 things Lady Gaga has in common with cats",
        "content": "Vel pharetra vel turpis nunc eget lorem dolor sed viverra.",
        "folder_id": "111111111111111111111101",
        "tags": [],
    },
    {
        "id": "000000000000000000000004",
        "title": "The most incredible article about cats you'll ever read",
        "content": "Why the government keeps quiet: nisi scelerisque eu ultrices vitae.",
        "folder_id": "111111111111111111111102",
        "tags": ["222222222222222222222202"],
    },
    {
        "id": "000000000000000000000005",
        "title": "10 ways cats can help you live to 100",
        "content": "Mattis vulputate enim nulla aliquet porttitor lacus luctus.",
        "folder_id": "111111111111111111111102",
        "tags": ["222222222222222222222202", "222222222222222222222203"],
    },
    {
        "id": "000000000000000000000006",
        "title": "9 reasons you can blame the recession on cats",
        "content": "Diam vulputate ut pharetra sit amet aliquam id diam.",
        "folder_id": "111111111111111111111103",
        "tags": ["222222222222222222222200"],
    },
    {
        "id": "000000000000000000000007",
        "title": "Why you should forget everything you learned about cats",
        "content": None,
        "folder_id": None,
        "tags": [],
    },
]


async def reset_schema(engine: AsyncEngine) -> None:
    """Drop every table and create them again from the model metadata."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


async def seed_database(session: AsyncSession) -> Dict[str, int]:
    """
    Insert the seed documents into an empty schema.

    Notes get distinct, increasing timestamps so "newest first" ordering is
    deterministic: the last note in SEED_NOTES is the most recently updated.

    Returns:
        Count of inserted rows per collection.
    """
    base_time = datetime(2024, 1, 1, tzinfo=timezone.utc)

    folders = [Folder(**data, created_at=base_time, updated_at=base_time) for data in SEED_FOLDERS]
    tags = {data["id"]: Tag(**data, created_at=base_time, updated_at=base_time) for data in SEED_TAGS}
    session.add_all(folders)
    session.add_all(tags.values())

    for index, data in enumerate(SEED_NOTES):
        stamp = base_time + timedelta(minutes=index)
        session.add(
            Note(
                id=data["id"],
                title=data["title"],
                content=data["content"],
                folder_id=data["folder_id"],
                tags=[tags[tag_id] for tag_id in data["tags"]],
                created_at=stamp,
                updated_at=stamp,
            )
        )

    await session.flush()
    return {"folders": len(SEED_FOLDERS), "tags": len(SEED_TAGS), "notes": len(SEED_NOTES)}


async def _seed() -> None:
    from noteful.database import async_session_factory, dispose_engine, engine

    await reset_schema(engine)
    async with async_session_factory() as session:
        counts = await seed_database(session)
        await session.commit()
    await dispose_engine()

    for collection, count in counts.items():
        logger.info("Inserted %d %s", count, collection.capitalize())


def main() -> None:
    """Console entry point (`noteful-seed`)."""
    from noteful.main import setup_logging

    setup_logging()
    asyncio.run(_seed())


if __name__ == "__main__":
    main()
