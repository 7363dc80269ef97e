"""
Noteful Backend — Tags API Tests
==================================

What:  /api/tags CRUD, and removal of a deleted tag from every note.
"""

from unittest.mock import patch

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import selectinload

from noteful.exceptions import DatabaseError
from noteful.models import Note, Tag
from noteful.services.tag_service import tag_service

BREED = "222222222222222222222200"
FERAL = "222222222222222222222203"
MISSING_ID = "222222222222222222222299"


class TestTags:

    @pytest.mark.asyncio
    async def test_list_sorted_by_name(self, test_client):
        response = await test_client.get("/api/tags")

        assert response.status_code == 200
        assert [t["name"] for t in response.json()] == ["breed", "domestic", "feral", "hybrid"]

    @pytest.mark.asyncio
    async def test_get_one(self, test_client):
        response = await test_client.get(f"/api/tags/{FERAL}")

        assert response.status_code == 200
        assert response.json()["name"] == "feral"

    @pytest.mark.asyncio
    async def test_get_malformed(self, test_client):
        response = await test_client.get("/api/tags/12")

        assert response.status_code == 400
        assert response.json()["message"] == "The `id` is not valid"

    @pytest.mark.asyncio
    async def test_create_and_location(self, test_client):
        response = await test_client.post("/api/tags", json={"name": "  tabby "})

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "tabby"
        assert response.headers["location"] == f"/api/tags/{body['id']}"

    @pytest.mark.asyncio
    async def test_create_duplicate(self, test_client):
        response = await test_client.post("/api/tags", json={"name": "breed"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["message"] == "The tag name already exists"

    @pytest.mark.asyncio
    async def test_update_blank_name(self, test_client):
        response = await test_client.put(f"/api/tags/{BREED}", json={"name": "  "})

        assert response.status_code == 400
        assert response.json()["message"] == "Missing `name` in request body"

    @pytest.mark.asyncio
    async def test_update(self, test_client):
        response = await test_client.put(f"/api/tags/{BREED}", json={"name": "pedigree"})

        assert response.status_code == 200
        assert response.json()["name"] == "pedigree"

    @pytest.mark.asyncio
    async def test_delete_pulls_tag_from_notes(self, test_client):
        response = await test_client.delete(f"/api/tags/{BREED}")
        assert response.status_code == 204

        note = (await test_client.get("/api/notes/000000000000000000000001")).json()
        assert [t["id"] for t in note["tags"]] == [FERAL]

        tagged = await test_client.get("/api/notes", params={"tagId": BREED})
        assert tagged.json() == []

        # The notes themselves survive
        assert len((await test_client.get("/api/notes")).json()) == 8

    @pytest.mark.asyncio
    async def test_delete_missing(self, test_client):
        response = await test_client.delete(f"/api/tags/{MISSING_ID}")
        assert response.status_code == 404


class TestTagsMalformedId:

    @pytest.mark.asyncio
    async def test_put_malformed(self, test_client):
        response = await test_client.put("/api/tags/12", json={"name": "tabby"})

        assert response.status_code == 400
        assert response.json()["message"] == "The `id` is not valid"

    @pytest.mark.asyncio
    async def test_delete_malformed(self, test_client):
        response = await test_client.delete("/api/tags/12")

        assert response.status_code == 400
        assert response.json()["message"] == "The `id` is not valid"


class TestTagDeleteTransaction:
    """A failure part-way through a tag delete leaves notes and tag intact."""

    async def _snapshot(self, session_factory):
        async with session_factory() as session:
            note = (
                await session.execute(
                    select(Note)
                    .options(selectinload(Note.tags))
                    .where(Note.id == "000000000000000000000001")
                )
            ).scalar_one()
            tag = await session.get(Tag, BREED)
            return note.updated_at, sorted(t.id for t in note.tags), tag is not None

    @pytest.mark.asyncio
    async def test_rollback_after_failed_unlink(self, session_factory):
        before = await self._snapshot(session_factory)

        async with session_factory() as session:
            real_execute = session.execute
            statements = []

            async def execute_then_fail(statement, *args, **kwargs):
                statements.append(statement)
                # 1: load tag, 2: touch notes, 3: unlink from notes
                if len(statements) == 3:
                    raise OperationalError("DELETE", {}, Exception("disk I/O error"))
                return await real_execute(statement, *args, **kwargs)

            with patch.object(session, "execute", new=execute_then_fail):
                with pytest.raises(DatabaseError):
                    await tag_service.delete(session, BREED)
            await session.rollback()

        assert len(statements) == 3
        assert await self._snapshot(session_factory) == before
        assert before[1] == [BREED, FERAL]
