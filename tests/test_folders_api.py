"""
Noteful Backend — Folders API Tests
=====================================

What:  /api/folders CRUD against the seeded database, including what a
       folder delete does to the notes filed in it.
"""

import pytest

ARCHIVE = "111111111111111111111100"
DRAFTS = "111111111111111111111101"
MISSING_ID = "111111111111111111111199"


class TestFoldersRead:

    @pytest.mark.asyncio
    async def test_list_sorted_by_name(self, test_client):
        response = await test_client.get("/api/folders")

        assert response.status_code == 200
        assert [f["name"] for f in response.json()] == ["Archive", "Drafts", "Personal", "Work"]

    @pytest.mark.asyncio
    async def test_get_one(self, test_client):
        response = await test_client.get(f"/api/folders/{ARCHIVE}")

        assert response.status_code == 200
        assert set(response.json()) == {"id", "name", "createdAt", "updatedAt"}
        assert response.json()["name"] == "Archive"

    @pytest.mark.asyncio
    async def test_get_malformed(self, test_client):
        response = await test_client.get("/api/folders/xyz")

        assert response.status_code == 400
        assert response.json()["message"] == "The `id` is not valid"

    @pytest.mark.asyncio
    async def test_get_missing(self, test_client):
        response = await test_client.get(f"/api/folders/{MISSING_ID}")
        assert response.status_code == 404


class TestFoldersWrite:

    @pytest.mark.asyncio
    async def test_create(self, test_client):
        response = await test_client.post("/api/folders", json={"name": "Recipes"})

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Recipes"
        assert response.headers["location"] == f"/api/folders/{body['id']}"

    @pytest.mark.asyncio
    async def test_create_missing_name(self, test_client):
        response = await test_client.post("/api/folders", json={})

        assert response.status_code == 400
        assert response.json()["message"] == "Missing `name` in request body"

    @pytest.mark.asyncio
    async def test_create_duplicate(self, test_client):
        response = await test_client.post("/api/folders", json={"name": "Work"})

        assert response.status_code == 400
        assert response.json()["message"] == "The folder name already exists"

    @pytest.mark.asyncio
    async def test_rename(self, test_client):
        response = await test_client.put(f"/api/folders/{DRAFTS}", json={"name": "Ideas"})

        assert response.status_code == 200
        assert response.json()["name"] == "Ideas"

        note = await test_client.get("/api/notes/000000000000000000000002")
        assert note.json()["folderId"]["name"] == "Ideas"

    @pytest.mark.asyncio
    async def test_rename_to_taken_name(self, test_client):
        response = await test_client.put(f"/api/folders/{DRAFTS}", json={"name": "Archive"})

        assert response.status_code == 400
        assert response.json()["message"] == "The folder name already exists"

    @pytest.mark.asyncio
    async def test_rename_missing(self, test_client):
        response = await test_client.put(f"/api/folders/{MISSING_ID}", json={"name": "Ideas"})
        assert response.status_code == 404


class TestFoldersDelete:

    @pytest.mark.asyncio
    async def test_delete_keeps_notes_without_folder(self, test_client):
        response = await test_client.delete(f"/api/folders/{ARCHIVE}")
        assert response.status_code == 204

        assert (await test_client.get(f"/api/folders/{ARCHIVE}")).status_code == 404

        notes = (await test_client.get("/api/notes")).json()
        assert len(notes) == 8
        orphaned = {n["id"]: n for n in notes if n["id"] in ("000000000000000000000000", "000000000000000000000001")}
        assert len(orphaned) == 2
        assert all(n["folderId"] is None for n in orphaned.values())

    @pytest.mark.asyncio
    async def test_delete_missing(self, test_client):
        response = await test_client.delete(f"/api/folders/{MISSING_ID}")
        assert response.status_code == 404


class TestFoldersMalformedId:

    @pytest.mark.asyncio
    async def test_put_malformed(self, test_client):
        response = await test_client.put("/api/folders/xyz", json={"name": "Ideas"})

        assert response.status_code == 400
        assert response.json()["message"] == "The `id` is not valid"

    @pytest.mark.asyncio
    async def test_delete_malformed(self, test_client):
        response = await test_client.delete("/api/folders/xyz")

        assert response.status_code == 400
        assert response.json()["message"] == "The `id` is not valid"
        assert len((await test_client.get("/api/folders")).json()) == 4
