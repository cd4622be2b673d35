"""API tests for upload endpoints."""

import os

import pytest
from httpx import AsyncClient

from askmynotes.infrastructure.config.settings import Settings
from tests.api.helpers import upload


class TestUploadAPI:
    """API tests for upload and clear-subject endpoints."""

    @pytest.mark.asyncio
    async def test_upload_success(self, client: AsyncClient, test_settings: Settings):
        response = await upload(
            client,
            "bio101",
            [("a.txt", b"Cells are the basic unit of life."), ("b.txt", b"Mitosis has four phases.")],
            subject_name="Biology",
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["subjectId"] == "bio101"
        assert [f["fileName"] for f in data["files"]] == ["a.txt", "b.txt"]
        assert all(f["status"] == "success" for f in data["files"])
        assert data["files"][0]["length"] == len("Cells are the basic unit of life.")
        assert os.listdir(test_settings.UPLOAD_DIR) == []

    @pytest.mark.asyncio
    async def test_upload_reports_per_file_errors(self, client: AsyncClient, test_settings: Settings):
        response = await upload(
            client,
            "bio101",
            [("one.txt", b"first"), ("bad.pdf", b"%PDF-1.4 not a pdf"), ("three.txt", b"third")],
        )

        assert response.status_code == 200
        statuses = [f["status"] for f in response.json()["files"]]
        assert statuses == ["success", "error", "success"]
        assert response.json()["files"][1]["error"]
        assert os.listdir(test_settings.UPLOAD_DIR) == []

    @pytest.mark.asyncio
    async def test_upload_requires_subject_id(self, client: AsyncClient):
        response = await upload(client, None, [("a.txt", b"text")])

        assert response.status_code == 400
        assert "subjectId" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_upload_requires_files(self, client: AsyncClient):
        response = await upload(client, "bio101", [])

        assert response.status_code == 400
        assert response.json()["detail"] == "No files uploaded"

    @pytest.mark.asyncio
    async def test_upload_rejects_too_many_files(self, client: AsyncClient, test_settings: Settings):
        files = [(f"{i}.txt", b"text") for i in range(test_settings.UPLOAD_MAX_FILES + 1)]

        response = await upload(client, "bio101", files)

        assert response.status_code == 400
        listing = await client.get("/api/subjects")
        assert listing.json() == []

    @pytest.mark.asyncio
    async def test_reupload_replaces_content(self, client: AsyncClient):
        await upload(client, "bio101", [("notes.txt", b"first draft")])
        await upload(client, "bio101", [("notes.txt", b"final draft")])

        content = await client.get("/api/subjects/bio101/files/notes.txt/content")
        listing = await client.get("/api/subjects")

        assert content.json() == {"text": "final draft"}
        assert [f["name"] for f in listing.json()[0]["files"]] == ["notes.txt"]

    @pytest.mark.asyncio
    async def test_clear_subject(self, client: AsyncClient):
        await upload(client, "bio101", [("a.txt", b"Cells"), ("b.txt", b"Mitosis")], subject_name="Biology")

        response = await client.post("/api/clear-subject", json={"subjectId": "bio101"})

        assert response.status_code == 200
        assert response.json() == {"success": True}
        listing = (await client.get("/api/subjects")).json()
        assert listing[0]["name"] == "Biology"
        assert listing[0]["files"] == []

    @pytest.mark.asyncio
    async def test_clear_subject_accepts_numeric_id(self, client: AsyncClient):
        await upload(client, "42", [("a.txt", b"Cells")])

        response = await client.post("/api/clear-subject", json={"subjectId": 42})

        assert response.status_code == 200
        listing = (await client.get("/api/subjects")).json()
        assert listing[0]["files"] == []

    @pytest.mark.asyncio
    async def test_clear_subject_requires_subject_id(self, client: AsyncClient):
        response = await client.post("/api/clear-subject", json={})

        assert response.status_code == 400
