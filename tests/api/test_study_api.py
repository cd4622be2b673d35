"""API tests for the study-mode endpoint."""

import json

import pytest
import pytest_asyncio
from httpx import AsyncClient

from askmynotes.modules.common.constants import NO_NOTES_MESSAGE, SUMMARY_FALLBACK
from tests.api.helpers import upload
from tests.fakes import FakeLLMClient


class TestStudyAPI:
    """API tests for summaries and practice sets."""

    @pytest_asyncio.fixture(autouse=True)
    async def bio_notes(self, client: AsyncClient):
        await upload(
            client,
            "bio101",
            [("a.txt", b"Cells are the basic unit of life."), ("b.txt", b"Mitosis has four phases.")],
            subject_name="Biology",
        )

    @pytest.mark.asyncio
    async def test_summarize_is_default(self, client: AsyncClient, fake_llm: FakeLLMClient):
        fake_llm.script('{"notes": "# Biology\\n- Cells\\n- Mitosis", "mcqs": [], "shortAnswer": []}')

        response = await client.post("/api/study-mode", json={"subjectId": "bio101"})

        assert response.status_code == 200
        assert response.json() == {"notes": "# Biology\n- Cells\n- Mitosis", "mcqs": [], "shortAnswer": []}
        assert "Produce a study summary" in fake_llm.last_prompt

    @pytest.mark.asyncio
    async def test_summary_fallback(self, client: AsyncClient, fake_llm: FakeLLMClient):
        fake_llm.script('{"mcqs": [], "shortAnswer": []}')

        response = await client.post("/api/study-mode", json={"subjectId": "bio101", "mode": "summarize"})

        assert response.json()["notes"] == SUMMARY_FALLBACK

    @pytest.mark.asyncio
    async def test_practice(self, client: AsyncClient, fake_llm: FakeLLMClient):
        fake_llm.script(
            json.dumps(
                {
                    "notes": "",
                    "mcqs": [
                        {
                            "question": "Basic unit of life?",
                            "options": ["Cell", "Atom", "Organ", "Tissue"],
                            "correctKey": "A",
                            "explanation": "From a.txt",
                            "citation": "a.txt",
                        }
                    ],
                    "shortAnswer": [{"question": "Phases of mitosis?", "answer": "Four", "citation": "b.txt"}],
                }
            )
        )

        response = await client.post("/api/study-mode", json={"subjectId": "bio101", "mode": "practice"})

        assert response.status_code == 200
        data = response.json()
        assert data["mcqs"][0]["correctKey"] == "A"
        assert data["shortAnswer"][0] == {"question": "Phases of mitosis?", "answer": "Four", "citation": "b.txt"}

    @pytest.mark.asyncio
    async def test_single_file(self, client: AsyncClient, fake_llm: FakeLLMClient):
        fake_llm.script('{"notes": "Mitosis"}')

        response = await client.post("/api/study-mode", json={"subjectId": "bio101", "fileName": "b.txt"})

        assert response.status_code == 200
        assert "a.txt" not in fake_llm.last_prompt

    @pytest.mark.asyncio
    async def test_no_notes(self, client: AsyncClient, fake_llm: FakeLLMClient):
        response = await client.post("/api/study-mode", json={"subjectId": "empty"})

        assert response.status_code == 400
        assert response.json() == {"detail": NO_NOTES_MESSAGE}

        missing_file = await client.post("/api/study-mode", json={"subjectId": "bio101", "fileName": "zzz.txt"})
        assert missing_file.status_code == 400

    @pytest.mark.asyncio
    async def test_invalid_modes(self, client: AsyncClient):
        assert (await client.post("/api/study-mode", json={"subjectId": "bio101", "mode": "answer"})).status_code == 400
        assert (await client.post("/api/study-mode", json={"subjectId": "bio101", "mode": "quiz"})).status_code == 400
