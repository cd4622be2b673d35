"""Tests for subject management."""

import pytest
import pytest_asyncio

from askmynotes.modules.common.exceptions import NoteFileNotFoundError, SubjectNotFoundError
from askmynotes.modules.store.sql import SQLNoteStore
from askmynotes.modules.subject.services import SubjectService


@pytest.fixture
def subject_service():
    """Create subject service instance."""
    return SubjectService()


@pytest_asyncio.fixture
async def populated_store(sql_store: SQLNoteStore) -> SQLNoteStore:
    await sql_store.upsert_subject("u1", "bio101", "Biology")
    await sql_store.create_file("u1", "bio101", "a.txt", "Cells")
    await sql_store.create_file("u1", "bio101", "b.txt", "Mitosis")
    await sql_store.upsert_subject("u1", "chem", "Chemistry")
    await sql_store.upsert_subject("u2", "bio101", "Someone else's biology")
    await sql_store.create_file("u2", "bio101", "a.txt", "Other owner")
    return sql_store


@pytest.mark.asyncio
async def test_list_subjects(subject_service: SubjectService, populated_store: SQLNoteStore):
    subjects = await subject_service.list_subjects("u1", populated_store)

    assert [s.subject_id for s in subjects] == ["chem", "bio101"]
    biology = subjects[1]
    assert biology.id == "bio101"
    assert biology.name == "Biology"
    assert [f.name for f in biology.files] == ["a.txt", "b.txt"]
    assert subjects[0].files == []


@pytest.mark.asyncio
async def test_rename_subject(subject_service: SubjectService, populated_store: SQLNoteStore):
    renamed = await subject_service.rename_subject("u1", "bio101", "  Cell Biology ", populated_store)

    assert renamed.display_name == "Cell Biology"
    assert (await populated_store.get_subject("u2", "bio101")).display_name == "Someone else's biology"

    with pytest.raises(SubjectNotFoundError):
        await subject_service.rename_subject("u1", "missing", "Nope", populated_store)


@pytest.mark.asyncio
async def test_delete_subject_cascades_to_files(subject_service: SubjectService, populated_store: SQLNoteStore):
    deleted = await subject_service.delete_subject("u1", "bio101", populated_store)

    assert deleted == 2
    assert await populated_store.get_subject("u1", "bio101") is None
    assert await populated_store.find_files_by_subject("u1", "bio101") == []
    assert len(await populated_store.find_files_by_subject("u2", "bio101")) == 1

    with pytest.raises(SubjectNotFoundError):
        await subject_service.delete_subject("u1", "bio101", populated_store)


@pytest.mark.asyncio
async def test_clear_subject_keeps_subject(subject_service: SubjectService, populated_store: SQLNoteStore):
    cleared = await subject_service.clear_subject("u1", "bio101", populated_store)

    assert cleared == 2
    assert await populated_store.get_subject("u1", "bio101") is not None
    assert await populated_store.find_files_by_subject("u1", "bio101") == []


@pytest.mark.asyncio
async def test_file_content_and_delete(subject_service: SubjectService, populated_store: SQLNoteStore):
    assert await subject_service.get_file_content("u1", "bio101", "b.txt", populated_store) == "Mitosis"

    await subject_service.delete_file("u1", "bio101", "b.txt", populated_store)

    with pytest.raises(NoteFileNotFoundError):
        await subject_service.get_file_content("u1", "bio101", "b.txt", populated_store)
    with pytest.raises(NoteFileNotFoundError):
        await subject_service.delete_file("u1", "bio101", "b.txt", populated_store)


@pytest.mark.asyncio
async def test_resolve_subject_name(subject_service: SubjectService, populated_store: SQLNoteStore):
    assert await subject_service.resolve_subject_name("u1", "bio101", populated_store, "Given") == "Given"
    assert await subject_service.resolve_subject_name("u1", "bio101", populated_store) == "Biology"
    assert await subject_service.resolve_subject_name("u1", "unknown", populated_store) == "Subject"
