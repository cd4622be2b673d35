"""Tests for context assembly."""

from datetime import UTC, datetime, timedelta

import pytest

from askmynotes.modules.context.services import ContextService, order_files, render_context
from askmynotes.modules.note.schemas import NoteFileRead
from tests.fakes import InMemoryNoteStore


def _note_file(file_name: str, text: str, minutes: int, owner_id: str = "u1", subject_id: str = "bio101") -> NoteFileRead:
    return NoteFileRead(
        owner_id=owner_id,
        subject_id=subject_id,
        file_name=file_name,
        extracted_text=text,
        uploaded_at=datetime(2024, 5, 1, tzinfo=UTC) + timedelta(minutes=minutes),
    )


@pytest.fixture
def context_service():
    """Create context service instance."""
    return ContextService()


@pytest.mark.asyncio
async def test_assemble_context_bio101_scenario(context_service: ContextService, memory_store: InMemoryNoteStore):
    """Files are concatenated with source headers in upload order."""
    await memory_store.create_file("u1", "bio101", "a.txt", "Cells are the basic unit of life.")
    await memory_store.create_file("u1", "bio101", "b.txt", "Mitosis has four phases.")

    context = await context_service.assemble_context("u1", "bio101", memory_store, max_chars=12000)

    assert context == (
        "--- Source: a.txt ---\nCells are the basic unit of life.\n\n"
        "--- Source: b.txt ---\nMitosis has four phases."
    )


def test_order_files_sorts_by_upload_time():
    """Store iteration order does not leak into the context."""
    early = _note_file("a.txt", "first", minutes=1)
    late = _note_file("b.txt", "second", minutes=2)

    assert [f.file_name for f in order_files([late, early])] == ["a.txt", "b.txt"]
    assert render_context(order_files([late, early]), 1000) == render_context(order_files([early, late]), 1000)


def test_order_files_keeps_store_order_for_equal_timestamps():
    first = _note_file("x.txt", "one", minutes=5)
    second = _note_file("y.txt", "two", minutes=5)

    assert [f.file_name for f in order_files([first, second])] == ["x.txt", "y.txt"]


@pytest.mark.asyncio
async def test_assemble_context_is_deterministic(context_service: ContextService, memory_store: InMemoryNoteStore):
    """Repeated calls over the same files return identical output."""
    for index in range(5):
        await memory_store.create_file("u1", "chem", f"part{index}.txt", f"Chapter {index} content")

    results = {await context_service.assemble_context("u1", "chem", memory_store, max_chars=10000) for _ in range(3)}

    assert len(results) == 1


def test_render_context_within_budget_is_unchanged():
    files = [_note_file("a.txt", "short", minutes=1)]
    full = "--- Source: a.txt ---\nshort"

    assert render_context(files, len(full)) == full
    assert render_context(files, len(full) + 100) == full


def test_render_context_truncates_to_exact_prefix():
    files = [_note_file("a.txt", "x" * 50, minutes=1), _note_file("b.txt", "y" * 50, minutes=2)]
    full = render_context(files, 10_000)

    truncated = render_context(files, 40)

    assert len(truncated) == 40
    assert truncated == full[:40]


def test_render_context_zero_budget():
    assert render_context([_note_file("a.txt", "text", minutes=1)], 0) == ""


def test_render_context_without_files_is_none():
    assert render_context([], 100) is None


def test_render_context_rejects_negative_budget():
    with pytest.raises(ValueError):
        render_context([_note_file("a.txt", "text", minutes=1)], -1)


@pytest.mark.asyncio
async def test_assemble_context_isolates_owners(context_service: ContextService, memory_store: InMemoryNoteStore):
    """Subject ids are only unique per owner; other owners' notes never leak in."""
    await memory_store.create_file("ownerA", "math", "mine.txt", "Owner A algebra notes")
    await memory_store.create_file("ownerB", "math", "theirs.txt", "Owner B secret notes")

    context = await context_service.assemble_context("ownerA", "math", memory_store, max_chars=10000)

    assert "Owner A algebra notes" in context
    assert "Owner B secret notes" not in context
    assert "theirs.txt" not in context


@pytest.mark.asyncio
async def test_assemble_context_single_file(context_service: ContextService, memory_store: InMemoryNoteStore):
    await memory_store.create_file("u1", "bio101", "a.txt", "Cells")
    await memory_store.create_file("u1", "bio101", "b.txt", "Mitosis")

    context = await context_service.assemble_context("u1", "bio101", memory_store, max_chars=1000, file_name="b.txt")

    assert context == "--- Source: b.txt ---\nMitosis"


@pytest.mark.asyncio
async def test_assemble_context_not_found(context_service: ContextService, memory_store: InMemoryNoteStore):
    await memory_store.create_file("u1", "bio101", "a.txt", "Cells")

    assert await context_service.assemble_context("u1", "empty", memory_store, max_chars=1000) is None
    assert await context_service.assemble_context("u1", "bio101", memory_store, max_chars=1000, file_name="zzz.txt") is None
