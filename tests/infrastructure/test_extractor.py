"""Tests for text extraction."""

import fitz
import pytest

from askmynotes.infrastructure.extraction import extract_text, extract_text_sync, file_extension
from askmynotes.modules.common.exceptions import ExtractionError, UnsupportedFileTypeError


def test_file_extension():
    assert file_extension("Notes.PDF") == ".pdf"
    assert file_extension("archive.tar.txt") == ".txt"
    assert file_extension("README") == ""


def test_extract_txt_replaces_undecodable_bytes(tmp_path):
    path = tmp_path / "upload.bin"
    path.write_bytes("Café notes ".encode("utf-8") + b"\xff\xfe")

    text = extract_text_sync(str(path), "notes.txt")

    assert text.startswith("Café notes")
    assert "�" in text


def test_extract_pdf_joins_pages(tmp_path):
    doc = fitz.open()
    for line in ["Page one about cells", "Page two about mitosis"]:
        doc.new_page().insert_text((72, 72), line)
    path = tmp_path / "upload.bin"
    doc.save(str(path))
    doc.close()

    text = extract_text_sync(str(path), "biology.pdf")

    assert "Page one about cells" in text
    assert "Page two about mitosis" in text
    assert text.index("Page one") < text.index("Page two")


def test_unsupported_extension(tmp_path):
    path = tmp_path / "upload.bin"
    path.write_bytes(b"data")

    with pytest.raises(UnsupportedFileTypeError):
        extract_text_sync(str(path), "slides.pptx")


def test_corrupt_pdf(tmp_path):
    path = tmp_path / "upload.bin"
    path.write_bytes(b"%PDF-1.7 truncated garbage")

    with pytest.raises(ExtractionError):
        extract_text_sync(str(path), "broken.pdf")


@pytest.mark.asyncio
async def test_extract_text_runs_off_loop(tmp_path):
    path = tmp_path / "upload.bin"
    path.write_text("Async extraction", encoding="utf-8")

    assert await extract_text(str(path), "notes.txt") == "Async extraction"
