"""Plain-text extraction for uploaded notes."""

import asyncio
import os
from pathlib import Path
from typing import Callable, Dict

import fitz  # PyMuPDF

from ...modules.common.exceptions import ExtractionError, UnsupportedFileTypeError
from ..logging import get_logger

logger = get_logger(__name__)


def file_extension(file_name: str) -> str:
    """Lowercase extension of a file name, including the dot."""
    return os.path.splitext(file_name)[1].lower()


def _extract_pdf(path: str) -> str:
    with fitz.open(path) as pdf:
        return "\n".join(page.get_text() for page in pdf)


def _extract_txt(path: str) -> str:
    return Path(path).read_text(encoding="utf-8", errors="replace")


EXTRACTORS: Dict[str, Callable[[str], str]] = {
    ".pdf": _extract_pdf,
    ".txt": _extract_txt,
}


def extract_text_sync(path: str, file_name: str) -> str:
    """Extract plain text from a file on disk.

    Args:
        path: Location of the uploaded bytes
        file_name: Original file name; its extension selects the parser

    Returns:
        The extracted text

    Raises:
        UnsupportedFileTypeError: If the extension has no extractor
        ExtractionError: If parsing fails or yields no text
    """
    ext = file_extension(file_name)
    extractor = EXTRACTORS.get(ext)
    if extractor is None:
        raise UnsupportedFileTypeError(f"Unsupported file type '{ext or file_name}'. Allowed: PDF, TXT")

    try:
        text = extractor(path)
    except Exception as e:
        logger.warning(f"Extraction failed for {file_name}: {e}")
        raise ExtractionError(f"Could not extract text from {file_name}: {e}") from e

    if not text.strip():
        raise ExtractionError(f"No text could be extracted from {file_name}")

    logger.info(f"Extracted {len(text)} chars from {file_name}")
    return text


async def extract_text(path: str, file_name: str) -> str:
    """Extract text in a worker thread so parsing never blocks the event loop."""
    return await asyncio.to_thread(extract_text_sync, path, file_name)
