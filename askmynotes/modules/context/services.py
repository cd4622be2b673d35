"""Context assembly: turn a subject's stored notes into one bounded prompt context."""

from typing import Iterable, List, Optional

from ...infrastructure.logging import get_logger
from ..note.schemas import NoteFileRead
from ..store.base import NoteStore

logger = get_logger(__name__)

SOURCE_HEADER = "--- Source: {file_name} ---"
BLOCK_SEPARATOR = "\n\n"


def order_files(files: Iterable[NoteFileRead]) -> List[NoteFileRead]:
    """Order files by upload time, oldest first.

    The sort is stable, so files sharing a timestamp keep the order the store
    returned them in (insertion order for the SQL store).
    """
    return sorted(files, key=lambda note_file: note_file.uploaded_at)


def render_context(files: Iterable[NoteFileRead], max_chars: int) -> Optional[str]:
    """Concatenate files with source headers and cut the result to ``max_chars``.

    Args:
        files: Files already in concatenation order
        max_chars: Maximum length of the returned string

    Returns:
        The leading ``max_chars`` characters of the concatenation, or None when
        there are no files.
    """
    if max_chars < 0:
        raise ValueError("max_chars must not be negative")

    blocks = [f"{SOURCE_HEADER.format(file_name=f.file_name)}\n{f.extracted_text}" for f in files]
    if not blocks:
        return None

    combined = BLOCK_SEPARATOR.join(blocks)
    return combined[:max_chars]


class ContextService:
    """Assembles the notes context fed to the language model.

    Retrieval is deliberately plain: every file of the subject (or the single
    requested file) is included in upload order and only the final
    concatenation is truncated, so the same files always yield the same
    prompt.
    """

    async def assemble_context(
        self,
        owner_id: str,
        subject_id: str,
        store: NoteStore,
        max_chars: int,
        file_name: Optional[str] = None,
    ) -> Optional[str]:
        """Assemble the context for a subject or one of its files.

        Args:
            owner_id: Owner whose files may be read
            subject_id: Subject to read
            store: Note store to query
            max_chars: Character budget for the assembled context
            file_name: Restrict the context to this file

        Returns:
            The assembled context, or None when no matching files exist
        """
        files = await store.find_files_by_subject(owner_id, subject_id, file_name=file_name)
        if not files:
            logger.info(
                "No notes found for context",
                extra={"owner_id": owner_id, "subject_id": subject_id, "file_name": file_name},
            )
            return None

        context = render_context(order_files(files), max_chars)
        logger.debug(
            f"Assembled context from {len(files)} file(s)",
            extra={"subject_id": subject_id, "context_chars": len(context or "")},
        )
        return context
