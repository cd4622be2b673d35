"""Storage capability used by the notes pipeline.

Services depend on this protocol rather than on a session, so the context
assembler, upload ingestion and subject management run unchanged against the
SQL store in production and an in-memory store in tests.
"""

from typing import Any, Dict, List, Optional, Protocol

from ..note.schemas import NoteFileRead
from ..subject.schemas import SubjectRead


class NoteStore(Protocol):
    """Owner-scoped access to subjects, note files and chat history.

    Every query takes the owner id and includes it in its predicate.
    """

    async def find_files_by_subject(
        self, owner_id: str, subject_id: str, file_name: Optional[str] = None
    ) -> List[NoteFileRead]:
        """Files of a subject (optionally one file), ordered by upload time ascending."""
        ...

    async def create_file(
        self,
        owner_id: str,
        subject_id: str,
        file_name: str,
        extracted_text: str,
        remote_blob_ref: Optional[str] = None,
    ) -> NoteFileRead:
        """Store a file, replacing any existing file with the same name in the subject.

        Raises:
            StorageError: If the write could not be committed
        """
        ...

    async def delete_files(self, owner_id: str, subject_id: str, file_name: Optional[str] = None) -> int:
        """Delete a subject's files (or one of them) and return how many were removed."""
        ...

    async def upsert_subject(self, owner_id: str, subject_id: str, display_name: str) -> SubjectRead:
        """Create the subject or update its display name."""
        ...

    async def get_subject(self, owner_id: str, subject_id: str) -> Optional[SubjectRead]: ...

    async def list_subjects(self, owner_id: str) -> List[SubjectRead]:
        """Subjects of an owner, newest first."""
        ...

    async def rename_subject(self, owner_id: str, subject_id: str, display_name: str) -> Optional[SubjectRead]: ...

    async def delete_subject(self, owner_id: str, subject_id: str) -> bool: ...

    async def add_chat_history(
        self, owner_id: str, subject_id: str, question: str, response: Dict[str, Any]
    ) -> None: ...

    async def count_subjects(self) -> int: ...

    async def count_files(self) -> int: ...
