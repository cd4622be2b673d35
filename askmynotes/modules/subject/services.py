"""Subject management: listing, renaming, deleting and file access."""

from typing import List, Optional

from ...infrastructure.logging import get_logger
from ..common.exceptions import NoteFileNotFoundError, SubjectNotFoundError
from ..store.base import NoteStore
from .schemas import SubjectFileInfo, SubjectRead, SubjectWithFiles

logger = get_logger(__name__)

DEFAULT_SUBJECT_NAME = "Subject"


class SubjectService:
    """Owner-scoped operations on subjects and their files."""

    async def resolve_subject_name(
        self, owner_id: str, subject_id: str, store: NoteStore, requested_name: Optional[str] = None
    ) -> str:
        """Name used in prompts: the caller's name, else the stored one, else a generic label."""
        if requested_name and requested_name.strip():
            return requested_name.strip()

        subject = await store.get_subject(owner_id, subject_id)
        if subject is not None and subject.display_name:
            return subject.display_name
        return DEFAULT_SUBJECT_NAME

    async def list_subjects(self, owner_id: str, store: NoteStore) -> List[SubjectWithFiles]:
        """List the owner's subjects, newest first, each with its files in upload order."""
        subjects = await store.list_subjects(owner_id)

        listing = []
        for subject in subjects:
            files = await store.find_files_by_subject(owner_id, subject.subject_id)
            listing.append(
                SubjectWithFiles(
                    id=subject.subject_id,
                    subject_id=subject.subject_id,
                    name=subject.display_name,
                    created_at=subject.created_at,
                    files=[SubjectFileInfo(name=f.file_name, uploaded_at=f.uploaded_at) for f in files],
                )
            )
        return listing

    async def rename_subject(self, owner_id: str, subject_id: str, name: str, store: NoteStore) -> SubjectRead:
        subject = await store.rename_subject(owner_id, subject_id, name.strip())
        if subject is None:
            raise SubjectNotFoundError(f"Subject {subject_id} not found")

        logger.info(f"Renamed subject {subject_id} to {subject.display_name}", extra={"owner_id": owner_id})
        return subject

    async def delete_subject(self, owner_id: str, subject_id: str, store: NoteStore) -> int:
        """Delete a subject together with all of its files.

        Files are removed even when the subject record itself is missing, so a
        half-created subject can still be cleaned up.

        Returns:
            Number of files deleted

        Raises:
            SubjectNotFoundError: If no subject record existed
        """
        deleted_files = await self.clear_subject(owner_id, subject_id, store)

        if not await store.delete_subject(owner_id, subject_id):
            raise SubjectNotFoundError(f"Subject {subject_id} not found")

        logger.info(f"Deleted subject {subject_id} and {deleted_files} file(s)", extra={"owner_id": owner_id})
        return deleted_files

    async def clear_subject(self, owner_id: str, subject_id: str, store: NoteStore) -> int:
        """Delete every file of a subject but keep the subject itself.

        Returns:
            Number of files deleted
        """
        files = await store.find_files_by_subject(owner_id, subject_id)
        blob_refs = [f.remote_blob_ref for f in files if f.remote_blob_ref]
        if blob_refs:
            # No blob provider is bundled; the references are only reported.
            logger.info(
                f"Subject {subject_id} referenced {len(blob_refs)} remote blob(s)",
                extra={"owner_id": owner_id, "blob_refs": blob_refs},
            )

        deleted = await store.delete_files(owner_id, subject_id)
        logger.info(f"Cleared {deleted} file(s) from subject {subject_id}", extra={"owner_id": owner_id})
        return deleted

    async def delete_file(self, owner_id: str, subject_id: str, file_name: str, store: NoteStore) -> None:
        deleted = await store.delete_files(owner_id, subject_id, file_name=file_name)
        if not deleted:
            raise NoteFileNotFoundError(f"File {file_name} not found in subject {subject_id}")

        logger.info(f"Deleted file {file_name} from subject {subject_id}", extra={"owner_id": owner_id})

    async def get_file_content(self, owner_id: str, subject_id: str, file_name: str, store: NoteStore) -> str:
        files = await store.find_files_by_subject(owner_id, subject_id, file_name=file_name)
        if not files:
            raise NoteFileNotFoundError(f"File {file_name} not found in subject {subject_id}")
        return files[0].extracted_text
