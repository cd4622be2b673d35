"""SQLAlchemy implementation of the note store."""

from typing import Any, Dict, List, Optional

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...infrastructure.logging import get_logger
from ..chat.crud import chat_history_crud
from ..chat.models import ChatHistoryEntry
from ..common.exceptions import StorageError
from ..note.crud import note_file_crud
from ..note.models import NoteFile
from ..note.schemas import NoteFileRead
from ..subject.crud import subject_crud
from ..subject.models import Subject
from ..subject.schemas import SubjectRead

logger = get_logger(__name__)


class SQLNoteStore:
    """Note store backed by the relational database.

    One instance wraps one session; the API builds a store per request and
    the history recorder builds one per write.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_files_by_subject(
        self, owner_id: str, subject_id: str, file_name: Optional[str] = None
    ) -> List[NoteFileRead]:
        filters: Dict[str, Any] = {"owner_id": owner_id, "subject_id": subject_id}
        if file_name is not None:
            filters["file_name"] = file_name

        # id breaks ties between files stored within the same clock tick
        stmt = await note_file_crud.select(
            sort_columns=["uploaded_at", "id"],
            sort_orders=["asc", "asc"],
            **filters,
        )
        result = await self.db.execute(stmt)

        return [NoteFileRead.model_validate(dict(row._mapping)) for row in result.fetchall()]

    async def create_file(
        self,
        owner_id: str,
        subject_id: str,
        file_name: str,
        extracted_text: str,
        remote_blob_ref: Optional[str] = None,
    ) -> NoteFileRead:
        """Replace-or-insert a file in one transaction (delete, then insert)."""
        await self.db.execute(
            delete(NoteFile).where(
                NoteFile.owner_id == owner_id,
                NoteFile.subject_id == subject_id,
                NoteFile.file_name == file_name,
            )
        )
        note_file = NoteFile(
            owner_id=owner_id,
            subject_id=subject_id,
            file_name=file_name,
            extracted_text=extracted_text,
            remote_blob_ref=remote_blob_ref,
        )
        self.db.add(note_file)

        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.warning(f"Could not store {file_name} in subject {subject_id}: {e}")
            raise StorageError(f"Could not save {file_name}, please retry the upload") from e

        return NoteFileRead.model_validate(note_file, from_attributes=True)

    async def delete_files(self, owner_id: str, subject_id: str, file_name: Optional[str] = None) -> int:
        filters: Dict[str, Any] = {"owner_id": owner_id, "subject_id": subject_id}
        if file_name is not None:
            filters["file_name"] = file_name

        total = await note_file_crud.count(db=self.db, **filters)
        if total:
            await note_file_crud.db_delete(db=self.db, allow_multiple=True, **filters)
        return total

    async def upsert_subject(self, owner_id: str, subject_id: str, display_name: str) -> SubjectRead:
        exists = await subject_crud.exists(db=self.db, owner_id=owner_id, subject_id=subject_id)
        if exists:
            await subject_crud.update(
                db=self.db,
                object={"display_name": display_name},
                owner_id=owner_id,
                subject_id=subject_id,
            )
        else:
            self.db.add(Subject(owner_id=owner_id, subject_id=subject_id, display_name=display_name))
            try:
                await self.db.commit()
            except SQLAlchemyError as e:
                await self.db.rollback()
                raise StorageError(f"Could not create subject {subject_id}") from e

        subject = await self.get_subject(owner_id, subject_id)
        if subject is None:
            raise StorageError(f"Subject {subject_id} vanished during upsert")
        return subject

    async def get_subject(self, owner_id: str, subject_id: str) -> Optional[SubjectRead]:
        row = await subject_crud.get(db=self.db, owner_id=owner_id, subject_id=subject_id)
        if not row:
            return None
        return SubjectRead.model_validate(row)

    async def list_subjects(self, owner_id: str) -> List[SubjectRead]:
        stmt = await subject_crud.select(owner_id=owner_id, sort_columns=["created_at", "id"], sort_orders=["desc", "desc"])
        result = await self.db.execute(stmt)
        return [SubjectRead.model_validate(dict(row._mapping)) for row in result.fetchall()]

    async def rename_subject(self, owner_id: str, subject_id: str, display_name: str) -> Optional[SubjectRead]:
        exists = await subject_crud.exists(db=self.db, owner_id=owner_id, subject_id=subject_id)
        if not exists:
            return None

        await subject_crud.update(
            db=self.db,
            object={"display_name": display_name},
            owner_id=owner_id,
            subject_id=subject_id,
        )
        return await self.get_subject(owner_id, subject_id)

    async def delete_subject(self, owner_id: str, subject_id: str) -> bool:
        exists = await subject_crud.exists(db=self.db, owner_id=owner_id, subject_id=subject_id)
        if not exists:
            return False

        await subject_crud.db_delete(db=self.db, owner_id=owner_id, subject_id=subject_id)
        return True

    async def add_chat_history(
        self, owner_id: str, subject_id: str, question: str, response: Dict[str, Any]
    ) -> None:
        self.db.add(ChatHistoryEntry(owner_id=owner_id, subject_id=subject_id, question=question, response=response))
        await self.db.commit()

    async def count_subjects(self) -> int:
        return await subject_crud.count(db=self.db)

    async def count_files(self) -> int:
        return await note_file_crud.count(db=self.db)

    async def count_chat_history(self, owner_id: str, subject_id: str) -> int:
        return await chat_history_crud.count(db=self.db, owner_id=owner_id, subject_id=subject_id)
