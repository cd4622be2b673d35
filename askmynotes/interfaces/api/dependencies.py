"""FastAPI dependencies for use in API endpoints."""

from typing import Annotated, Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from ...infrastructure.config.settings import Settings, get_settings
from ...infrastructure.database import async_session
from ...infrastructure.llm import LLMClient, get_llm_client
from ...modules.chat.history import HistoryRecorder, get_history_recorder
from ...modules.chat.services import ChatService
from ...modules.store.base import NoteStore
from ...modules.store.sql import SQLNoteStore
from ...modules.study.services import StudyService
from ...modules.subject.services import SubjectService
from ...modules.upload.services import UploadService

DbSession = Annotated[AsyncSession, Depends(async_session)]
AppSettings = Annotated[Settings, Depends(get_settings)]


def get_owner_id(
    settings: AppSettings,
    x_user_id: Annotated[Optional[str], Header(description="Authenticated user id, set by the auth gateway")] = None,
) -> str:
    """Owner of every record the request touches.

    Authentication happens upstream; the gateway forwards the user id in
    ``X-User-Id``. Without it, requests act on behalf of the default owner.
    """
    if x_user_id and x_user_id.strip():
        return x_user_id.strip()
    return settings.DEFAULT_OWNER_ID


def get_note_store(db: DbSession) -> NoteStore:
    """Dependency for providing a note store bound to the request session."""
    return SQLNoteStore(db)


def get_upload_service(settings: AppSettings) -> UploadService:
    return UploadService(settings)


def get_chat_service(settings: AppSettings) -> ChatService:
    return ChatService(settings)


def get_study_service(settings: AppSettings) -> StudyService:
    return StudyService(settings)


def get_subject_service() -> SubjectService:
    return SubjectService()


OwnerId = Annotated[str, Depends(get_owner_id)]
Store = Annotated[NoteStore, Depends(get_note_store)]
LLM = Annotated[LLMClient, Depends(get_llm_client)]
Recorder = Annotated[HistoryRecorder, Depends(get_history_recorder)]
