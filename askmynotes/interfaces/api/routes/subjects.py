"""Subject API endpoints."""

from typing import List

from fastapi import APIRouter, Depends

from ....modules.common.schemas import MessageResponse
from ....modules.note.schemas import FileContentResponse
from ....modules.subject.schemas import SubjectRead, SubjectRename, SubjectWithFiles
from ....modules.subject.services import SubjectService
from ..dependencies import OwnerId, Store, get_subject_service

router = APIRouter(prefix="/subjects", tags=["Subjects"])


@router.get(
    "",
    summary="List Subjects",
    description="Lists the caller's subjects, newest first, each with its files in upload order.",
    responses={200: {"description": "Subjects with file metadata"}},
)
async def list_subjects(
    owner_id: OwnerId,
    store: Store,
    subject_service: SubjectService = Depends(get_subject_service),
) -> List[SubjectWithFiles]:
    """List subjects with their files."""
    return await subject_service.list_subjects(owner_id, store)


@router.patch(
    "/{subject_id}",
    summary="Rename Subject",
    responses={
        200: {"description": "Renamed subject"},
        404: {"description": "Subject not found"},
    },
)
async def rename_subject(
    subject_id: str,
    rename: SubjectRename,
    owner_id: OwnerId,
    store: Store,
    subject_service: SubjectService = Depends(get_subject_service),
) -> SubjectRead:
    """Change a subject's display name."""
    return await subject_service.rename_subject(owner_id, subject_id, rename.name, store)


@router.delete(
    "/{subject_id}",
    summary="Delete Subject",
    description="Deletes a subject together with all of its files.",
    responses={
        200: {"description": "Subject deleted"},
        404: {"description": "Subject not found"},
    },
)
async def delete_subject(
    subject_id: str,
    owner_id: OwnerId,
    store: Store,
    subject_service: SubjectService = Depends(get_subject_service),
) -> MessageResponse:
    """Delete a subject and its files."""
    await subject_service.delete_subject(owner_id, subject_id, store)
    return MessageResponse(message="Subject and associated files deleted")


@router.delete(
    "/{subject_id}/files/{file_name}",
    summary="Delete File",
    responses={
        200: {"description": "File deleted"},
        404: {"description": "File not found"},
    },
)
async def delete_file(
    subject_id: str,
    file_name: str,
    owner_id: OwnerId,
    store: Store,
    subject_service: SubjectService = Depends(get_subject_service),
) -> MessageResponse:
    """Delete one file of a subject."""
    await subject_service.delete_file(owner_id, subject_id, file_name, store)
    return MessageResponse(message="File deleted")


@router.get(
    "/{subject_id}/files/{file_name}/content",
    summary="Get File Content",
    description="Returns the text extracted from one uploaded file.",
    responses={
        200: {"description": "Extracted text"},
        404: {"description": "File not found"},
    },
)
async def get_file_content(
    subject_id: str,
    file_name: str,
    owner_id: OwnerId,
    store: Store,
    subject_service: SubjectService = Depends(get_subject_service),
) -> FileContentResponse:
    """Get the extracted text of a file."""
    text = await subject_service.get_file_content(owner_id, subject_id, file_name, store)
    return FileContentResponse(text=text)
