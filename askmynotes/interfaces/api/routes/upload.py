"""Upload API endpoints."""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from ....modules.common.schemas import SuccessResponse
from ....modules.subject.services import SubjectService
from ....modules.upload.schemas import ClearSubjectRequest, UploadResponse
from ....modules.upload.services import UploadService
from ..dependencies import OwnerId, Store, get_subject_service, get_upload_service

router = APIRouter(tags=["Uploads"])


@router.post(
    "/upload",
    summary="Upload Notes",
    description="""
    Uploads PDF or TXT notes into a subject.

    Files are processed one at a time and each gets its own outcome, so one
    unreadable file does not fail the batch. Re-uploading a file name
    replaces the stored copy.

    - **files**: One or more files (multipart)
    - **subjectId**: Target subject, created on first upload
    - **subjectName**: Optional display name for the subject
    """,
    responses={
        200: {"description": "Per-file upload outcomes"},
        400: {"description": "Missing subject id, no files, or too many files"},
    },
)
async def upload_notes(
    owner_id: OwnerId,
    store: Store,
    files: Annotated[Optional[List[UploadFile]], File(description="Notes to upload")] = None,
    subject_id: Annotated[Optional[str], Form(alias="subjectId")] = None,
    subject_name: Annotated[Optional[str], Form(alias="subjectName")] = None,
    upload_service: UploadService = Depends(get_upload_service),
) -> UploadResponse:
    """Upload notes into a subject."""
    uploads = files or []
    upload_service.validate_batch(subject_id, len(uploads))
    return await upload_service.ingest(owner_id, subject_id.strip(), subject_name, uploads, store)


@router.post(
    "/clear-subject",
    status_code=status.HTTP_200_OK,
    summary="Clear Subject Notes",
    description="Deletes every file of a subject. The subject itself is kept.",
    responses={
        200: {"description": "Subject cleared"},
        400: {"description": "Missing subject id"},
    },
)
async def clear_subject(
    request: ClearSubjectRequest,
    owner_id: OwnerId,
    store: Store,
    subject_service: SubjectService = Depends(get_subject_service),
) -> SuccessResponse:
    """Delete all files of a subject."""
    await subject_service.clear_subject(owner_id, request.subject_id, store)
    return SuccessResponse(success=True)
