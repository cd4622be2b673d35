"""Pydantic schemas for upload ingestion."""

from enum import Enum
from typing import List, Optional

from pydantic import Field

from ..common.schemas import CamelModel, SubjectIdentifier


class UploadStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class UploadStage(str, Enum):
    """Lifecycle of one file within an upload batch.

    Every file ends in TEMP_CLEANED, whichever branch it took.
    """

    RECEIVED = "received"
    EXTRACTING = "extracting"
    EXTRACTED = "extracted"
    EXTRACTION_FAILED = "extraction_failed"
    PERSISTED = "persisted"
    TEMP_CLEANED = "temp_cleaned"


class UploadFileResult(CamelModel):
    """Outcome for a single file of the batch."""

    file_name: str
    status: UploadStatus
    length: Optional[int] = Field(default=None, description="Characters extracted, on success")
    error: Optional[str] = Field(default=None, description="Failure reason, on error")


class UploadResponse(CamelModel):
    success: bool = True
    subject_id: str
    files: List[UploadFileResult] = Field(default_factory=list)


class ClearSubjectRequest(CamelModel):
    subject_id: SubjectIdentifier
