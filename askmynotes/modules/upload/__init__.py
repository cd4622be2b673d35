"""Upload ingestion of note files."""

from .schemas import ClearSubjectRequest, UploadFileResult, UploadResponse, UploadStage, UploadStatus
from .services import UploadService

__all__ = [
    "ClearSubjectRequest",
    "UploadFileResult",
    "UploadResponse",
    "UploadService",
    "UploadStage",
    "UploadStatus",
]
