"""Upload ingestion: spool, extract and store a batch of note files."""

import os
import re
import uuid
from typing import List, Optional, Protocol, Sequence

import anyio

from ...infrastructure.config.settings import Settings
from ...infrastructure.extraction import extract_text, file_extension
from ...infrastructure.logging import get_logger
from ..common.exceptions import DomainError, ExtractionError, UnsupportedFileTypeError, ValidationError
from ..store.base import NoteStore
from .schemas import UploadFileResult, UploadResponse, UploadStage, UploadStatus

logger = get_logger(__name__)

SPOOL_CHUNK_SIZE = 1024 * 1024
_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class IncomingFile(Protocol):
    """What ingestion needs from an uploaded file (FastAPI's UploadFile fits)."""

    filename: Optional[str]

    async def read(self, size: int = -1) -> bytes: ...


class FileTooLargeError(ValidationError):
    """Raised while spooling a file that exceeds the per-file size limit."""

    pass


def _format_size(num_bytes: int) -> str:
    if num_bytes >= 1024 * 1024:
        return f"{num_bytes / (1024 * 1024):g} MB"
    return f"{num_bytes} bytes"


class UploadService:
    """Ingests uploaded files into a subject.

    Files are processed one at a time. Each file is spooled to the upload
    directory, extracted and stored; a failure is recorded in that file's
    result and the batch moves on. The spooled copy is removed on every path.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    def validate_batch(self, subject_id: Optional[str], file_count: int) -> None:
        """Reject batches that cannot be processed at all.

        Raises:
            ValidationError: Missing subject id, no files, or too many files
        """
        if subject_id is None or not str(subject_id).strip():
            raise ValidationError("subjectId is required")
        if file_count == 0:
            raise ValidationError("No files uploaded")
        if file_count > self.settings.UPLOAD_MAX_FILES:
            raise ValidationError(f"Too many files: at most {self.settings.UPLOAD_MAX_FILES} files per upload")

    async def ingest(
        self,
        owner_id: str,
        subject_id: str,
        subject_name: Optional[str],
        uploads: Sequence[IncomingFile],
        store: NoteStore,
    ) -> UploadResponse:
        """Ingest a batch of files into a subject.

        Args:
            owner_id: Owner of the subject
            subject_id: Target subject, created on first upload
            subject_name: Display name to store for the subject
            uploads: Files in the order they were received
            store: Note store

        Returns:
            Per-file outcomes in input order
        """
        self.validate_batch(subject_id, len(uploads))

        display_name = subject_name.strip() if subject_name and subject_name.strip() else f"Subject {subject_id}"
        await store.upsert_subject(owner_id, subject_id, display_name)

        logger.info(
            f"Uploading {len(uploads)} file(s) for subject {display_name} ({subject_id})",
            extra={"owner_id": owner_id, "subject_id": subject_id},
        )

        await anyio.Path(self.settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)

        results: List[UploadFileResult] = []
        for upload in uploads:
            results.append(await self._ingest_one(owner_id, subject_id, upload, store))

        return UploadResponse(success=True, subject_id=subject_id, files=results)

    async def _ingest_one(
        self, owner_id: str, subject_id: str, upload: IncomingFile, store: NoteStore
    ) -> UploadFileResult:
        file_name = os.path.basename(upload.filename or "")
        temp_path: Optional[str] = None
        self._log_stage(UploadStage.RECEIVED, file_name, subject_id)

        try:
            if not file_name:
                raise ValidationError("File name is missing")
            self._check_extension(file_name)

            temp_path = self._temp_path(file_name)
            await self._spool(upload, temp_path)

            self._log_stage(UploadStage.EXTRACTING, file_name, subject_id)
            try:
                text = await extract_text(temp_path, file_name)
            except ExtractionError:
                self._log_stage(UploadStage.EXTRACTION_FAILED, file_name, subject_id)
                raise
            self._log_stage(UploadStage.EXTRACTED, file_name, subject_id)

            await store.create_file(owner_id, subject_id, file_name, text)
            self._log_stage(UploadStage.PERSISTED, file_name, subject_id)

            return UploadFileResult(file_name=file_name, status=UploadStatus.SUCCESS, length=len(text))
        except DomainError as e:
            logger.warning(f"Upload of {file_name or '<unnamed>'} failed: {e}", extra={"subject_id": subject_id})
            return UploadFileResult(file_name=file_name, status=UploadStatus.ERROR, error=str(e))
        except OSError as e:
            logger.error(f"Could not spool {file_name} to disk: {e}", extra={"subject_id": subject_id})
            return UploadFileResult(
                file_name=file_name, status=UploadStatus.ERROR, error="Could not store the upload, please retry"
            )
        finally:
            await self._cleanup(temp_path)
            self._log_stage(UploadStage.TEMP_CLEANED, file_name, subject_id)

    def _check_extension(self, file_name: str) -> None:
        ext = file_extension(file_name)
        allowed = self.settings.UPLOAD_ALLOWED_EXTENSIONS_LIST
        if ext not in allowed:
            allowed_display = ", ".join(e.lstrip(".").upper() for e in allowed)
            raise UnsupportedFileTypeError(f"Unsupported file type '{ext or file_name}'. Allowed: {allowed_display}")

    def _temp_path(self, file_name: str) -> str:
        safe_name = _UNSAFE_FILENAME_CHARS.sub("_", file_name)
        return os.path.join(self.settings.UPLOAD_DIR, f"{uuid.uuid4().hex}-{safe_name}")

    async def _spool(self, upload: IncomingFile, temp_path: str) -> int:
        """Copy the upload to disk, enforcing the per-file size limit."""
        max_size = self.settings.UPLOAD_MAX_FILE_SIZE
        written = 0

        async with await anyio.open_file(temp_path, "wb") as out:
            while True:
                chunk = await upload.read(SPOOL_CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > max_size:
                    raise FileTooLargeError(f"File exceeds the maximum size of {_format_size(max_size)}")
                await out.write(chunk)

        return written

    async def _cleanup(self, temp_path: Optional[str]) -> None:
        if temp_path is None:
            return
        path = anyio.Path(temp_path)
        if await path.exists():
            await path.unlink()

    def _log_stage(self, stage: UploadStage, file_name: str, subject_id: str) -> None:
        logger.debug(f"{file_name or '<unnamed>'}: {stage.value}", extra={"subject_id": subject_id, "stage": stage.value})
