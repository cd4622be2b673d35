"""Pydantic schemas for note files."""

from datetime import datetime
from typing import Optional

from ..common.schemas import CamelModel


class NoteFileRead(CamelModel):
    """Schema for reading a stored note file, extracted text included."""

    id: Optional[int] = None
    owner_id: str
    subject_id: str
    file_name: str
    extracted_text: str
    uploaded_at: datetime
    remote_blob_ref: Optional[str] = None


class FileContentResponse(CamelModel):
    """Raw extracted text of one file."""

    text: str
