"""Pydantic schemas for subject entities."""

from datetime import datetime
from typing import Annotated, List

from pydantic import Field

from ..common.schemas import CamelModel, TimestampSchema


class SubjectRead(TimestampSchema):
    """Schema for reading subject data."""

    owner_id: str
    subject_id: str
    display_name: str


class SubjectFileInfo(CamelModel):
    """File metadata nested under a subject listing."""

    name: str
    uploaded_at: datetime


class SubjectWithFiles(CamelModel):
    """Subject listing entry with the metadata of its files in upload order."""

    id: str = Field(description="Subject identifier, as used by the client")
    subject_id: str
    name: str
    created_at: datetime
    files: List[SubjectFileInfo] = Field(default_factory=list)


class SubjectRename(CamelModel):
    """Schema for renaming a subject."""

    name: Annotated[str, Field(min_length=1, max_length=255, description="New display name")]
