"""Pydantic schemas for study material generation."""

from typing import Optional

from pydantic import Field, field_validator

from ..common.schemas import CamelModel, SubjectIdentifier
from ..prompt.modes import StudyMode


class StudyModeRequest(CamelModel):
    """Request for a summary or practice set, for a whole subject or one file."""

    subject_id: SubjectIdentifier
    mode: StudyMode = Field(default=StudyMode.SUMMARIZE, description="summarize or practice")
    subject_name: Optional[str] = Field(default=None, max_length=255)
    file_name: Optional[str] = Field(default=None, max_length=255, description="Restrict generation to this file")

    @field_validator("mode")
    @classmethod
    def validate_generation_mode(cls, v: StudyMode) -> StudyMode:
        if not v.is_generation:
            raise ValueError("mode must be 'summarize' or 'practice'")
        return v

    @field_validator("file_name")
    @classmethod
    def blank_file_name_means_whole_subject(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v
