"""Pydantic schemas for chat requests and responses."""

from typing import Annotated, Optional

from pydantic import Field, field_validator

from ..common.schemas import CamelModel, SubjectIdentifier


class ChatRequest(CamelModel):
    """A question about one subject's notes."""

    subject_id: SubjectIdentifier
    question: Annotated[str, Field(min_length=1, max_length=4000, description="Question to answer from the notes")]
    subject_name: Optional[str] = Field(default=None, max_length=255)

    @field_validator("question")
    @classmethod
    def question_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("question must not be blank")
        return v.strip()


class ChatNotFoundResponse(CamelModel):
    """Returned instead of an answer when the subject has no notes."""

    not_found: bool = True
    subject_name: str
