"""Structured results returned by the language model, after validation."""

from enum import Enum
from typing import List

from pydantic import Field

from ..common.schemas import CamelModel


class Confidence(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class AnswerResult(CamelModel):
    """Answer to a question about a subject's notes."""

    not_found: bool = False
    answer: str = ""
    confidence: Confidence = Confidence.LOW
    evidence: List[str] = Field(default_factory=list, description="Verbatim quotes supporting the answer")
    citations: List[str] = Field(default_factory=list, description="Source file names")


class MultipleChoiceQuestion(CamelModel):
    question: str = ""
    options: List[str] = Field(default_factory=list)
    correct_key: str = ""
    explanation: str = ""
    citation: str = ""


class ShortAnswerQuestion(CamelModel):
    question: str = ""
    answer: str = ""
    citation: str = ""


class StudyResult(CamelModel):
    """Summary or practice set generated from a subject's notes."""

    notes: str = ""
    mcqs: List[MultipleChoiceQuestion] = Field(default_factory=list)
    short_answer: List[ShortAnswerQuestion] = Field(default_factory=list)
