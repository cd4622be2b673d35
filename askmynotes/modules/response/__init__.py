"""Validation of structured model output."""

from .generation import generate_validated
from .schemas import AnswerResult, Confidence, MultipleChoiceQuestion, ShortAnswerQuestion, StudyResult
from .validator import ModelResult, parse_json_object, validate_response

__all__ = [
    "AnswerResult",
    "Confidence",
    "ModelResult",
    "MultipleChoiceQuestion",
    "ShortAnswerQuestion",
    "StudyResult",
    "generate_validated",
    "parse_json_object",
    "validate_response",
]
