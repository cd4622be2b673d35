"""Parsing and structural validation of model output.

The validator only checks shape. Content is never fact-checked; missing or
malformed fields are replaced with safe defaults and unknown fields are
dropped, so a partially conforming answer still reaches the student. Output
that holds no JSON object, or is JSON of another type, is rejected.
"""

import json
import re
from typing import Any, Callable, Dict, List, Union

from ..common.constants import SUMMARY_FALLBACK
from ..common.exceptions import ModelResponseParseError
from ..prompt.modes import StudyMode
from .schemas import AnswerResult, Confidence, MultipleChoiceQuestion, ShortAnswerQuestion, StudyResult

ModelResult = Union[AnswerResult, StudyResult]

JSON_CANDIDATE_PATTERNS = [
    re.compile(r"```json\s*(.*?)\s*```", re.DOTALL),
    re.compile(r"```\s*(.*?)\s*```", re.DOTALL),
    re.compile(r"\{.*\}", re.DOTALL),
]


def parse_json_object(raw_text: str) -> Dict[str, Any]:
    """Parse the model output as a single JSON object.

    Tries the whole text first, then a fenced code block, then the outermost
    brace-delimited span. Text that is valid JSON as a whole but not an
    object is rejected outright.

    Raises:
        ModelResponseParseError: If no JSON object can be recovered
    """
    if raw_text is None or not raw_text.strip():
        raise ModelResponseParseError("The model returned an empty response")

    try:
        whole = json.loads(raw_text)
    except (json.JSONDecodeError, ValueError):
        pass
    else:
        if not isinstance(whole, dict):
            raise ModelResponseParseError("The model response was JSON but not an object")
        return whole

    candidates = []
    for pattern in JSON_CANDIDATE_PATTERNS:
        candidates.extend(pattern.findall(raw_text))

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except (json.JSONDecodeError, ValueError):
            continue
        if isinstance(parsed, dict):
            return parsed

    raise ModelResponseParseError("The model response was not a valid JSON object")


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or value is None:
        return ""
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def _as_text_list(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value] if value.strip() else []
    if not isinstance(value, list):
        return []
    return [text for text in (_as_text(item) for item in value) if text]


def _as_options(value: Any) -> List[str]:
    # Positions matter: correctKey refers to an option by its index.
    if not isinstance(value, list):
        return []
    return [_as_text(item) for item in value]


def _as_object_list(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


def _as_confidence(value: Any) -> Confidence:
    text = _as_text(value).strip().lower()
    for confidence in Confidence:
        if confidence.value.lower() == text:
            return confidence
    return Confidence.LOW


def _as_option_key(value: Any) -> str:
    key = _as_text(value).strip()
    return key.upper() if len(key) == 1 else key


def _validate_answer(data: Dict[str, Any]) -> AnswerResult:
    return AnswerResult(
        not_found=_as_bool(data.get("notFound")),
        answer=_as_text(data.get("answer")),
        confidence=_as_confidence(data.get("confidence")),
        evidence=_as_text_list(data.get("evidence")),
        citations=_as_text_list(data.get("citations")),
    )


def _study_items(data: Dict[str, Any]) -> StudyResult:
    mcqs = [
        MultipleChoiceQuestion(
            question=_as_text(item.get("question")),
            options=_as_options(item.get("options")),
            correct_key=_as_option_key(item.get("correctKey")),
            explanation=_as_text(item.get("explanation")),
            citation=_as_text(item.get("citation")),
        )
        for item in _as_object_list(data.get("mcqs"))
    ]
    short_answer = [
        ShortAnswerQuestion(
            question=_as_text(item.get("question")),
            answer=_as_text(item.get("answer")),
            citation=_as_text(item.get("citation")),
        )
        for item in _as_object_list(data.get("shortAnswer"))
    ]
    return StudyResult(notes=_as_text(data.get("notes")), mcqs=mcqs, short_answer=short_answer)


def _validate_summary(data: Dict[str, Any]) -> StudyResult:
    result = _study_items(data)
    if not result.notes.strip():
        result.notes = SUMMARY_FALLBACK
    return result


def _validate_practice(data: Dict[str, Any]) -> StudyResult:
    return _study_items(data)


VALIDATORS: Dict[StudyMode, Callable[[Dict[str, Any]], ModelResult]] = {
    StudyMode.ANSWER: _validate_answer,
    StudyMode.SUMMARIZE: _validate_summary,
    StudyMode.PRACTICE: _validate_practice,
}


def validate_response(mode: StudyMode, raw_text: str) -> ModelResult:
    """Parse raw model output and coerce it to the result shape of ``mode``.

    Args:
        mode: Mode the prompt was built for
        raw_text: Raw text returned by the model

    Returns:
        AnswerResult for answer mode, StudyResult otherwise

    Raises:
        ModelResponseParseError: If the text holds no JSON object
    """
    data = parse_json_object(raw_text)
    return VALIDATORS[StudyMode(mode)](data)
