"""Tests for model response parsing and validation."""

import pytest

from askmynotes.modules.common.constants import SUMMARY_FALLBACK
from askmynotes.modules.common.exceptions import ModelResponseParseError
from askmynotes.modules.prompt import StudyMode
from askmynotes.modules.response import AnswerResult, Confidence, StudyResult, parse_json_object, validate_response


def test_summary_missing_notes_gets_fallback():
    result = validate_response(StudyMode.SUMMARIZE, '{"mcqs":[],"shortAnswer":[]}')

    assert isinstance(result, StudyResult)
    assert result.notes == SUMMARY_FALLBACK
    assert result.notes.strip()
    assert result.mcqs == []
    assert result.short_answer == []


def test_summary_keeps_model_notes():
    result = validate_response(StudyMode.SUMMARIZE, '{"notes": "# Cells\\n- basic unit"}')

    assert result.notes == "# Cells\n- basic unit"


def test_practice_missing_lists_become_empty():
    result = validate_response(StudyMode.PRACTICE, '{"notes": ""}')

    assert result.mcqs == []
    assert result.short_answer == []
    assert result.notes == ""


def test_practice_items_are_coerced():
    raw = """{
        "notes": "",
        "mcqs": [
            {"question": "What is the unit of life?", "options": ["Cell", "Atom", "Organ", "Tissue"],
             "correctKey": "a", "explanation": "Stated in the notes", "citation": "a.txt", "difficulty": "easy"},
            "not an object",
            {"question": "Phases of mitosis?", "options": "four"}
        ],
        "shortAnswer": [{"question": "Define mitosis", "answer": 42}]
    }"""

    result = validate_response(StudyMode.PRACTICE, raw)

    assert len(result.mcqs) == 2
    first = result.mcqs[0]
    assert first.correct_key == "A"
    assert first.options == ["Cell", "Atom", "Organ", "Tissue"]
    assert first.citation == "a.txt"
    assert result.mcqs[1].options == []
    assert result.mcqs[1].correct_key == ""
    assert result.short_answer[0].answer == "42"
    assert result.short_answer[0].citation == ""


def test_practice_blank_option_keeps_its_position():
    raw = '{"mcqs": [{"question": "Q", "options": ["Alpha", "", "Gamma", null], "correctKey": "C"}]}'

    mcq = validate_response(StudyMode.PRACTICE, raw).mcqs[0]

    assert mcq.options == ["Alpha", "", "Gamma", ""]
    assert mcq.options[ord(mcq.correct_key) - ord("A")] == "Gamma"


def test_answer_defaults_for_partial_output():
    result = validate_response(StudyMode.ANSWER, '{"answer": "Cells are the unit of life.", "confidence": "very high"}')

    assert isinstance(result, AnswerResult)
    assert result.not_found is False
    assert result.answer == "Cells are the unit of life."
    assert result.confidence == Confidence.LOW
    assert result.evidence == []
    assert result.citations == []


def test_answer_full_output():
    raw = (
        '{"notFound": false, "answer": "Four phases.", "confidence": "high", '
        '"evidence": ["Mitosis has four phases."], "citations": ["b.txt"], "extra": {"ignored": true}}'
    )

    result = validate_response(StudyMode.ANSWER, raw)

    assert result.confidence == Confidence.HIGH
    assert result.evidence == ["Mitosis has four phases."]
    assert result.citations == ["b.txt"]
    assert "extra" not in result.model_dump(by_alias=True)


def test_answer_not_found_flag_from_string():
    result = validate_response(StudyMode.ANSWER, '{"notFound": "true"}')

    assert result.not_found is True


def test_answer_serializes_in_camel_case():
    dumped = validate_response(StudyMode.ANSWER, '{"notFound": true}').model_dump(by_alias=True)

    assert set(dumped) == {"notFound", "answer", "confidence", "evidence", "citations"}


@pytest.mark.parametrize(
    "raw",
    [
        '```json\n{"notes": "fenced"}\n```',
        'Here you go:\n```\n{"notes": "fenced"}\n```',
        'Sure! {"notes": "fenced"} Hope this helps.',
    ],
)
def test_json_is_recovered_from_wrapped_output(raw: str):
    assert parse_json_object(raw) == {"notes": "fenced"}


@pytest.mark.parametrize(
    "raw", ["", "   ", "not json at all", "[1, 2, 3]", '[{"notes": "x"}]', '{"notes": "unterminated']
)
def test_unparseable_output_raises(raw: str):
    with pytest.raises(ModelResponseParseError):
        validate_response(StudyMode.SUMMARIZE, raw)
