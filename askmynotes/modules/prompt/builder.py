"""Prompt templates for each study mode.

Every template pins the model to the supplied notes and to a single JSON
object of a fixed shape; ``modules.response.validator`` parses that shape.
"""

from typing import Callable, Dict, Optional

from .modes import StudyMode

PRACTICE_MCQ_COUNT = 5
PRACTICE_OPTION_COUNT = 4
PRACTICE_SHORT_ANSWER_COUNT = 3

GROUNDING_RULES = """RULES:
- Use ONLY the information in the NOTES section. Do not use outside knowledge.
- Never invent facts, quotes, numbers or file names that are not in the notes.
- Respond with a single valid JSON object and nothing else (no prose, no code fences)."""

ANSWER_TEMPLATE = """You are "AskMyNotes", a study assistant for the subject "{subject_name}".
Answer the student's question strictly from the notes below.

{rules}
- If the notes do not contain the answer, set "notFound" to true, leave "answer" empty and use empty lists.
- "evidence" holds short verbatim quotes from the notes that support the answer.
- "citations" holds the file names (from the "--- Source: ... ---" headers) the evidence came from.
- "confidence" is exactly one of "High", "Medium" or "Low".

NOTES:
{context}

QUESTION: {question}

Respond ONLY with JSON of this exact shape:
{{
  "notFound": false,
  "answer": "markdown string",
  "confidence": "High" | "Medium" | "Low",
  "evidence": ["verbatim quote"],
  "citations": ["file name"]
}}"""

SUMMARIZE_TEMPLATE = """Produce a study summary for "{subject_name}" based STRICTLY on these notes.

{rules}

NOTES:
{context}

REQUIREMENTS:
1. "notes": a substantial Markdown summary with headers and bullet points covering the key ideas.
2. Leave "mcqs" and "shortAnswer" as empty arrays [].

Respond ONLY with JSON of this exact shape:
{{
  "notes": "Full Markdown summary here...",
  "mcqs": [],
  "shortAnswer": []
}}"""

PRACTICE_TEMPLATE = """Generate a practice set for "{subject_name}" based STRICTLY on these notes.

{rules}

NOTES:
{context}

REQUIREMENTS:
1. "mcqs": exactly {mcq_count} multiple choice questions. Each has exactly {option_count} "options",
   a one-letter "correctKey" ("A" to "{last_key}") naming the correct option, an "explanation",
   and a "citation" naming the source file.
2. "shortAnswer": exactly {short_answer_count} flashcard-style questions, each with an "answer" and a "citation".
3. Leave "notes" as an empty string "".

Respond ONLY with JSON of this exact shape:
{{
  "notes": "",
  "mcqs": [{{"question": "", "options": ["", "", "", ""], "correctKey": "A", "explanation": "", "citation": ""}}],
  "shortAnswer": [{{"question": "", "answer": "", "citation": ""}}]
}}"""


def _answer_prompt(subject_name: str, context: str, question: Optional[str]) -> str:
    if question is None or not question.strip():
        raise ValueError("A question is required in answer mode")

    return ANSWER_TEMPLATE.format(
        subject_name=subject_name,
        rules=GROUNDING_RULES,
        context=context,
        question=question.strip(),
    )


def _summarize_prompt(subject_name: str, context: str, question: Optional[str]) -> str:
    return SUMMARIZE_TEMPLATE.format(subject_name=subject_name, rules=GROUNDING_RULES, context=context)


def _practice_prompt(subject_name: str, context: str, question: Optional[str]) -> str:
    return PRACTICE_TEMPLATE.format(
        subject_name=subject_name,
        rules=GROUNDING_RULES,
        context=context,
        mcq_count=PRACTICE_MCQ_COUNT,
        option_count=PRACTICE_OPTION_COUNT,
        last_key=chr(ord("A") + PRACTICE_OPTION_COUNT - 1),
        short_answer_count=PRACTICE_SHORT_ANSWER_COUNT,
    )


PROMPT_BUILDERS: Dict[StudyMode, Callable[[str, str, Optional[str]], str]] = {
    StudyMode.ANSWER: _answer_prompt,
    StudyMode.SUMMARIZE: _summarize_prompt,
    StudyMode.PRACTICE: _practice_prompt,
}


def build_prompt(mode: StudyMode, subject_name: str, context: str, question: Optional[str] = None) -> str:
    """Render the prompt for a study mode.

    Args:
        mode: Requested generation behaviour
        subject_name: Display name of the subject, quoted in the prompt
        context: Assembled notes context
        question: The student's question (answer mode only)

    Returns:
        The complete prompt string

    Raises:
        ValueError: If answer mode is requested without a question
    """
    builder = PROMPT_BUILDERS[StudyMode(mode)]
    return builder(subject_name, context, question)
