"""Model round trip: send a prompt and validate what comes back."""

from typing import Optional

from ...infrastructure.llm import LLMClient
from ...infrastructure.logging import get_logger
from ..common.exceptions import ModelResponseParseError
from ..prompt.modes import StudyMode
from .validator import ModelResult, validate_response

logger = get_logger(__name__)


async def generate_validated(
    llm: LLMClient,
    mode: StudyMode,
    prompt: str,
    model: Optional[str] = None,
    parse_retries: int = 1,
) -> ModelResult:
    """Call the model and validate its output for ``mode``.

    Unparseable output is retried up to ``parse_retries`` times with the same
    prompt. Upstream failures (timeouts, rate limits) are never retried.

    Raises:
        ModelResponseParseError: If every attempt returned unparseable output
        UpstreamModelError: If the model call itself failed
    """
    attempts = max(parse_retries, 0) + 1

    for attempt in range(1, attempts + 1):
        raw_text = await llm.generate(prompt, model=model)
        try:
            return validate_response(mode, raw_text)
        except ModelResponseParseError:
            logger.warning(
                f"Unparseable {mode.value} response (attempt {attempt}/{attempts})",
                extra={"raw_chars": len(raw_text or "")},
            )
            if attempt == attempts:
                raise

    raise ModelResponseParseError("The model response was not a valid JSON object")
