"""Language model client used for answers and study material generation."""

import asyncio
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Optional

import groq
from groq import AsyncGroq

from ...modules.common.exceptions import RateLimitedError, UpstreamModelError
from ..config.settings import get_settings
from ..logging import get_logger

logger = get_logger(__name__)


class LLMClient(ABC):
    """Capability interface: prompt in, raw model text out.

    Implementations raise UpstreamModelError (or RateLimitedError) on any
    provider failure, so callers never see provider-specific exceptions.
    """

    @abstractmethod
    async def generate(self, prompt: str, model: Optional[str] = None) -> str:
        """Send a prompt and return the model's raw text output."""


class GroqLLMClient(LLMClient):
    """LLM client for the Groq chat completions API.

    Requests JSON output, applies a hard timeout around every call and
    disables the SDK's own retries; a slow or failing call surfaces directly
    to the caller.
    """

    def __init__(
        self,
        api_key: str,
        default_model: str,
        timeout_seconds: float = 60.0,
        temperature: float = 0.2,
    ):
        """Initialize the client.

        Args:
            api_key: Groq API key
            default_model: Model used when generate() is called without one
            timeout_seconds: Upper bound for a single completion call
            temperature: Sampling temperature
        """
        self.api_key = api_key
        self.default_model = default_model
        self.timeout_seconds = timeout_seconds
        self.temperature = temperature
        self._client: Optional[AsyncGroq] = None

    def _get_client(self) -> AsyncGroq:
        if not self.api_key:
            raise UpstreamModelError("The language model is not configured (GROQ_API_KEY is missing)")
        if self._client is None:
            self._client = AsyncGroq(api_key=self.api_key, timeout=self.timeout_seconds, max_retries=0)
        return self._client

    async def generate(self, prompt: str, model: Optional[str] = None) -> str:
        client = self._get_client()
        model_name = model or self.default_model

        logger.info(f"Sending prompt to {model_name}", extra={"prompt_chars": len(prompt)})
        try:
            completion = await asyncio.wait_for(
                client.chat.completions.create(
                    messages=[{"role": "user", "content": prompt}],
                    model=model_name,
                    temperature=self.temperature,
                    response_format={"type": "json_object"},
                ),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.warning(f"{model_name} timed out after {self.timeout_seconds}s")
            raise UpstreamModelError(f"The model did not respond within {self.timeout_seconds:g} seconds") from e
        except groq.RateLimitError as e:
            logger.warning(f"{model_name} rate limited the request: {e}")
            raise RateLimitedError(str(e)) from e
        except groq.APIStatusError as e:
            if e.status_code == 429:
                raise RateLimitedError(str(e)) from e
            logger.error(f"{model_name} returned HTTP {e.status_code}: {e}")
            raise UpstreamModelError(f"The model request failed: {e}") from e
        except groq.APIError as e:
            logger.error(f"{model_name} request failed: {e}")
            raise UpstreamModelError(f"The model request failed: {e}") from e

        if not completion.choices or completion.choices[0].message.content is None:
            raise UpstreamModelError("The model returned no content")

        logger.info(f"{model_name} responded", extra={"finish_reason": completion.choices[0].finish_reason})
        return completion.choices[0].message.content


@lru_cache()
def get_llm_client() -> LLMClient:
    """Get singleton LLM client configured from settings."""
    settings = get_settings()
    return GroqLLMClient(
        api_key=settings.GROQ_API_KEY,
        default_model=settings.LLM_CHAT_MODEL,
        timeout_seconds=settings.LLM_TIMEOUT_SECONDS,
        temperature=settings.LLM_TEMPERATURE,
    )
