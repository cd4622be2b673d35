"""Language model infrastructure."""

from .client import GroqLLMClient, LLMClient, get_llm_client

__all__ = ["GroqLLMClient", "LLMClient", "get_llm_client"]
