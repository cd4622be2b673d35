"""Prompt construction for the study modes."""

from .builder import build_prompt
from .modes import StudyMode

__all__ = ["StudyMode", "build_prompt"]
