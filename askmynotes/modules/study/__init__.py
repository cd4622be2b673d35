"""Study material generation: summaries and practice sets."""

from .schemas import StudyModeRequest
from .services import StudyService

__all__ = ["StudyModeRequest", "StudyService"]
