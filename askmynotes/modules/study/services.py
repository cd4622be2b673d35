"""Summary and practice-set generation."""

from typing import Optional

from ...infrastructure.config.settings import Settings
from ...infrastructure.llm import LLMClient
from ...infrastructure.logging import get_logger
from ..common.constants import NO_NOTES_MESSAGE
from ..common.exceptions import NotesNotFoundError, ValidationError
from ..context.services import ContextService
from ..prompt import StudyMode, build_prompt
from ..response import StudyResult, generate_validated
from ..store.base import NoteStore
from ..subject.services import SubjectService

logger = get_logger(__name__)


class StudyService:
    """Builds study material from a subject's notes."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.context_service = ContextService()
        self.subject_service = SubjectService()

    async def generate(
        self,
        owner_id: str,
        subject_id: str,
        mode: StudyMode,
        subject_name: Optional[str],
        file_name: Optional[str],
        store: NoteStore,
        llm: LLMClient,
    ) -> StudyResult:
        """Generate a summary or practice set.

        Raises:
            ValidationError: If ``mode`` is not a generation mode
            NotesNotFoundError: If the subject (or the requested file) has no notes
            UpstreamModelError: If the model call fails or its output stays unparseable
        """
        mode = StudyMode(mode)
        if not mode.is_generation:
            raise ValidationError("mode must be 'summarize' or 'practice'")

        name = await self.subject_service.resolve_subject_name(owner_id, subject_id, store, subject_name)

        context = await self.context_service.assemble_context(
            owner_id,
            subject_id,
            store,
            max_chars=self.settings.context_budget(mode),
            file_name=file_name,
        )
        if context is None:
            raise NotesNotFoundError(NO_NOTES_MESSAGE)

        prompt = build_prompt(mode, name, context)
        result = await generate_validated(
            llm,
            mode,
            prompt,
            model=self.settings.LLM_STUDY_MODEL,
            parse_retries=self.settings.LLM_PARSE_RETRIES,
        )

        logger.info(
            f"Generated {mode.value} for subject {subject_id}",
            extra={"owner_id": owner_id, "file_name": file_name, "mcqs": len(result.mcqs)},
        )
        return result
