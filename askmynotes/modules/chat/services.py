"""Question answering over a subject's notes."""

from typing import Optional, Union

from ...infrastructure.config.settings import Settings
from ...infrastructure.llm import LLMClient
from ...infrastructure.logging import get_logger
from ..common.exceptions import ValidationError
from ..context.services import ContextService
from ..prompt import StudyMode, build_prompt
from ..response import AnswerResult, generate_validated
from ..store.base import NoteStore
from ..subject.services import SubjectService
from .history import HistoryRecorder
from .schemas import ChatNotFoundResponse

logger = get_logger(__name__)


class ChatService:
    """Answers questions strictly from the notes of one subject."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.context_service = ContextService()
        self.subject_service = SubjectService()

    async def ask(
        self,
        owner_id: str,
        subject_id: str,
        question: str,
        subject_name: Optional[str],
        store: NoteStore,
        llm: LLMClient,
        recorder: HistoryRecorder,
    ) -> Union[AnswerResult, ChatNotFoundResponse]:
        """Answer a question from a subject's notes.

        Args:
            owner_id: Owner of the subject
            subject_id: Subject whose notes ground the answer
            question: The student's question
            subject_name: Display name supplied by the client, if any
            store: Note store
            llm: Model client
            recorder: History recorder for the answered question

        Returns:
            The validated answer, or a not-found marker when the subject has no notes

        Raises:
            ValidationError: If the question is blank
            UpstreamModelError: If the model call fails or its output stays unparseable
        """
        if not question or not question.strip():
            raise ValidationError("A question is required")

        name = await self.subject_service.resolve_subject_name(owner_id, subject_id, store, subject_name)

        context = await self.context_service.assemble_context(
            owner_id,
            subject_id,
            store,
            max_chars=self.settings.context_budget(StudyMode.ANSWER),
        )
        if context is None:
            return ChatNotFoundResponse(subject_name=name)

        prompt = build_prompt(StudyMode.ANSWER, name, context, question)
        result = await generate_validated(
            llm,
            StudyMode.ANSWER,
            prompt,
            model=self.settings.LLM_CHAT_MODEL,
            parse_retries=self.settings.LLM_PARSE_RETRIES,
        )

        recorder.record(owner_id, subject_id, question, result.model_dump(mode="json", by_alias=True))

        logger.info(
            f"Answered question for subject {subject_id}",
            extra={"owner_id": owner_id, "not_found": result.not_found, "confidence": result.confidence.value},
        )
        return result
