"""Chat API endpoints."""

from typing import Union

from fastapi import APIRouter, Depends

from ....modules.chat.schemas import ChatNotFoundResponse, ChatRequest
from ....modules.chat.services import ChatService
from ....modules.response.schemas import AnswerResult
from ..dependencies import LLM, OwnerId, Recorder, Store, get_chat_service

router = APIRouter(tags=["Chat"])


@router.post(
    "/chat",
    response_model=None,
    summary="Ask About Notes",
    description="""
    Answers a question using only the notes stored for a subject.

    The answer carries a confidence level, verbatim evidence quotes and the
    source files it cites. When the subject has no notes the response is
    `{"notFound": true, "subjectName": ...}` instead.
    """,
    responses={
        200: {"model": AnswerResult, "description": "Answer, or a not-found marker when the subject has no notes"},
        400: {"description": "Invalid request"},
        429: {"description": "The language model is rate limited"},
        500: {"description": "The language model failed or returned unusable output"},
    },
)
async def chat(
    request: ChatRequest,
    owner_id: OwnerId,
    store: Store,
    llm: LLM,
    recorder: Recorder,
    chat_service: ChatService = Depends(get_chat_service),
) -> Union[AnswerResult, ChatNotFoundResponse]:
    """Answer a question from a subject's notes."""
    return await chat_service.ask(
        owner_id,
        request.subject_id,
        request.question,
        request.subject_name,
        store,
        llm,
        recorder,
    )
