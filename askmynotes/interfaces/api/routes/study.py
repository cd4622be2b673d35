"""Study mode API endpoints."""

from fastapi import APIRouter, Depends

from ....modules.response.schemas import StudyResult
from ....modules.study.schemas import StudyModeRequest
from ....modules.study.services import StudyService
from ..dependencies import LLM, OwnerId, Store, get_study_service

router = APIRouter(tags=["Study"])


@router.post(
    "/study-mode",
    summary="Generate Study Material",
    description="""
    Builds a summary or a practice set from a subject's notes.

    - **mode**: `summarize` (default) or `practice`
    - **fileName**: Optional, restricts generation to one file
    """,
    responses={
        200: {"description": "Summary or practice set"},
        400: {"description": "Invalid mode, or no notes for the subject"},
        429: {"description": "The language model is rate limited"},
        500: {"description": "The language model failed or returned unusable output"},
    },
)
async def study_mode(
    request: StudyModeRequest,
    owner_id: OwnerId,
    store: Store,
    llm: LLM,
    study_service: StudyService = Depends(get_study_service),
) -> StudyResult:
    """Generate a summary or practice set."""
    return await study_service.generate(
        owner_id,
        request.subject_id,
        request.mode,
        request.subject_name,
        request.file_name,
        store,
        llm,
    )
