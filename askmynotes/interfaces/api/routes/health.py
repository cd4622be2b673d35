"""Health check endpoint."""

import time
from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from ....infrastructure.logging import get_logger
from ..dependencies import Store

logger = get_logger(__name__)

START_TIME = time.monotonic()

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    status: str = "ok"
    subjects: Optional[int] = None
    files: Optional[int] = None
    uptime: float


@router.get(
    "/health",
    summary="API Health Check",
    description="Health check for monitoring and container orchestration, with store counts when available.",
    responses={200: {"description": "API is healthy and responding"}},
    response_model_exclude_none=True,
)
async def health_check(store: Store) -> HealthResponse:
    """Health check endpoint for Docker health checks."""
    uptime = round(time.monotonic() - START_TIME, 3)
    try:
        subjects = await store.count_subjects()
        files = await store.count_files()
    except SQLAlchemyError as e:
        logger.warning(f"Health check could not count records: {e}")
        return HealthResponse(uptime=uptime)

    return HealthResponse(subjects=subjects, files=files, uptime=uptime)
