from fastapi import APIRouter

from .chat import router as chat_router
from .health import router as health_router
from .study import router as study_router
from .subjects import router as subjects_router
from .upload import router as upload_router

router = APIRouter()
router.include_router(upload_router)
router.include_router(chat_router)
router.include_router(study_router)
router.include_router(subjects_router)
router.include_router(health_router)
