from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..infrastructure.app_factory import create_application, lifespan_factory
from ..infrastructure.config.settings import get_settings
from ..interfaces.api import router as api_router
from ..modules.chat.history import get_history_recorder

settings = get_settings()


@asynccontextmanager
async def notes_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Default lifespan plus a final flush of pending chat history writes."""
    default_lifespan = lifespan_factory(settings, create_tables_on_startup=settings.CREATE_TABLES_ON_STARTUP)
    async with default_lifespan(app):
        yield
        await get_history_recorder().drain()


app = create_application(
    router=api_router,
    settings=settings,
    lifespan=notes_lifespan,
    summary="Study assistant backend grounded in your own notes",
    description="""
    # AskMyNotes API

    Upload PDF or TXT notes into subjects, then:

    * **Chat**: answers drawn strictly from a subject's notes, with evidence and citations
    * **Summaries**: a study summary of a subject or a single file
    * **Practice sets**: multiple choice and short answer questions with citations

    Every request is scoped to the owner named in the `X-User-Id` header.
    """,
)
