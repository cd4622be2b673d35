from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, MappedAsDataclass

from ..config.settings import settings


def _engine_options() -> Dict[str, Any]:
    """Pool options for the configured database.

    SQLite drivers manage their own connections, so pool sizing only applies
    to the PostgreSQL deployment.
    """
    if settings.DATABASE_IS_SQLITE:
        return {}
    return {
        "pool_size": settings.POSTGRES_POOL_SIZE,
        "max_overflow": settings.POSTGRES_MAX_OVERFLOW,
    }


engine = create_async_engine(
    settings.DATABASE_URL,
    echo=False,
    future=True,
    **_engine_options(),
)

local_session = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


class Base(DeclarativeBase, MappedAsDataclass):
    """Declarative base for every table in the notes store.

    Models are mapped dataclasses, so columns declared with ``init=False``
    (ids, server-side timestamps) are excluded from the generated
    ``__init__`` and the rest become keyword arguments:

        ```python
        subject = Subject(owner_id="u1", subject_id="bio101", display_name="Biology")
        ```
    """

    pass


async def async_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for database session management.

    Yields:
        AsyncSession: A session that is closed when the request finishes.

    Example:
        ```python
        @router.get("/subjects")
        async def list_subjects(db: AsyncSession = Depends(async_session)):
            ...
        ```
    """
    async_get_db = local_session
    async with async_get_db() as db:
        yield db


async def create_tables() -> None:
    """Create all tables in the database if they don't exist.

    Idempotent: existing tables are left unchanged. Used by the application
    lifespan when CREATE_TABLES_ON_STARTUP is enabled and by
    ``scripts/create_tables.py``.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
