"""Test configuration and fixtures for the AskMyNotes backend."""

import os
import tempfile
from pathlib import Path

# Settings are read at import time; point them at throwaway locations first.
_TEST_ROOT = Path(tempfile.mkdtemp(prefix="askmynotes-tests-"))
os.environ.setdefault("ENVIRONMENT", "local")
os.environ["DATABASE_URL_OVERRIDE"] = f"sqlite+aiosqlite:///{_TEST_ROOT / 'default.db'}"
os.environ["UPLOAD_DIR"] = str(_TEST_ROOT / "uploads")
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ["GROQ_API_KEY"] = ""

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402

from askmynotes.infrastructure.config.settings import Settings, get_settings  # noqa: E402
from askmynotes.infrastructure.database.session import Base, async_session  # noqa: E402
from askmynotes.infrastructure.llm import get_llm_client  # noqa: E402
from askmynotes.infrastructure.logging import configure_testing_logging, mark_logging_configured  # noqa: E402
from askmynotes.interfaces.main import app  # noqa: E402
from askmynotes.modules.chat.history import HistoryRecorder, get_history_recorder  # noqa: E402
from askmynotes.modules.store.sql import SQLNoteStore  # noqa: E402
from tests.fakes import FakeLLMClient, InMemoryNoteStore  # noqa: E402

configure_testing_logging()
mark_logging_configured()


def use_postgres() -> bool:
    """Run the database fixtures against PostgreSQL when TEST_POSTGRES=1."""
    return os.environ.get("TEST_POSTGRES") == "1"


@pytest.fixture(scope="session")
def pg_container():
    """Create a PostgreSQL container for testing."""
    from testcontainers.core.docker_client import DockerClient
    from testcontainers.postgres import PostgresContainer

    try:
        DockerClient()
    except Exception:
        pytest.skip("Docker is required, but not running")

    with PostgresContainer("postgres:16-alpine") as pg:
        yield pg


@pytest.fixture
def test_db_url(request, tmp_path) -> str:
    """Database URL for one test: a fresh SQLite file, or the shared container."""
    if not use_postgres():
        return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"

    pg = request.getfixturevalue("pg_container")
    host = pg.get_container_host_ip()
    port = pg.get_exposed_port(5432)
    return f"postgresql+asyncpg://{pg.username}:{pg.password}@{host}:{port}/{pg.dbname}"


@pytest_asyncio.fixture
async def test_db_engine(test_db_url):
    """Create a SQLAlchemy engine with every table in place."""
    engine = create_async_engine(test_db_url, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_db_engine):
    return async_sessionmaker(test_db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create a test database session."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def sql_store(db_session) -> SQLNoteStore:
    return SQLNoteStore(db_session)


@pytest.fixture
def memory_store() -> InMemoryNoteStore:
    return InMemoryNoteStore()


@pytest.fixture
def fake_llm() -> FakeLLMClient:
    return FakeLLMClient()


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings with a private upload directory and the default limits."""
    return Settings(UPLOAD_DIR=str(tmp_path / "uploads"))


@pytest_asyncio.fixture
async def recorder(session_factory):
    history_recorder = HistoryRecorder(session_factory)
    yield history_recorder
    await history_recorder.drain()


@pytest_asyncio.fixture
async def client(session_factory, test_settings, fake_llm, recorder):
    """Create a test client where each request gets its own database session."""
    app.dependency_overrides = {}

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[async_session] = override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_llm_client] = lambda: fake_llm
    app.dependency_overrides[get_history_recorder] = lambda: recorder

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    await recorder.drain()
    app.dependency_overrides = {}
