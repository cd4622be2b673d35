import logging
import os
from enum import Enum
from typing import List

from pydantic_settings import BaseSettings
from starlette.config import Config

logger = logging.getLogger(__name__)

current_file_dir = os.path.dirname(os.path.realpath(__file__))
project_root = os.path.abspath(os.path.join(current_file_dir, "..", "..", ".."))

env_paths = [
    "/code/.env",
    os.path.join(project_root, ".env"),
    "/.env",
]

env_path = next((path for path in env_paths if os.path.isfile(path)), env_paths[0])
logger.info(f"Using environment file at: {env_path}")

config = Config(env_path)


class EnvironmentOption(str, Enum):
    """Environment options for the application."""

    PRODUCTION = "production"
    STAGING = "staging"
    DEVELOPMENT = "development"
    LOCAL = "local"


class EnvironmentSettings(BaseSettings):
    """Environment-related settings."""

    ENVIRONMENT: EnvironmentOption = config("ENVIRONMENT", default=EnvironmentOption.DEVELOPMENT, cast=EnvironmentOption)


class DatabaseSettings(BaseSettings):
    """Database-related settings."""

    POSTGRES_USER: str = config("POSTGRES_USER", default="postgres")
    POSTGRES_PASSWORD: str = config("POSTGRES_PASSWORD", default="postgres")
    POSTGRES_SERVER: str = config("POSTGRES_SERVER", default="localhost")
    POSTGRES_PORT: int = config("POSTGRES_PORT", default=5432, cast=int)
    POSTGRES_DB: str = config("POSTGRES_DB", default="askmynotes")
    POSTGRES_ASYNC_PREFIX: str = config("POSTGRES_ASYNC_PREFIX", default="postgresql+asyncpg://")
    DATABASE_URL_OVERRIDE: str = config("DATABASE_URL_OVERRIDE", default="")
    CREATE_TABLES_ON_STARTUP: bool = config("CREATE_TABLES_ON_STARTUP", default=True, cast=bool)

    POSTGRES_POOL_SIZE: int = config("POSTGRES_POOL_SIZE", default=20, cast=int)
    POSTGRES_MAX_OVERFLOW: int = config("POSTGRES_MAX_OVERFLOW", default=0, cast=int)

    @property
    def DATABASE_URL(self) -> str:
        """Get the full database URL.

        DATABASE_URL_OVERRIDE wins when set, which is how local SQLite
        (``sqlite+aiosqlite:///./askmynotes.db``) deployments are configured.
        """
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return (
            f"{self.POSTGRES_ASYNC_PREFIX}{self.POSTGRES_USER}:"
            f"{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:"
            f"{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def DATABASE_IS_SQLITE(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


class CORSSettings(BaseSettings):
    """CORS-related settings."""

    CORS_ENABLED: bool = config("CORS_ENABLED", default=True, cast=bool)
    CORS_ORIGINS: str = config("CORS_ORIGINS", default="*")
    CORS_ALLOW_CREDENTIALS: bool = config("CORS_ALLOW_CREDENTIALS", default=True, cast=bool)

    @property
    def CORS_ORIGINS_LIST(self) -> List[str]:
        """Get CORS origins as a list."""
        if not self.CORS_ORIGINS:
            return ["*"]
        return [x.strip() for x in self.CORS_ORIGINS.split(",") if x.strip()]

    CORS_ALLOW_METHODS: str = config("CORS_ALLOW_METHODS", default="*")
    CORS_ALLOW_HEADERS: str = config("CORS_ALLOW_HEADERS", default="*")


class CompressionSettings(BaseSettings):
    """Compression-related settings."""

    GZIP_ENABLED: bool = config("GZIP_ENABLED", default=True, cast=bool)
    GZIP_MINIMUM_SIZE: int = config("GZIP_MINIMUM_SIZE", default=1000, cast=int)


class APIDocSettings(BaseSettings):
    """API documentation settings."""

    ENABLE_DOCS_IN_PRODUCTION: bool = config("ENABLE_DOCS_IN_PRODUCTION", default=False, cast=bool)
    DOCS_URL: str = config("DOCS_URL", default="/docs")
    REDOC_URL: str = config("REDOC_URL", default="/redoc")
    OPENAPI_URL: str = config("OPENAPI_URL", default="/openapi.json")


class APISettings(BaseSettings):
    """API-related settings."""

    API_PREFIX: str = "/api"
    DEFAULT_OWNER_ID: str = config("DEFAULT_OWNER_ID", default="local")


class AppSettings(BaseSettings):
    """Application-related settings."""

    APP_NAME: str = "AskMyNotes API"
    APP_DESCRIPTION: str = "Study assistant that answers questions and builds study sets from uploaded notes"
    DEBUG: bool = config("DEBUG", default=False, cast=bool)
    VERSION: str = "0.1.0"


class ContextSettings(BaseSettings):
    """Character budgets for the assembled notes context."""

    CONTEXT_MAX_CHARS_ANSWER: int = config("CONTEXT_MAX_CHARS_ANSWER", default=12000, cast=int)
    CONTEXT_MAX_CHARS_GENERATION: int = config("CONTEXT_MAX_CHARS_GENERATION", default=30000, cast=int)

    def context_budget(self, mode: str) -> int:
        """Get the context budget for a study mode.

        Question answering gets the smaller budget, every generation mode
        (summaries, practice sets) shares the larger one.
        """
        if str(getattr(mode, "value", mode)) == "answer":
            return self.CONTEXT_MAX_CHARS_ANSWER
        return self.CONTEXT_MAX_CHARS_GENERATION


class UploadSettings(BaseSettings):
    """Upload ingestion settings."""

    UPLOAD_DIR: str = config("UPLOAD_DIR", default=os.path.join(project_root, "uploads"))
    UPLOAD_MAX_FILES: int = config("UPLOAD_MAX_FILES", default=20, cast=int)
    UPLOAD_MAX_FILE_SIZE: int = config("UPLOAD_MAX_FILE_SIZE", default=50 * 1024 * 1024, cast=int)
    UPLOAD_ALLOWED_EXTENSIONS: str = config("UPLOAD_ALLOWED_EXTENSIONS", default=".pdf,.txt")

    @property
    def UPLOAD_ALLOWED_EXTENSIONS_LIST(self) -> List[str]:
        """Get allowed extensions as a lowercase list with leading dots."""
        extensions = []
        for ext in self.UPLOAD_ALLOWED_EXTENSIONS.split(","):
            ext = ext.strip().lower()
            if not ext:
                continue
            extensions.append(ext if ext.startswith(".") else f".{ext}")
        return extensions


class LLMSettings(BaseSettings):
    """Language model provider settings."""

    GROQ_API_KEY: str = config("GROQ_API_KEY", default="")
    LLM_CHAT_MODEL: str = config("LLM_CHAT_MODEL", default="llama-3.3-70b-versatile")
    LLM_STUDY_MODEL: str = config("LLM_STUDY_MODEL", default="llama-3.1-8b-instant")
    LLM_TEMPERATURE: float = config("LLM_TEMPERATURE", default=0.2, cast=float)
    LLM_TIMEOUT_SECONDS: float = config("LLM_TIMEOUT_SECONDS", default=60.0, cast=float)
    LLM_PARSE_RETRIES: int = config("LLM_PARSE_RETRIES", default=1, cast=int)


class LoggingSettings(BaseSettings):
    """Centralized logging configuration settings."""

    LOG_LEVEL: str = config("LOG_LEVEL", default="INFO")
    LOG_FORMAT: str = config("LOG_FORMAT", default="structured")  # "simple", "detailed", "structured", "json"

    LOG_CONSOLE_ENABLED: bool = config("LOG_CONSOLE_ENABLED", default=True, cast=bool)
    LOG_FILE_ENABLED: bool = config("LOG_FILE_ENABLED", default=False, cast=bool)
    LOG_FILE_PATH: str = config("LOG_FILE_PATH", default="logs/askmynotes.log")
    LOG_FILE_MAX_SIZE: int = config("LOG_FILE_MAX_SIZE", default=10485760, cast=int)
    LOG_FILE_BACKUP_COUNT: int = config("LOG_FILE_BACKUP_COUNT", default=5, cast=int)

    LOG_CORRELATION_ID: bool = config("LOG_CORRELATION_ID", default=True, cast=bool)
    LOG_DEVELOPMENT_VERBOSE: bool = config("LOG_DEVELOPMENT_VERBOSE", default=True, cast=bool)
    LOG_PRODUCTION_OPTIMIZE: bool = config("LOG_PRODUCTION_OPTIMIZE", default=True, cast=bool)

    @property
    def LOG_LEVEL_INT(self) -> int:
        """Convert string log level to integer."""
        level_map = {
            "DEBUG": logging.DEBUG,
            "INFO": logging.INFO,
            "WARNING": logging.WARNING,
            "ERROR": logging.ERROR,
            "CRITICAL": logging.CRITICAL,
        }
        return level_map.get(self.LOG_LEVEL.upper(), logging.INFO)


class Settings(
    EnvironmentSettings,
    DatabaseSettings,
    CORSSettings,
    CompressionSettings,
    APIDocSettings,
    APISettings,
    AppSettings,
    ContextSettings,
    UploadSettings,
    LLMSettings,
    LoggingSettings,
):
    """Main settings class that combines all setting categories."""

    pass


settings = Settings()


def get_settings() -> Settings:
    """Get application settings.

    Returns:
        The application settings.
    """
    return settings
