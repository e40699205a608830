from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache


_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Knowledge Store API"
    app_version: str = "0.1.0"
    app_env: str = "development"

    # Empty selects the in-memory store; a sqlite:/// or postgresql:// URL selects SQLAlchemy
    database_url: str = ""
    database_echo: bool = False
    cors_origins: list[str] = ["http://localhost:5173"]

    # Every storage call is raced against this timeout (seconds)
    storage_timeout_seconds: float = 3.0

    # Requests without an X-User-Id header act as this user
    default_user_id: str = "1"

    # Load default categories and sample articles into an empty store
    seed_sample_data: bool = True

    # Max buffered events per SSE subscriber before it is disconnected
    sse_queue_size: int = 100

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # SQLAlchemy engine and the async drivers
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_knowledge: str = "INFO"        # knowledge services and storage

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    @property
    def uses_database(self) -> bool:
        return bool(self.database_url.strip())


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
