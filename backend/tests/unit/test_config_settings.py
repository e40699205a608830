"""Unit tests for application settings configuration."""

import logging
from pathlib import Path

from app.config import Settings
from app.infrastructure.logging.log_config import setup_logging
from app.infrastructure.database.session import get_async_url


def test_settings_uses_backend_env_file_independent_of_cwd():
    """Settings should always include backend/.env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_backend_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_backend_env in normalized
    assert str(Path(".env")) in normalized


def test_empty_database_url_selects_memory_storage():
    assert Settings(database_url="").uses_database is False
    assert Settings(database_url="  ").uses_database is False
    assert Settings(database_url="sqlite:///./knowledge.db").uses_database is True


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("STORAGE_TIMEOUT_SECONDS", "0.5")
    monkeypatch.setenv("DEFAULT_USER_ID", "admin")
    settings = Settings()
    assert settings.storage_timeout_seconds == 0.5
    assert settings.default_user_id == "admin"


def test_database_urls_are_converted_to_async_drivers():
    assert get_async_url("sqlite:///./kb.db") == "sqlite+aiosqlite:///./kb.db"
    assert get_async_url("postgresql://u:p@db/kb") == "postgresql+asyncpg://u:p@db/kb"
    assert get_async_url("sqlite+aiosqlite:///kb.db") == "sqlite+aiosqlite:///kb.db"


def test_setup_logging_applies_group_levels():
    logger_names = (
        "",
        "sqlalchemy.engine",
        "asyncpg",
        "uvicorn.access",
        "app.infrastructure.storage",
    )
    saved = {name: logging.getLogger(name).level for name in logger_names}
    try:
        setup_logging(
            Settings(
                log_level="warning",
                log_level_sql="DEBUG",
                log_level_uvicorn="ERROR",
                log_level_knowledge="chatty",
            )
        )
        assert logging.getLogger().level == logging.WARNING
        assert logging.getLogger("sqlalchemy.engine").level == logging.DEBUG
        assert logging.getLogger("asyncpg").level == logging.DEBUG
        assert logging.getLogger("uvicorn.access").level == logging.ERROR
        assert logging.getLogger("app.infrastructure.storage").level == logging.INFO
    finally:
        for name, level in saved.items():
            logging.getLogger(name).setLevel(level)
