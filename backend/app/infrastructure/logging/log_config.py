"""Log levels for the knowledge store, applied once from the FastAPI lifespan.

Three groups of loggers can be tuned apart from the root level: the
database drivers (SQL statements get loud at DEBUG), uvicorn, and the
knowledge services together with the storage backends.
"""

import logging
import sys

from app.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Settings field -> loggers it governs
_LOGGER_GROUPS: dict[str, tuple[str, ...]] = {
    "log_level_sql": ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite", "asyncpg"),
    "log_level_uvicorn": ("uvicorn", "uvicorn.access", "uvicorn.error"),
    "log_level_knowledge": ("app.application.services", "app.infrastructure.storage"),
}


def setup_logging(settings: Settings | None = None) -> None:
    """Set the root level and every group level from ``settings``.

    A stderr handler is attached only when the root logger has none, so
    running under uvicorn keeps uvicorn's own handlers.
    """
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    levels = {}
    for field_name, logger_names in _LOGGER_GROUPS.items():
        level = _parse_level(getattr(settings, field_name))
        levels[field_name.removeprefix("log_level_")] = logging.getLevelName(level)
        for name in logger_names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug("Log levels: root=%s %s", settings.log_level, levels)


def _parse_level(raw: str) -> int:
    """``"debug"`` -> ``logging.DEBUG``; unknown names fall back to INFO."""
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else logging.INFO
