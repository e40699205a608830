"""Storage backends for the knowledge store, selected once at startup.

Both backends hand out a ``KnowledgeRepository`` through ``session()``:
the in-memory backend always yields the same process-wide repository,
the database backend opens one SQLAlchemy session per call and commits
it when the block exits cleanly.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from contextlib import AbstractAsyncContextManager, asynccontextmanager

from app.application.interfaces import KnowledgeRepository
from app.config import Settings
from app.infrastructure.database import Base, create_engine, create_session_factory
from app.infrastructure.database.repositories import SQLAlchemyKnowledgeRepository
from app.infrastructure.memory import InMemoryKnowledgeRepository

logger = logging.getLogger(__name__)


class KnowledgeStorage(ABC):
    """A configured storage backend."""

    name: str

    async def initialize(self) -> None:
        """Prepare the backend (create tables, ...). Idempotent."""

    async def dispose(self) -> None:
        """Release connections and other resources."""

    @abstractmethod
    def session(self) -> AbstractAsyncContextManager[KnowledgeRepository]:
        """Unit of work yielding a repository."""
        ...


class InMemoryKnowledgeStorage(KnowledgeStorage):
    name = "memory"

    def __init__(self, repository: InMemoryKnowledgeRepository | None = None):
        self._repository = repository or InMemoryKnowledgeRepository()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[KnowledgeRepository]:
        yield self._repository


class DatabaseKnowledgeStorage(KnowledgeStorage):
    name = "database"

    def __init__(self, database_url: str, *, echo: bool = False):
        self._engine = create_engine(database_url, echo=echo)
        self._session_factory = create_session_factory(self._engine)

    async def initialize(self) -> None:
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Knowledge tables ready on %s", self._engine.url.render_as_string())

    async def dispose(self) -> None:
        await self._engine.dispose()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[KnowledgeRepository]:
        async with self._session_factory() as session:
            try:
                yield SQLAlchemyKnowledgeRepository(session)
                await session.commit()
            except Exception:
                await session.rollback()
                raise


def build_knowledge_storage(settings: Settings) -> KnowledgeStorage:
    """Pick the backend from configuration: a database URL selects SQLAlchemy."""
    if settings.uses_database:
        storage: KnowledgeStorage = DatabaseKnowledgeStorage(
            settings.database_url, echo=settings.database_echo
        )
    else:
        storage = InMemoryKnowledgeStorage()
    logger.info("Using %s knowledge storage", storage.name)
    return storage
