"""Shared plumbing for services that talk to the knowledge repository."""

import asyncio
import logging
from collections.abc import Awaitable
from typing import Any, TypeVar

from app.application.interfaces import KnowledgeRepository
from app.application.services.event_broadcaster import KnowledgeEventBroadcaster, PendingEvents
from app.domain.exceptions import StorageTimeoutError, UnsupportedOperationError

T = TypeVar("T")

logger = logging.getLogger(__name__)


class RepositoryService:
    """Base for knowledge use cases. Depends on the repository port (DI).

    Every storage call goes through ``_storage()``, which races it against
    the configured timeout. A call that loses the race is cancelled and
    reported as ``StorageTimeoutError``; nothing is retried.

    Within a request the broadcaster is that request's ``PendingEvents``,
    so change events reach SSE clients only once the unit of work commits.
    """

    def __init__(
        self,
        repository: KnowledgeRepository,
        *,
        broadcaster: KnowledgeEventBroadcaster | PendingEvents | None = None,
        timeout: float | None = None,
    ):
        self._repository = repository
        self._broadcaster = broadcaster
        self._timeout = timeout

    async def _storage(self, call: Awaitable[T]) -> T:
        if self._timeout is None:
            return await call
        try:
            return await asyncio.wait_for(call, timeout=self._timeout)
        except asyncio.TimeoutError:
            raise StorageTimeoutError(self._timeout) from None

    async def _publish(self, event_type: str, data: dict[str, Any]) -> None:
        if self._broadcaster is not None:
            await self._broadcaster.broadcast(event_type, data)

    async def _track_quietly(self, call: Awaitable[Any]) -> None:
        """Run an analytics side effect, skipping it when analytics is unsupported."""
        try:
            await self._storage(call)
        except UnsupportedOperationError as e:
            logger.debug("Skipping analytics side effect: %s", e)
