"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator
from typing import Any

from fastapi import Depends, Header, Request

from app.application.interfaces import KnowledgeRepository
from app.application.services import (
    KnowledgeAnalyticsService,
    KnowledgeArticleService,
    KnowledgeBookmarkService,
    KnowledgeCategoryService,
    KnowledgeCommentService,
    KnowledgeEventBroadcaster,
    PendingEvents,
)
from app.config import Settings, get_settings
from app.infrastructure.storage.knowledge_storage import KnowledgeStorage

ANONYMOUS_SESSION = "anonymous"


def get_app_settings(request: Request) -> Settings:
    """Settings the app was built with (falls back to the cached environment settings)."""
    return getattr(request.app.state, "settings", None) or get_settings()


def get_knowledge_storage(request: Request) -> KnowledgeStorage:
    return request.app.state.knowledge_storage


def get_event_broadcaster(request: Request) -> KnowledgeEventBroadcaster:
    return request.app.state.event_broadcaster


async def get_pending_events(
    broadcaster: KnowledgeEventBroadcaster = Depends(get_event_broadcaster),
) -> AsyncGenerator[PendingEvents, None]:
    """Change events of the request, published once its unit of work has committed.

    An exception from the endpoint or from the commit skips ``publish()``.
    """
    pending = PendingEvents(broadcaster)
    yield pending
    await pending.publish()


async def get_knowledge_repository(
    storage: KnowledgeStorage = Depends(get_knowledge_storage),
    pending: PendingEvents = Depends(get_pending_events),
) -> AsyncGenerator[KnowledgeRepository, None]:
    """One repository (and, for the database backend, one session) per request.

    Depends on ``pending`` only so that it is torn down after this commit.
    """
    async with storage.session() as repository:
        yield repository


async def get_current_user_id(
    settings: Settings = Depends(get_app_settings),
    x_user_id: str | None = Header(None),
) -> str:
    """Acting user, taken from the X-User-Id header."""
    return (x_user_id or "").strip() or settings.default_user_id


async def get_request_context(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    x_session_id: str | None = Header(None),
) -> dict[str, Any]:
    """Request metadata attached to analytics events."""
    return {
        "user_id": user_id,
        "session_id": x_session_id or ANONYMOUS_SESSION,
        "ip_address": request.client.host if request.client else None,
        "user_agent": request.headers.get("user-agent"),
        "referrer": request.headers.get("referer"),
    }


async def get_category_service(
    repository: KnowledgeRepository = Depends(get_knowledge_repository),
    pending: PendingEvents = Depends(get_pending_events),
    settings: Settings = Depends(get_app_settings),
) -> AsyncGenerator[KnowledgeCategoryService, None]:
    """Provides a KnowledgeCategoryService bound to the request's repository."""
    yield KnowledgeCategoryService(
        repository, broadcaster=pending, timeout=settings.storage_timeout_seconds
    )


async def get_article_service(
    repository: KnowledgeRepository = Depends(get_knowledge_repository),
    pending: PendingEvents = Depends(get_pending_events),
    settings: Settings = Depends(get_app_settings),
) -> AsyncGenerator[KnowledgeArticleService, None]:
    """Provides a KnowledgeArticleService bound to the request's repository."""
    yield KnowledgeArticleService(
        repository, broadcaster=pending, timeout=settings.storage_timeout_seconds
    )


async def get_comment_service(
    repository: KnowledgeRepository = Depends(get_knowledge_repository),
    pending: PendingEvents = Depends(get_pending_events),
    settings: Settings = Depends(get_app_settings),
) -> AsyncGenerator[KnowledgeCommentService, None]:
    yield KnowledgeCommentService(
        repository, broadcaster=pending, timeout=settings.storage_timeout_seconds
    )


async def get_bookmark_service(
    repository: KnowledgeRepository = Depends(get_knowledge_repository),
    settings: Settings = Depends(get_app_settings),
) -> AsyncGenerator[KnowledgeBookmarkService, None]:
    yield KnowledgeBookmarkService(repository, timeout=settings.storage_timeout_seconds)


async def get_analytics_service(
    repository: KnowledgeRepository = Depends(get_knowledge_repository),
    settings: Settings = Depends(get_app_settings),
) -> AsyncGenerator[KnowledgeAnalyticsService, None]:
    yield KnowledgeAnalyticsService(repository, timeout=settings.storage_timeout_seconds)
