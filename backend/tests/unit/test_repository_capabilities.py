"""Unit tests for optional repository capabilities and storage timeouts."""

import asyncio

import pytest

from app.application.interfaces import KnowledgeRepository
from app.application.schemas import ArticleCreate, BookmarkCreate, CommentCreate
from app.application.services import (
    KnowledgeArticleService,
    KnowledgeBookmarkService,
    KnowledgeCommentService,
)
from app.domain.entities import ReactionAction
from app.domain.exceptions import StorageTimeoutError, UnsupportedOperationError
from app.infrastructure.memory import InMemoryKnowledgeRepository


class CoreOnlyRepository(InMemoryKnowledgeRepository):
    """Backend with articles and categories but no engagement features."""

    backend_name = "core-only storage"

    list_comments = KnowledgeRepository.list_comments
    get_comment = KnowledgeRepository.get_comment
    create_comment = KnowledgeRepository.create_comment
    list_bookmarks = KnowledgeRepository.list_bookmarks
    get_bookmark = KnowledgeRepository.get_bookmark
    create_bookmark = KnowledgeRepository.create_bookmark
    track_event = KnowledgeRepository.track_event
    list_events = KnowledgeRepository.list_events


class SlowRepository(InMemoryKnowledgeRepository):
    async def get_article(self, article_id: int):
        await asyncio.sleep(1)
        return await super().get_article(article_id)


@pytest.mark.asyncio
async def test_missing_capability_raises_unsupported():
    repository = CoreOnlyRepository()
    article = await KnowledgeArticleService(repository).create_article(
        ArticleCreate(title="T", content="C"), "1"
    )

    with pytest.raises(UnsupportedOperationError) as exc_info:
        await KnowledgeCommentService(repository).create_comment(
            article.id, CommentCreate(content="Hi"), "1"
        )
    assert exc_info.value.capability == "comments"
    assert "core-only storage" in str(exc_info.value)

    with pytest.raises(UnsupportedOperationError):
        await KnowledgeBookmarkService(repository).create_bookmark(
            "1", article.id, BookmarkCreate()
        )


@pytest.mark.asyncio
async def test_core_operations_skip_analytics_when_unsupported():
    service = KnowledgeArticleService(CoreOnlyRepository())
    article = await service.create_article(ArticleCreate(title="Seen", content="C"), "1")

    viewed = await service.view_article("seen")
    liked = await service.react(article.id, ReactionAction.LIKE)
    results = await service.search("seen")

    assert viewed.view_count == 1
    assert liked.likes == 1
    assert len(results) == 1


@pytest.mark.asyncio
async def test_slow_storage_call_times_out():
    service = KnowledgeArticleService(SlowRepository(), timeout=0.05)
    with pytest.raises(StorageTimeoutError) as exc_info:
        await service.get_article(1)
    assert exc_info.value.timeout == 0.05
