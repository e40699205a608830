"""Unit tests for comments, bookmarks and analytics."""

from datetime import datetime, timedelta, timezone

import pytest

from app.application.schemas import (
    AnalyticsEventCreate,
    ArticleCreate,
    BookmarkCreate,
    CommentCreate,
    CommentUpdate,
)
from app.application.services import (
    KnowledgeAnalyticsService,
    KnowledgeArticleService,
    KnowledgeBookmarkService,
    KnowledgeCommentService,
)
from app.domain.entities import AnalyticsEvent, AnalyticsTimeframe
from app.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from app.infrastructure.memory import InMemoryKnowledgeRepository


@pytest.fixture
def repository() -> InMemoryKnowledgeRepository:
    return InMemoryKnowledgeRepository()


async def _article(repository, title: str = "Article") -> int:
    service = KnowledgeArticleService(repository)
    article = await service.create_article(ArticleCreate(title=title, content="C"), "1")
    return article.id


# ── Comments ────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_comments_are_listed_in_creation_order(repository):
    article_id = await _article(repository)
    service = KnowledgeCommentService(repository)
    first = await service.create_comment(article_id, CommentCreate(content="One"), "1")
    await service.create_comment(
        article_id, CommentCreate(content="Two", parent_id=first.id), "2"
    )

    comments = await service.list_comments(article_id)
    assert [c.content for c in comments] == ["One", "Two"]
    assert comments[1].parent_id == first.id
    assert comments[1].author_id == "2"


@pytest.mark.asyncio
async def test_reply_must_belong_to_same_article(repository):
    first_article = await _article(repository, "First")
    second_article = await _article(repository, "Second")
    service = KnowledgeCommentService(repository)
    comment = await service.create_comment(first_article, CommentCreate(content="Hi"), "1")

    with pytest.raises(EntityNotFoundError):
        await service.create_comment(
            second_article, CommentCreate(content="Reply", parent_id=comment.id), "1"
        )


@pytest.mark.asyncio
async def test_comment_on_missing_article(repository):
    service = KnowledgeCommentService(repository)
    with pytest.raises(EntityNotFoundError):
        await service.create_comment(404, CommentCreate(content="Hi"), "1")


@pytest.mark.asyncio
async def test_resolve_comment(repository):
    article_id = await _article(repository)
    service = KnowledgeCommentService(repository)
    comment = await service.create_comment(article_id, CommentCreate(content="Typo"), "1")

    resolved = await service.update_comment(comment.id, CommentUpdate(is_resolved=True))
    assert resolved.is_resolved is True
    assert resolved.content == "Typo"


@pytest.mark.asyncio
async def test_deleting_comment_promotes_replies(repository):
    article_id = await _article(repository)
    service = KnowledgeCommentService(repository)
    parent = await service.create_comment(article_id, CommentCreate(content="Q"), "1")
    reply = await service.create_comment(
        article_id, CommentCreate(content="A", parent_id=parent.id), "2"
    )

    await service.delete_comment(parent.id)

    comments = await service.list_comments(article_id)
    assert [c.id for c in comments] == [reply.id]
    assert comments[0].parent_id is None


# ── Bookmarks ───────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_bookmark_is_unique_per_user(repository):
    article_id = await _article(repository)
    service = KnowledgeBookmarkService(repository)

    await service.create_bookmark("1", article_id, BookmarkCreate(notes="read later"))
    with pytest.raises(DuplicateEntityError):
        await service.create_bookmark("1", article_id, BookmarkCreate())
    await service.create_bookmark("2", article_id, BookmarkCreate())

    bookmarks = await service.list_bookmarks("1")
    assert len(bookmarks) == 1
    assert bookmarks[0].notes == "read later"


@pytest.mark.asyncio
async def test_remove_bookmark(repository):
    article_id = await _article(repository)
    service = KnowledgeBookmarkService(repository)
    await service.create_bookmark("1", article_id, BookmarkCreate())

    await service.delete_bookmark("1", article_id)
    assert await service.list_bookmarks("1") == []
    with pytest.raises(EntityNotFoundError):
        await service.delete_bookmark("1", article_id)


@pytest.mark.asyncio
async def test_bookmark_missing_article(repository):
    service = KnowledgeBookmarkService(repository)
    with pytest.raises(EntityNotFoundError):
        await service.create_bookmark("1", 12, BookmarkCreate())


@pytest.mark.asyncio
async def test_deleting_article_drops_its_bookmarks(repository):
    article_id = await _article(repository)
    await KnowledgeBookmarkService(repository).create_bookmark("1", article_id, BookmarkCreate())

    await KnowledgeArticleService(repository).delete_article(article_id)
    assert await repository.list_bookmarks("1") == []


# ── Analytics ───────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_track_fills_request_context(repository):
    service = KnowledgeAnalyticsService(repository)
    event = await service.track(
        AnalyticsEventCreate(action="share", article_id=3, time_spent=12),
        user_id="5",
        context={"session_id": "abc", "user_agent": "pytest"},
    )

    assert event.id is not None
    assert event.user_id == "5"
    assert event.session_id == "abc"
    assert event.time_spent == 12


@pytest.mark.asyncio
async def test_timeframe_excludes_older_events(repository):
    now = datetime.now(timezone.utc)
    await repository.track_event(
        AnalyticsEvent(action="view", user_id="1", article_id=1, created_at=now - timedelta(hours=25))
    )
    await repository.track_event(
        AnalyticsEvent(action="view", user_id="1", article_id=1, created_at=now - timedelta(hours=1))
    )
    await repository.track_event(
        AnalyticsEvent(action="view", user_id="1", article_id=2, created_at=now)
    )
    service = KnowledgeAnalyticsService(repository)

    recent = await service.query(
        article_id=1, timeframe=AnalyticsTimeframe.LAST_24_HOURS, now=now
    )
    assert len(recent) == 1
    assert recent[0].created_at == now - timedelta(hours=1)

    week = await service.query(timeframe=AnalyticsTimeframe.LAST_7_DAYS, now=now)
    assert [e.article_id for e in week] == [2, 1, 1]
