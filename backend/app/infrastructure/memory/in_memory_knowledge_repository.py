"""Volatile knowledge repository backed by plain dicts and lists.

Used when no database is configured. Records live in id-keyed arenas with
secondary indexes (article → comment ids, user → bookmarks, article →
revisions) so comment updates and deletes never scan every thread.

Every read returns a deep copy, so callers can mutate what they get back
without touching the stored record until they call an update method.
"""

import asyncio
import copy
import itertools
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime

from app.application.interfaces import KnowledgeRepository
from app.domain.entities import (
    COUNTER_FIELDS,
    AnalyticsEvent,
    ArticleStatus,
    KnowledgeArticle,
    KnowledgeBookmark,
    KnowledgeCategory,
    KnowledgeComment,
    KnowledgeRevision,
)
from app.domain.search import matches_filter

_clone = copy.deepcopy


class InMemoryKnowledgeRepository(KnowledgeRepository):
    """Implements the KnowledgeRepository port with in-process collections."""

    backend_name = "in-memory storage"

    def __init__(self) -> None:
        self._category_ids = itertools.count(1)
        self._article_ids = itertools.count(1)
        self._revision_ids = itertools.count(1)
        self._comment_ids = itertools.count(1)
        self._bookmark_ids = itertools.count(1)
        self._event_ids = itertools.count(1)

        self._categories: dict[int, KnowledgeCategory] = {}
        self._articles: dict[int, KnowledgeArticle] = {}
        self._revisions: dict[int, list[KnowledgeRevision]] = {}
        self._comments: dict[int, KnowledgeComment] = {}
        self._comment_ids_by_article: dict[int, list[int]] = {}
        self._bookmarks: dict[str, list[KnowledgeBookmark]] = {}
        self._events: list[AnalyticsEvent] = []
        self._article_writes = asyncio.Lock()

    # ── Categories ──────────────────────────────────────────────────

    async def list_categories(self) -> list[KnowledgeCategory]:
        categories = sorted(self._categories.values(), key=lambda c: (c.sort_order, c.name))
        return _clone(categories)

    async def get_category(self, category_id: int) -> KnowledgeCategory | None:
        return _clone(self._categories.get(category_id))

    async def create_category(self, category: KnowledgeCategory) -> KnowledgeCategory:
        stored = _clone(category)
        stored.id = next(self._category_ids)
        self._categories[stored.id] = stored
        return _clone(stored)

    async def update_category(self, category: KnowledgeCategory) -> KnowledgeCategory:
        if category.id not in self._categories:
            raise ValueError(f"KnowledgeCategory {category.id} not found in store")
        self._categories[category.id] = _clone(category)
        return _clone(category)

    async def delete_category(self, category_id: int) -> bool:
        if self._categories.pop(category_id, None) is None:
            return False
        for child in self._categories.values():
            if child.parent_id == category_id:
                child.parent_id = None
        for article in self._articles.values():
            if article.category_id == category_id:
                article.category_id = None
        return True

    # ── Articles ────────────────────────────────────────────────────

    async def list_articles(
        self,
        *,
        category_id: int | None = None,
        status: ArticleStatus | None = None,
        author_id: str | None = None,
        search: str | None = None,
    ) -> list[KnowledgeArticle]:
        articles = list(self._articles.values())
        if category_id is not None:
            articles = [a for a in articles if a.category_id == category_id]
        if status is not None:
            articles = [a for a in articles if a.status == status]
        if author_id is not None:
            articles = [a for a in articles if a.author_id == author_id]
        if search:
            articles = [a for a in articles if matches_filter(a, search)]
        articles.sort(key=lambda a: a.updated_at, reverse=True)
        return _clone(articles)

    async def get_article(self, article_id: int) -> KnowledgeArticle | None:
        return _clone(self._articles.get(article_id))

    async def get_article_by_slug(self, slug: str) -> KnowledgeArticle | None:
        for article in self._articles.values():
            if article.slug == slug:
                return _clone(article)
        return None

    async def create_article(self, article: KnowledgeArticle) -> KnowledgeArticle:
        stored = _clone(article)
        stored.id = next(self._article_ids)
        self._articles[stored.id] = stored
        return _clone(stored)

    async def update_article(self, article: KnowledgeArticle) -> KnowledgeArticle:
        current = self._articles.get(article.id)
        if current is None:
            raise ValueError(f"KnowledgeArticle {article.id} not found in store")
        stored = _clone(article)
        for name in COUNTER_FIELDS:
            setattr(stored, name, getattr(current, name))
        self._articles[article.id] = stored
        return _clone(stored)

    async def increment_article_counter(
        self, article_id: int, field: str, delta: int, *, floor: int = 0
    ) -> KnowledgeArticle | None:
        self._require_counter(field)
        stored = self._articles.get(article_id)
        if stored is None:
            return None
        setattr(stored, field, max(floor, getattr(stored, field) + delta))
        return _clone(stored)

    @asynccontextmanager
    async def article_write_lock(self, article_id: int | None = None) -> AsyncIterator[None]:
        # One store, one lock: slug checks on insert race with renames too.
        async with self._article_writes:
            yield

    async def delete_article(self, article_id: int) -> bool:
        if self._articles.pop(article_id, None) is None:
            return False
        self._revisions.pop(article_id, None)
        for comment_id in self._comment_ids_by_article.pop(article_id, []):
            self._comments.pop(comment_id, None)
        for user_id, bookmarks in self._bookmarks.items():
            self._bookmarks[user_id] = [b for b in bookmarks if b.article_id != article_id]
        return True

    # ── Revisions ───────────────────────────────────────────────────

    async def list_revisions(self, article_id: int) -> list[KnowledgeRevision]:
        revisions = self._revisions.get(article_id, [])
        return _clone(sorted(revisions, key=lambda r: r.version, reverse=True))

    async def create_revision(self, revision: KnowledgeRevision) -> KnowledgeRevision:
        stored = KnowledgeRevision(
            id=next(self._revision_ids),
            article_id=revision.article_id,
            title=revision.title,
            content=revision.content,
            author_id=revision.author_id,
            change_description=revision.change_description,
            version=revision.version,
            created_at=revision.created_at,
        )
        self._revisions.setdefault(stored.article_id, []).append(stored)
        return _clone(stored)

    # ── Comments ────────────────────────────────────────────────────

    async def list_comments(self, article_id: int) -> list[KnowledgeComment]:
        ids = self._comment_ids_by_article.get(article_id, [])
        return [_clone(self._comments[comment_id]) for comment_id in ids]

    async def get_comment(self, comment_id: int) -> KnowledgeComment | None:
        return _clone(self._comments.get(comment_id))

    async def create_comment(self, comment: KnowledgeComment) -> KnowledgeComment:
        stored = _clone(comment)
        stored.id = next(self._comment_ids)
        self._comments[stored.id] = stored
        self._comment_ids_by_article.setdefault(stored.article_id, []).append(stored.id)
        return _clone(stored)

    async def update_comment(self, comment: KnowledgeComment) -> KnowledgeComment:
        if comment.id not in self._comments:
            raise ValueError(f"KnowledgeComment {comment.id} not found in store")
        self._comments[comment.id] = _clone(comment)
        return _clone(comment)

    async def delete_comment(self, comment_id: int) -> bool:
        comment = self._comments.pop(comment_id, None)
        if comment is None:
            return False
        thread = self._comment_ids_by_article[comment.article_id]
        thread.remove(comment_id)
        # Replies keep their place in the thread as top-level comments.
        for reply_id in thread:
            reply = self._comments[reply_id]
            if reply.parent_id == comment_id:
                reply.parent_id = None
        return True

    # ── Bookmarks ───────────────────────────────────────────────────

    async def list_bookmarks(self, user_id: str) -> list[KnowledgeBookmark]:
        return _clone(self._bookmarks.get(user_id, []))

    async def get_bookmark(self, user_id: str, article_id: int) -> KnowledgeBookmark | None:
        for bookmark in self._bookmarks.get(user_id, []):
            if bookmark.article_id == article_id:
                return _clone(bookmark)
        return None

    async def create_bookmark(self, bookmark: KnowledgeBookmark) -> KnowledgeBookmark:
        stored = _clone(bookmark)
        stored.id = next(self._bookmark_ids)
        self._bookmarks.setdefault(stored.user_id, []).append(stored)
        return _clone(stored)

    async def delete_bookmark(self, user_id: str, article_id: int) -> bool:
        bookmarks = self._bookmarks.get(user_id, [])
        for index, bookmark in enumerate(bookmarks):
            if bookmark.article_id == article_id:
                del bookmarks[index]
                return True
        return False

    # ── Analytics ───────────────────────────────────────────────────

    async def track_event(self, event: AnalyticsEvent) -> AnalyticsEvent:
        stored = _clone(event)
        stored.id = next(self._event_ids)
        self._events.append(stored)
        return _clone(stored)

    async def list_events(
        self,
        *,
        article_id: int | None = None,
        since: datetime | None = None,
    ) -> list[AnalyticsEvent]:
        events = self._events
        if article_id is not None:
            events = [e for e in events if e.article_id == article_id]
        if since is not None:
            events = [e for e in events if e.created_at >= since]
        return _clone(sorted(events, key=lambda e: e.created_at, reverse=True))
