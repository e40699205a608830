"""Abstract repository interface (port) for the knowledge store."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from datetime import datetime

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
from app.domain.exceptions import UnsupportedOperationError


class KnowledgeRepository(ABC):
    """Port for knowledge persistence — implemented in the infrastructure layer.

    Categories, articles and revisions are required of every backend.
    Comments, bookmarks and analytics are optional capabilities: the
    default implementations raise ``UnsupportedOperationError`` so callers
    can tell a missing capability apart from an empty result.

    Repositories do no business logic. Slugs, versions and revision
    snapshots are computed by the application services; a repository only
    stores and returns what it is given.
    """

    backend_name = "storage backend"

    def _unsupported(self, capability: str) -> UnsupportedOperationError:
        return UnsupportedOperationError(capability, self.backend_name)

    @staticmethod
    def _require_counter(field: str) -> None:
        if field not in COUNTER_FIELDS:
            raise ValueError(f"{field!r} is not an article counter")

    # ── Categories ──────────────────────────────────────────────────

    @abstractmethod
    async def list_categories(self) -> list[KnowledgeCategory]:
        """All categories ordered by sort_order, then name."""
        ...

    @abstractmethod
    async def get_category(self, category_id: int) -> KnowledgeCategory | None:
        ...

    @abstractmethod
    async def create_category(self, category: KnowledgeCategory) -> KnowledgeCategory:
        """Persist a new category and return it with the generated ID."""
        ...

    @abstractmethod
    async def update_category(self, category: KnowledgeCategory) -> KnowledgeCategory:
        ...

    @abstractmethod
    async def delete_category(self, category_id: int) -> bool:
        """Delete a category, detaching its articles and child categories.

        Returns True if deleted, False if not found.
        """
        ...

    # ── Articles ────────────────────────────────────────────────────

    @abstractmethod
    async def list_articles(
        self,
        *,
        category_id: int | None = None,
        status: ArticleStatus | None = None,
        author_id: str | None = None,
        search: str | None = None,
    ) -> list[KnowledgeArticle]:
        """Filtered articles, most recently updated first. No pagination."""
        ...

    @abstractmethod
    async def get_article(self, article_id: int) -> KnowledgeArticle | None:
        ...

    @abstractmethod
    async def get_article_by_slug(self, slug: str) -> KnowledgeArticle | None:
        ...

    @abstractmethod
    async def create_article(self, article: KnowledgeArticle) -> KnowledgeArticle:
        ...

    @abstractmethod
    async def update_article(self, article: KnowledgeArticle) -> KnowledgeArticle:
        """Persist every field except the engagement counters, which keep their stored values."""
        ...

    @abstractmethod
    async def increment_article_counter(
        self, article_id: int, field: str, delta: int, *, floor: int = 0
    ) -> KnowledgeArticle | None:
        """Add ``delta`` to one counter in a single step, never going below ``floor``.

        ``field`` is one of ``COUNTER_FIELDS``. Returns the updated article,
        or None if it does not exist.
        """
        ...

    @abstractmethod
    def article_write_lock(
        self, article_id: int | None = None
    ) -> AbstractAsyncContextManager[None]:
        """Hold off other article writes that read before they write.

        Wrap version bumps and slug assignment in it. ``article_id`` names the
        row being rewritten; None covers inserts.
        """
        ...

    @abstractmethod
    async def delete_article(self, article_id: int) -> bool:
        """Delete an article with its comments, revisions and bookmarks.

        Returns True if deleted, False if not found.
        """
        ...

    # ── Revisions ───────────────────────────────────────────────────

    @abstractmethod
    async def list_revisions(self, article_id: int) -> list[KnowledgeRevision]:
        """Revisions of one article, highest version first."""
        ...

    @abstractmethod
    async def create_revision(self, revision: KnowledgeRevision) -> KnowledgeRevision:
        ...

    # ── Comments (optional) ─────────────────────────────────────────

    async def list_comments(self, article_id: int) -> list[KnowledgeComment]:
        """Comments of one article in insertion order."""
        raise self._unsupported("comments")

    async def get_comment(self, comment_id: int) -> KnowledgeComment | None:
        raise self._unsupported("comments")

    async def create_comment(self, comment: KnowledgeComment) -> KnowledgeComment:
        raise self._unsupported("comments")

    async def update_comment(self, comment: KnowledgeComment) -> KnowledgeComment:
        raise self._unsupported("comments")

    async def delete_comment(self, comment_id: int) -> bool:
        raise self._unsupported("comments")

    # ── Bookmarks (optional) ────────────────────────────────────────

    async def list_bookmarks(self, user_id: str) -> list[KnowledgeBookmark]:
        raise self._unsupported("bookmarks")

    async def get_bookmark(self, user_id: str, article_id: int) -> KnowledgeBookmark | None:
        raise self._unsupported("bookmarks")

    async def create_bookmark(self, bookmark: KnowledgeBookmark) -> KnowledgeBookmark:
        raise self._unsupported("bookmarks")

    async def delete_bookmark(self, user_id: str, article_id: int) -> bool:
        raise self._unsupported("bookmarks")

    # ── Analytics (optional) ────────────────────────────────────────

    async def track_event(self, event: AnalyticsEvent) -> AnalyticsEvent:
        raise self._unsupported("analytics")

    async def list_events(
        self,
        *,
        article_id: int | None = None,
        since: datetime | None = None,
    ) -> list[AnalyticsEvent]:
        """Events filtered by article and/or ``created_at >= since``, newest first."""
        raise self._unsupported("analytics")
