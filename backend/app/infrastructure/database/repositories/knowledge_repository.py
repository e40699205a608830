"""Concrete knowledge repository backed by SQLAlchemy async sessions."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from sqlalchemy import case, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import KnowledgeRepository
from app.domain.entities import (
    AnalyticsEvent,
    ArticlePriority,
    ArticleStatus,
    KnowledgeArticle,
    KnowledgeBookmark,
    KnowledgeCategory,
    KnowledgeComment,
    KnowledgeRevision,
)
from app.domain.search import matches_filter
from app.infrastructure.database.models import (
    KnowledgeAnalyticsModel,
    KnowledgeArticleModel,
    KnowledgeBookmarkModel,
    KnowledgeCategoryModel,
    KnowledgeCommentModel,
    KnowledgeRevisionModel,
)


def _as_utc(value: datetime | None) -> datetime | None:
    """SQLite hands back naive datetimes; everything is stored in UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SQLAlchemyKnowledgeRepository(KnowledgeRepository):
    """Implements the KnowledgeRepository port using SQLAlchemy async sessions.

    The session is owned by the caller; this class only flushes. Commit and
    rollback happen where the session is opened.
    """

    backend_name = "database storage"

    def __init__(self, session: AsyncSession):
        self._session = session

    # ── Mapping ─────────────────────────────────────────────────────

    @staticmethod
    def _category_to_entity(model: KnowledgeCategoryModel) -> KnowledgeCategory:
        return KnowledgeCategory(
            id=model.id,
            name=model.name,
            description=model.description,
            color=model.color,
            icon=model.icon,
            parent_id=model.parent_id,
            sort_order=model.sort_order,
            is_active=model.is_active,
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )

    @staticmethod
    def _article_to_entity(model: KnowledgeArticleModel) -> KnowledgeArticle:
        return KnowledgeArticle(
            id=model.id,
            title=model.title,
            slug=model.slug,
            content=model.content,
            excerpt=model.excerpt,
            category_id=model.category_id,
            author_id=model.author_id,
            status=ArticleStatus(model.status),
            priority=ArticlePriority(model.priority),
            tags=list(model.tags or []),
            attachments=list(model.attachments or []),
            related_articles=list(model.related_articles or []),
            search_keywords=model.search_keywords,
            metadata=dict(model.extra_metadata or {}),
            view_count=model.view_count,
            likes=model.likes,
            dislikes=model.dislikes,
            is_public=model.is_public,
            is_featured=model.is_featured,
            version=model.version,
            published_at=_as_utc(model.published_at),
            archived_at=_as_utc(model.archived_at),
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )

    @staticmethod
    def _apply_article(model: KnowledgeArticleModel, entity: KnowledgeArticle) -> None:
        """Copy every mutable entity field except the counters onto the ORM model."""
        model.title = entity.title
        model.slug = entity.slug
        model.content = entity.content
        model.excerpt = entity.excerpt
        model.category_id = entity.category_id
        model.author_id = entity.author_id
        model.status = entity.status.value
        model.priority = entity.priority.value
        model.tags = list(entity.tags)
        model.attachments = list(entity.attachments)
        model.related_articles = list(entity.related_articles)
        model.search_keywords = entity.search_keywords
        model.extra_metadata = dict(entity.metadata)
        model.is_public = entity.is_public
        model.is_featured = entity.is_featured
        model.version = entity.version
        model.published_at = entity.published_at
        model.archived_at = entity.archived_at
        model.updated_at = entity.updated_at

    @staticmethod
    def _revision_to_entity(model: KnowledgeRevisionModel) -> KnowledgeRevision:
        return KnowledgeRevision(
            id=model.id,
            article_id=model.article_id,
            title=model.title,
            content=model.content,
            author_id=model.author_id,
            change_description=model.change_description,
            version=model.version,
            created_at=_as_utc(model.created_at),
        )

    @staticmethod
    def _comment_to_entity(model: KnowledgeCommentModel) -> KnowledgeComment:
        return KnowledgeComment(
            id=model.id,
            article_id=model.article_id,
            author_id=model.author_id,
            content=model.content,
            parent_id=model.parent_id,
            is_resolved=model.is_resolved,
            likes=model.likes,
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )

    @staticmethod
    def _bookmark_to_entity(model: KnowledgeBookmarkModel) -> KnowledgeBookmark:
        return KnowledgeBookmark(
            id=model.id,
            user_id=model.user_id,
            article_id=model.article_id,
            notes=model.notes,
            created_at=_as_utc(model.created_at),
        )

    @staticmethod
    def _event_to_entity(model: KnowledgeAnalyticsModel) -> AnalyticsEvent:
        return AnalyticsEvent(
            id=model.id,
            article_id=model.article_id,
            user_id=model.user_id,
            action=model.action,
            session_id=model.session_id,
            ip_address=model.ip_address,
            user_agent=model.user_agent,
            referrer=model.referrer,
            time_spent=model.time_spent,
            metadata=dict(model.extra_metadata or {}),
            created_at=_as_utc(model.created_at),
        )

    # ── Categories ──────────────────────────────────────────────────

    async def list_categories(self) -> list[KnowledgeCategory]:
        stmt = select(KnowledgeCategoryModel).order_by(
            KnowledgeCategoryModel.sort_order, KnowledgeCategoryModel.name
        )
        result = await self._session.execute(stmt)
        return [self._category_to_entity(row) for row in result.scalars().all()]

    async def get_category(self, category_id: int) -> KnowledgeCategory | None:
        model = await self._session.get(KnowledgeCategoryModel, category_id)
        return self._category_to_entity(model) if model else None

    async def create_category(self, category: KnowledgeCategory) -> KnowledgeCategory:
        model = KnowledgeCategoryModel(
            name=category.name,
            description=category.description,
            color=category.color,
            icon=category.icon,
            parent_id=category.parent_id,
            sort_order=category.sort_order,
            is_active=category.is_active,
            created_at=category.created_at,
            updated_at=category.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._category_to_entity(model)

    async def update_category(self, category: KnowledgeCategory) -> KnowledgeCategory:
        model = await self._session.get(KnowledgeCategoryModel, category.id)
        if model is None:
            raise ValueError(f"KnowledgeCategory {category.id} not found in database")
        model.name = category.name
        model.description = category.description
        model.color = category.color
        model.icon = category.icon
        model.parent_id = category.parent_id
        model.sort_order = category.sort_order
        model.is_active = category.is_active
        model.updated_at = category.updated_at
        await self._session.flush()
        return self._category_to_entity(model)

    async def delete_category(self, category_id: int) -> bool:
        model = await self._session.get(KnowledgeCategoryModel, category_id)
        if model is None:
            return False
        await self._session.execute(
            update(KnowledgeArticleModel)
            .where(KnowledgeArticleModel.category_id == category_id)
            .values(category_id=None)
        )
        await self._session.execute(
            update(KnowledgeCategoryModel)
            .where(KnowledgeCategoryModel.parent_id == category_id)
            .values(parent_id=None)
        )
        await self._session.delete(model)
        await self._session.flush()
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
        stmt = select(KnowledgeArticleModel)
        if category_id is not None:
            stmt = stmt.where(KnowledgeArticleModel.category_id == category_id)
        if status is not None:
            stmt = stmt.where(KnowledgeArticleModel.status == status.value)
        if author_id is not None:
            stmt = stmt.where(KnowledgeArticleModel.author_id == author_id)
        stmt = stmt.order_by(
            KnowledgeArticleModel.updated_at.desc(), KnowledgeArticleModel.id.desc()
        )
        result = await self._session.execute(stmt)
        articles = [self._article_to_entity(row) for row in result.scalars().all()]
        # Tags live in a JSON column, so the text filter runs here, not in SQL.
        if search:
            articles = [a for a in articles if matches_filter(a, search)]
        return articles

    async def get_article(self, article_id: int) -> KnowledgeArticle | None:
        model = await self._session.get(KnowledgeArticleModel, article_id)
        return self._article_to_entity(model) if model else None

    async def get_article_by_slug(self, slug: str) -> KnowledgeArticle | None:
        result = await self._session.execute(
            select(KnowledgeArticleModel).where(KnowledgeArticleModel.slug == slug)
        )
        model = result.scalar_one_or_none()
        return self._article_to_entity(model) if model else None

    async def create_article(self, article: KnowledgeArticle) -> KnowledgeArticle:
        model = KnowledgeArticleModel(
            view_count=article.view_count,
            likes=article.likes,
            dislikes=article.dislikes,
            created_at=article.created_at,
        )
        self._apply_article(model, article)
        self._session.add(model)
        await self._session.flush()
        return self._article_to_entity(model)

    async def update_article(self, article: KnowledgeArticle) -> KnowledgeArticle:
        model = await self._session.get(KnowledgeArticleModel, article.id)
        if model is None:
            raise ValueError(f"KnowledgeArticle {article.id} not found in database")
        self._apply_article(model, article)
        await self._session.flush()
        return self._article_to_entity(model)

    async def increment_article_counter(
        self, article_id: int, field: str, delta: int, *, floor: int = 0
    ) -> KnowledgeArticle | None:
        self._require_counter(field)
        column = getattr(KnowledgeArticleModel, field)
        result = await self._session.execute(
            update(KnowledgeArticleModel)
            .where(KnowledgeArticleModel.id == article_id)
            .values({field: case((column + delta < floor, floor), else_=column + delta)})
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return None
        model = await self._session.get(
            KnowledgeArticleModel, article_id, populate_existing=True
        )
        return self._article_to_entity(model)

    @asynccontextmanager
    async def article_write_lock(self, article_id: int | None = None) -> AsyncIterator[None]:
        """Row lock held until the session commits or rolls back.

        Inserts take no lock; the unique slug index rejects a colliding one.
        SQLite ignores FOR UPDATE and serialises writers itself.
        """
        if article_id is not None:
            await self._session.execute(
                select(KnowledgeArticleModel.id)
                .where(KnowledgeArticleModel.id == article_id)
                .with_for_update()
            )
        yield

    async def delete_article(self, article_id: int) -> bool:
        model = await self._session.get(KnowledgeArticleModel, article_id)
        if model is None:
            return False
        for child in (KnowledgeCommentModel, KnowledgeRevisionModel, KnowledgeBookmarkModel):
            await self._session.execute(delete(child).where(child.article_id == article_id))
        await self._session.delete(model)
        await self._session.flush()
        return True

    # ── Revisions ───────────────────────────────────────────────────

    async def list_revisions(self, article_id: int) -> list[KnowledgeRevision]:
        stmt = (
            select(KnowledgeRevisionModel)
            .where(KnowledgeRevisionModel.article_id == article_id)
            .order_by(KnowledgeRevisionModel.version.desc())
        )
        result = await self._session.execute(stmt)
        return [self._revision_to_entity(row) for row in result.scalars().all()]

    async def create_revision(self, revision: KnowledgeRevision) -> KnowledgeRevision:
        model = KnowledgeRevisionModel(
            article_id=revision.article_id,
            title=revision.title,
            content=revision.content,
            author_id=revision.author_id,
            change_description=revision.change_description,
            version=revision.version,
            created_at=revision.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._revision_to_entity(model)

    # ── Comments ────────────────────────────────────────────────────

    async def list_comments(self, article_id: int) -> list[KnowledgeComment]:
        stmt = (
            select(KnowledgeCommentModel)
            .where(KnowledgeCommentModel.article_id == article_id)
            .order_by(KnowledgeCommentModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._comment_to_entity(row) for row in result.scalars().all()]

    async def get_comment(self, comment_id: int) -> KnowledgeComment | None:
        model = await self._session.get(KnowledgeCommentModel, comment_id)
        return self._comment_to_entity(model) if model else None

    async def create_comment(self, comment: KnowledgeComment) -> KnowledgeComment:
        model = KnowledgeCommentModel(
            article_id=comment.article_id,
            author_id=comment.author_id,
            content=comment.content,
            parent_id=comment.parent_id,
            is_resolved=comment.is_resolved,
            likes=comment.likes,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._comment_to_entity(model)

    async def update_comment(self, comment: KnowledgeComment) -> KnowledgeComment:
        model = await self._session.get(KnowledgeCommentModel, comment.id)
        if model is None:
            raise ValueError(f"KnowledgeComment {comment.id} not found in database")
        model.content = comment.content
        model.is_resolved = comment.is_resolved
        model.likes = comment.likes
        model.updated_at = comment.updated_at
        await self._session.flush()
        return self._comment_to_entity(model)

    async def delete_comment(self, comment_id: int) -> bool:
        model = await self._session.get(KnowledgeCommentModel, comment_id)
        if model is None:
            return False
        # Replies keep their place in the thread as top-level comments.
        await self._session.execute(
            update(KnowledgeCommentModel)
            .where(KnowledgeCommentModel.parent_id == comment_id)
            .values(parent_id=None)
        )
        await self._session.delete(model)
        await self._session.flush()
        return True

    # ── Bookmarks ───────────────────────────────────────────────────

    async def list_bookmarks(self, user_id: str) -> list[KnowledgeBookmark]:
        stmt = (
            select(KnowledgeBookmarkModel)
            .where(KnowledgeBookmarkModel.user_id == user_id)
            .order_by(KnowledgeBookmarkModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._bookmark_to_entity(row) for row in result.scalars().all()]

    async def get_bookmark(self, user_id: str, article_id: int) -> KnowledgeBookmark | None:
        result = await self._session.execute(
            select(KnowledgeBookmarkModel).where(
                KnowledgeBookmarkModel.user_id == user_id,
                KnowledgeBookmarkModel.article_id == article_id,
            )
        )
        model = result.scalar_one_or_none()
        return self._bookmark_to_entity(model) if model else None

    async def create_bookmark(self, bookmark: KnowledgeBookmark) -> KnowledgeBookmark:
        model = KnowledgeBookmarkModel(
            user_id=bookmark.user_id,
            article_id=bookmark.article_id,
            notes=bookmark.notes,
            created_at=bookmark.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._bookmark_to_entity(model)

    async def delete_bookmark(self, user_id: str, article_id: int) -> bool:
        result = await self._session.execute(
            delete(KnowledgeBookmarkModel).where(
                KnowledgeBookmarkModel.user_id == user_id,
                KnowledgeBookmarkModel.article_id == article_id,
            )
        )
        return result.rowcount > 0

    # ── Analytics ───────────────────────────────────────────────────

    async def track_event(self, event: AnalyticsEvent) -> AnalyticsEvent:
        model = KnowledgeAnalyticsModel(
            article_id=event.article_id,
            user_id=event.user_id,
            action=event.action,
            session_id=event.session_id,
            ip_address=event.ip_address,
            user_agent=event.user_agent,
            referrer=event.referrer,
            time_spent=event.time_spent,
            extra_metadata=dict(event.metadata),
            created_at=event.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._event_to_entity(model)

    async def list_events(
        self,
        *,
        article_id: int | None = None,
        since: datetime | None = None,
    ) -> list[AnalyticsEvent]:
        stmt = select(KnowledgeAnalyticsModel)
        if article_id is not None:
            stmt = stmt.where(KnowledgeAnalyticsModel.article_id == article_id)
        if since is not None:
            stmt = stmt.where(KnowledgeAnalyticsModel.created_at >= since)
        stmt = stmt.order_by(
            KnowledgeAnalyticsModel.created_at.desc(), KnowledgeAnalyticsModel.id.desc()
        )
        result = await self._session.execute(stmt)
        return [self._event_to_entity(row) for row in result.scalars().all()]
