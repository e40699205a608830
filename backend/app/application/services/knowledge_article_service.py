"""Application service (use case) for knowledge articles.

Owns the article rules that both storage backends share: unique slugs,
version numbering, the revision ledger, reactions, view counting and the
ranked search.
"""

import logging
from typing import Any

from app.application.schemas import ArticleCreate, ArticleUpdate
from app.application.services.repository_service import RepositoryService
from app.domain.entities import (
    INITIAL_REVISION_DESCRIPTION,
    UPDATE_REVISION_DESCRIPTION,
    AnalyticsEvent,
    ArticleStatus,
    KnowledgeArticle,
    KnowledgeRevision,
    ReactionAction,
)
from app.domain.exceptions import EntityNotFoundError
from app.domain.search import rank_articles
from app.domain.slug import MAX_SLUG_LENGTH, generate_slug

logger = logging.getLogger(__name__)

FALLBACK_SLUG = "article"
ANONYMOUS_USER = "anonymous"


class KnowledgeArticleService(RepositoryService):
    """Orchestrates article business logic on top of the repository port."""

    # ── Queries ─────────────────────────────────────────────────────

    async def list_articles(
        self,
        *,
        category_id: int | None = None,
        status: ArticleStatus | None = None,
        author_id: str | None = None,
        search: str | None = None,
    ) -> list[KnowledgeArticle]:
        return await self._storage(
            self._repository.list_articles(
                category_id=category_id,
                status=status,
                author_id=author_id,
                search=search or None,
            )
        )

    async def get_article(self, article_id: int) -> KnowledgeArticle:
        article = await self._storage(self._repository.get_article(article_id))
        if article is None:
            raise EntityNotFoundError("KnowledgeArticle", article_id)
        return article

    async def get_article_by_slug(self, slug: str) -> KnowledgeArticle:
        article = await self._storage(self._repository.get_article_by_slug(slug))
        if article is None:
            raise EntityNotFoundError("KnowledgeArticle", slug)
        return article

    async def get_article_by_id_or_slug(self, id_or_slug: str) -> KnowledgeArticle:
        """Numeric keys are looked up as ids, anything else as a slug."""
        if id_or_slug.isdigit():
            return await self.get_article(int(id_or_slug))
        return await self.get_article_by_slug(id_or_slug)

    async def view_article(
        self, id_or_slug: str, context: dict[str, Any] | None = None
    ) -> KnowledgeArticle:
        """Fetch an article for reading: counts the view and records a view event."""
        found = await self.get_article_by_id_or_slug(id_or_slug)
        article = await self._storage(
            self._repository.increment_article_counter(found.id, "view_count", 1)
        )
        if article is None:
            raise EntityNotFoundError("KnowledgeArticle", id_or_slug)

        event = _analytics_event("view", article.id, context)
        await self._track_quietly(self._repository.track_event(event))
        return article

    async def list_revisions(self, article_id: int) -> list[KnowledgeRevision]:
        await self.get_article(article_id)
        return await self._storage(self._repository.list_revisions(article_id))

    async def search(
        self, query: str, context: dict[str, Any] | None = None
    ) -> list[tuple[KnowledgeArticle, float]]:
        """Rank articles matching ``query`` by field weights and popularity."""
        query = query.strip()
        if not query:
            return []
        candidates = await self.list_articles(search=query)
        results = rank_articles(candidates, query)

        event = _analytics_event(
            "search",
            None,
            context,
            metadata={"query": query, "results_count": len(results)},
        )
        await self._track_quietly(self._repository.track_event(event))
        logger.debug("Search %r matched %d article(s)", query, len(results))
        return results

    # ── Commands ────────────────────────────────────────────────────

    async def create_article(self, data: ArticleCreate, author_id: str) -> KnowledgeArticle:
        fields = data.model_dump()
        fields["author_id"] = data.author_id or author_id
        if data.category_id is not None:
            await self._require_category(data.category_id)

        article = KnowledgeArticle(**fields)
        article.stamp_status_dates(explicit=data.model_fields_set)
        async with self._repository.article_write_lock():
            article.slug = await self._unique_slug(article.title)
            created = await self._storage(self._repository.create_article(article))
            await self._storage(
                self._repository.create_revision(
                    _snapshot(created, created.author_id, INITIAL_REVISION_DESCRIPTION)
                )
            )
        logger.info("Created article %s (%s)", created.id, created.slug)
        await self._publish("article_created", _event_payload(created))
        return created

    async def update_article(
        self, article_id: int, data: ArticleUpdate, editor_id: str | None = None
    ) -> KnowledgeArticle:
        changes = data.changes()
        if changes.get("category_id") is not None:
            await self._require_category(changes["category_id"])

        # The version read here must still be current when its revision is written.
        async with self._repository.article_write_lock(article_id):
            article = await self.get_article(article_id)

            title_changed = "title" in changes and changes["title"] != article.title
            if title_changed:
                changes["slug"] = await self._unique_slug(changes["title"], exclude_id=article_id)

            content_changed = article.update(changes)
            updated = await self._storage(self._repository.update_article(article))

            if content_changed:
                revision_author = changes.get("author_id") or editor_id or updated.author_id
                await self._storage(
                    self._repository.create_revision(
                        _snapshot(updated, revision_author, UPDATE_REVISION_DESCRIPTION)
                    )
                )
                logger.info("Article %s is now at version %d", updated.id, updated.version)

        await self._publish("article_updated", _event_payload(updated))
        return updated

    async def delete_article(self, article_id: int) -> bool:
        async with self._repository.article_write_lock(article_id):
            deleted = await self._storage(self._repository.delete_article(article_id))
        if not deleted:
            raise EntityNotFoundError("KnowledgeArticle", article_id)
        logger.info("Deleted article %s with its comments and revisions", article_id)
        await self._publish("article_deleted", {"id": article_id})
        return deleted

    async def react(
        self,
        article_id: int,
        action: ReactionAction,
        context: dict[str, Any] | None = None,
    ) -> KnowledgeArticle:
        """Like or unlike an article. Likes never drop below zero."""
        updated = await self._storage(
            self._repository.increment_article_counter(article_id, "likes", action.delta)
        )
        if updated is None:
            raise EntityNotFoundError("KnowledgeArticle", article_id)

        event = _analytics_event(action.value, article_id, context)
        await self._track_quietly(self._repository.track_event(event))
        return updated

    # ── Helpers ─────────────────────────────────────────────────────

    async def _require_category(self, category_id: int) -> None:
        category = await self._storage(self._repository.get_category(category_id))
        if category is None:
            raise EntityNotFoundError("KnowledgeCategory", category_id)

    async def _unique_slug(self, title: str, exclude_id: int | None = None) -> str:
        """Slug for ``title`` that no other article uses.

        Collisions get a numeric suffix (``-2``, ``-3``, ...). All-digit
        slugs are prefixed so they can never be mistaken for an id.
        """
        base = generate_slug(title) or FALLBACK_SLUG
        if base.isdigit():
            base = f"{FALLBACK_SLUG}-{base}"[:MAX_SLUG_LENGTH]

        candidate = base
        suffix = 2
        while True:
            existing = await self._storage(self._repository.get_article_by_slug(candidate))
            if existing is None or existing.id == exclude_id:
                return candidate
            tail = f"-{suffix}"
            candidate = base[: MAX_SLUG_LENGTH - len(tail)].rstrip("-") + tail
            suffix += 1


def _snapshot(article: KnowledgeArticle, author_id: str, description: str) -> KnowledgeRevision:
    return KnowledgeRevision(
        article_id=article.id,
        title=article.title,
        content=article.content,
        author_id=author_id,
        change_description=description,
        version=article.version,
    )


def _analytics_event(
    action: str,
    article_id: int | None,
    context: dict[str, Any] | None,
    **extra: Any,
) -> AnalyticsEvent:
    fields = {"user_id": ANONYMOUS_USER, **(context or {}), **extra}
    return AnalyticsEvent(action=action, article_id=article_id, **fields)


def _event_payload(article: KnowledgeArticle) -> dict[str, Any]:
    return {
        "id": article.id,
        "title": article.title,
        "slug": article.slug,
        "status": article.status.value,
        "version": article.version,
    }
