"""SQLAlchemy knowledge repository tests against a temporary SQLite database."""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio

from app.application.schemas import (
    ArticleCreate,
    ArticleUpdate,
    BookmarkCreate,
    CategoryCreate,
    CommentCreate,
)
from app.application.services import (
    KnowledgeAnalyticsService,
    KnowledgeArticleService,
    KnowledgeBookmarkService,
    KnowledgeCategoryService,
    KnowledgeCommentService,
)
from app.config import Settings
from app.domain.entities import (
    AnalyticsEvent,
    AnalyticsTimeframe,
    ArticleStatus,
    ReactionAction,
)
from app.domain.exceptions import EntityNotFoundError
from app.infrastructure.storage.knowledge_storage import (
    DatabaseKnowledgeStorage,
    build_knowledge_storage,
)
from app.infrastructure.storage.sample_data import (
    SAMPLE_ARTICLES,
    SAMPLE_CATEGORIES,
    seed_sample_data,
)


@pytest_asyncio.fixture
async def storage(tmp_path):
    storage = DatabaseKnowledgeStorage(f"sqlite:///{tmp_path / 'knowledge.db'}")
    await storage.initialize()
    yield storage
    await storage.dispose()


def test_database_url_selects_database_storage(tmp_path):
    settings = Settings(database_url=f"sqlite:///{tmp_path / 'kb.db'}")
    assert isinstance(build_knowledge_storage(settings), DatabaseKnowledgeStorage)


@pytest.mark.asyncio
async def test_article_versions_survive_across_sessions(storage):
    async with storage.session() as repository:
        category = await KnowledgeCategoryService(repository).create_category(
            CategoryCreate(name="Policies")
        )
        article = await KnowledgeArticleService(repository).create_article(
            ArticleCreate(
                title="GDPR Policy",
                content="Rules",
                category_id=category.id,
                tags=["gdpr", "privacy"],
                metadata={"owner": "legal"},
            ),
            author_id="1",
        )

    async with storage.session() as repository:
        service = KnowledgeArticleService(repository)
        await service.update_article(article.id, ArticleUpdate(status=ArticleStatus.PUBLISHED))
        await service.update_article(article.id, ArticleUpdate(content="Stricter rules"))

    async with storage.session() as repository:
        service = KnowledgeArticleService(repository)
        stored = await service.get_article_by_slug("gdpr-policy")
        revisions = await service.list_revisions(article.id)

    assert stored.version == 2
    assert stored.status == ArticleStatus.PUBLISHED
    assert stored.tags == ["gdpr", "privacy"]
    assert stored.metadata == {"owner": "legal"}
    assert stored.published_at.tzinfo is not None
    assert [r.version for r in revisions] == [2, 1]


@pytest.mark.asyncio
async def test_failed_unit_of_work_is_rolled_back(storage):
    with pytest.raises(EntityNotFoundError):
        async with storage.session() as repository:
            service = KnowledgeCategoryService(repository)
            await service.create_category(CategoryCreate(name="Orphan"))
            await service.get_category(999)

    async with storage.session() as repository:
        assert await KnowledgeCategoryService(repository).list_categories() == []


@pytest.mark.asyncio
async def test_slug_collisions_and_search(storage):
    async with storage.session() as repository:
        service = KnowledgeArticleService(repository)
        first = await service.create_article(ArticleCreate(title="Hello, World!", content="a"), "1")
        second = await service.create_article(
            ArticleCreate(title="Hello, World!", content="b", tags=["greeting"]), "1"
        )
        results = await service.search("greet")
        filtered = await service.list_articles(search="GREETING")

    assert (first.slug, second.slug) == ("hello-world", "hello-world-2")
    assert [(a.id, score) for a, score in results] == [(second.id, 3.0)]
    assert [a.id for a in filtered] == [second.id]


@pytest.mark.asyncio
async def test_delete_article_cascades(storage):
    async with storage.session() as repository:
        article = await KnowledgeArticleService(repository).create_article(
            ArticleCreate(title="Doomed", content="C"), "1"
        )
        await KnowledgeCommentService(repository).create_comment(
            article.id, CommentCreate(content="Hi"), "1"
        )
        await KnowledgeBookmarkService(repository).create_bookmark(
            "1", article.id, BookmarkCreate()
        )

    async with storage.session() as repository:
        await KnowledgeArticleService(repository).delete_article(article.id)

    async with storage.session() as repository:
        assert await repository.list_articles() == []
        assert await repository.list_comments(article.id) == []
        assert await repository.list_revisions(article.id) == []
        assert await repository.list_bookmarks("1") == []


@pytest.mark.asyncio
async def test_comment_delete_promotes_replies(storage):
    async with storage.session() as repository:
        article = await KnowledgeArticleService(repository).create_article(
            ArticleCreate(title="Thread", content="C"), "1"
        )
        comments = KnowledgeCommentService(repository)
        parent = await comments.create_comment(article.id, CommentCreate(content="Q"), "1")
        await comments.create_comment(
            article.id, CommentCreate(content="A", parent_id=parent.id), "2"
        )
        await comments.delete_comment(parent.id)

    async with storage.session() as repository:
        remaining = await repository.list_comments(article.id)

    assert [(c.content, c.parent_id) for c in remaining] == [("A", None)]


@pytest.mark.asyncio
async def test_category_delete_detaches_articles(storage):
    async with storage.session() as repository:
        category = await KnowledgeCategoryService(repository).create_category(
            CategoryCreate(name="Temporary")
        )
        article = await KnowledgeArticleService(repository).create_article(
            ArticleCreate(title="Filed", content="C", category_id=category.id), "1"
        )

    async with storage.session() as repository:
        await KnowledgeCategoryService(repository).delete_category(category.id)

    async with storage.session() as repository:
        stored = await repository.get_article(article.id)

    assert stored.category_id is None


@pytest.mark.asyncio
async def test_analytics_timeframe(storage):
    now = datetime.now(timezone.utc)
    async with storage.session() as repository:
        await repository.track_event(
            AnalyticsEvent(action="view", user_id="1", article_id=1, created_at=now - timedelta(hours=25))
        )
        await repository.track_event(
            AnalyticsEvent(
                action="view",
                user_id="1",
                article_id=1,
                metadata={"source": "email"},
                created_at=now - timedelta(hours=1),
            )
        )

    async with storage.session() as repository:
        events = await KnowledgeAnalyticsService(repository).query(
            article_id=1, timeframe=AnalyticsTimeframe.LAST_24_HOURS, now=now
        )

    assert len(events) == 1
    assert events[0].metadata == {"source": "email"}
    assert events[0].created_at == now - timedelta(hours=1)


@pytest.mark.asyncio
async def test_sample_data_is_seeded_once(storage):
    assert await seed_sample_data(storage) is True
    assert await seed_sample_data(storage) is False

    async with storage.session() as repository:
        categories = await repository.list_categories()
        articles = await repository.list_articles()
        published = await repository.list_articles(status=ArticleStatus.PUBLISHED)

    assert [c.name for c in categories] == [c["name"] for c in SAMPLE_CATEGORIES]
    assert len(articles) == len(SAMPLE_ARTICLES)
    assert all(a.published_at is not None for a in published)


@pytest.mark.asyncio
async def test_counters_change_in_place(storage):
    async with storage.session() as repository:
        article = await KnowledgeArticleService(repository).create_article(
            ArticleCreate(title="Counted", content="C"), "1"
        )

    async with storage.session() as repository:
        stale = await repository.get_article(article.id)
        await repository.increment_article_counter(article.id, "likes", 3)
        liked = await repository.increment_article_counter(article.id, "likes", -1)
        await repository.increment_article_counter(article.id, "view_count", 1)
        stale.content = "Edited"
        await repository.update_article(stale)
        missing = await repository.increment_article_counter(999, "likes", 1)

    async with storage.session() as repository:
        stored = await repository.get_article(article.id)
        floored = await repository.increment_article_counter(article.id, "likes", -5)

    assert liked.likes == 2
    assert missing is None
    assert (stored.content, stored.likes, stored.view_count) == ("Edited", 2, 1)
    assert floored.likes == 0


@pytest.mark.asyncio
async def test_view_and_like_through_services(storage):
    async with storage.session() as repository:
        article = await KnowledgeArticleService(repository).create_article(
            ArticleCreate(title="Popular", content="C"), "1"
        )

    for _ in range(2):
        async with storage.session() as repository:
            service = KnowledgeArticleService(repository)
            await service.view_article("popular")
            await service.react(article.id, ReactionAction.LIKE)

    async with storage.session() as repository:
        stored = await repository.get_article(article.id)
        events = await repository.list_events(article_id=article.id)

    assert (stored.view_count, stored.likes, stored.version) == (2, 2, 1)
    assert sorted(e.action for e in events) == ["like", "like", "view", "view"]
