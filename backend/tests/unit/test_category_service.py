"""Unit tests for the KnowledgeCategoryService."""

import pytest

from app.application.schemas import ArticleCreate, CategoryCreate, CategoryUpdate
from app.application.services import KnowledgeArticleService, KnowledgeCategoryService
from app.domain.exceptions import EntityNotFoundError
from app.infrastructure.memory import InMemoryKnowledgeRepository


@pytest.fixture
def repository() -> InMemoryKnowledgeRepository:
    return InMemoryKnowledgeRepository()


@pytest.fixture
def service(repository) -> KnowledgeCategoryService:
    return KnowledgeCategoryService(repository)


@pytest.mark.asyncio
async def test_categories_listed_by_sort_order(service: KnowledgeCategoryService):
    await service.create_category(CategoryCreate(name="Zeta", sort_order=1))
    await service.create_category(CategoryCreate(name="Beta", sort_order=2))
    await service.create_category(CategoryCreate(name="Alpha", sort_order=2))

    names = [c.name for c in await service.list_categories()]
    assert names == ["Zeta", "Alpha", "Beta"]


@pytest.mark.asyncio
async def test_defaults_applied(service: KnowledgeCategoryService):
    category = await service.create_category(CategoryCreate(name="Docs"))
    assert category.color == "#3b82f6"
    assert category.icon == "Book"
    assert category.is_active is True


@pytest.mark.asyncio
async def test_update_can_clear_description(service: KnowledgeCategoryService):
    category = await service.create_category(
        CategoryCreate(name="Docs", description="Everything")
    )
    updated = await service.update_category(
        category.id, CategoryUpdate.model_validate({"description": None, "name": None})
    )
    assert updated.description is None
    assert updated.name == "Docs"


@pytest.mark.asyncio
async def test_unknown_parent_is_rejected(service: KnowledgeCategoryService):
    with pytest.raises(EntityNotFoundError):
        await service.create_category(CategoryCreate(name="Child", parent_id=99))


@pytest.mark.asyncio
async def test_category_cannot_be_its_own_parent(service: KnowledgeCategoryService):
    category = await service.create_category(CategoryCreate(name="Loop"))
    with pytest.raises(ValueError):
        await service.update_category(category.id, CategoryUpdate(parent_id=category.id))


@pytest.mark.asyncio
async def test_delete_detaches_articles_and_children(service, repository):
    parent = await service.create_category(CategoryCreate(name="Parent"))
    child = await service.create_category(CategoryCreate(name="Child", parent_id=parent.id))
    articles = KnowledgeArticleService(repository)
    article = await articles.create_article(
        ArticleCreate(title="Filed", content="C", category_id=parent.id), "1"
    )

    await service.delete_category(parent.id)

    assert (await service.get_category(child.id)).parent_id is None
    assert (await articles.get_article(article.id)).category_id is None
    with pytest.raises(EntityNotFoundError):
        await service.delete_category(parent.id)
