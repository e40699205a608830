"""Application service (use case) for knowledge categories."""

import logging

from app.application.schemas import CategoryCreate, CategoryUpdate
from app.application.services.repository_service import RepositoryService
from app.domain.entities import KnowledgeCategory
from app.domain.exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)


class KnowledgeCategoryService(RepositoryService):
    """Category CRUD. Deleting a category detaches (never deletes) its articles."""

    async def list_categories(self) -> list[KnowledgeCategory]:
        return await self._storage(self._repository.list_categories())

    async def get_category(self, category_id: int) -> KnowledgeCategory:
        category = await self._storage(self._repository.get_category(category_id))
        if category is None:
            raise EntityNotFoundError("KnowledgeCategory", category_id)
        return category

    async def create_category(self, data: CategoryCreate) -> KnowledgeCategory:
        if data.parent_id is not None:
            await self.get_category(data.parent_id)
        category = KnowledgeCategory(**data.model_dump())
        created = await self._storage(self._repository.create_category(category))
        logger.info("Created category %s (%s)", created.id, created.name)
        await self._publish("category_created", {"id": created.id, "name": created.name})
        return created

    async def update_category(
        self, category_id: int, data: CategoryUpdate
    ) -> KnowledgeCategory:
        category = await self.get_category(category_id)
        changes = data.changes()
        parent_id = changes.get("parent_id")
        if parent_id is not None:
            if parent_id == category_id:
                raise ValueError("A category cannot be its own parent")
            await self.get_category(parent_id)
        category.update(changes)
        updated = await self._storage(self._repository.update_category(category))
        await self._publish("category_updated", {"id": updated.id, "name": updated.name})
        return updated

    async def delete_category(self, category_id: int) -> bool:
        deleted = await self._storage(self._repository.delete_category(category_id))
        if not deleted:
            raise EntityNotFoundError("KnowledgeCategory", category_id)
        logger.info("Deleted category %s", category_id)
        await self._publish("category_deleted", {"id": category_id})
        return deleted
