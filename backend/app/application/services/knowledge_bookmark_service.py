"""Application service (use case) for per-user bookmarks."""

from app.application.schemas import BookmarkCreate
from app.application.services.repository_service import RepositoryService
from app.domain.entities import KnowledgeBookmark
from app.domain.exceptions import DuplicateEntityError, EntityNotFoundError


class KnowledgeBookmarkService(RepositoryService):
    """A user can bookmark an article at most once."""

    async def list_bookmarks(self, user_id: str) -> list[KnowledgeBookmark]:
        return await self._storage(self._repository.list_bookmarks(user_id))

    async def create_bookmark(
        self, user_id: str, article_id: int, data: BookmarkCreate
    ) -> KnowledgeBookmark:
        if await self._storage(self._repository.get_article(article_id)) is None:
            raise EntityNotFoundError("KnowledgeArticle", article_id)
        existing = await self._storage(self._repository.get_bookmark(user_id, article_id))
        if existing is not None:
            raise DuplicateEntityError("KnowledgeBookmark", "article_id", str(article_id))

        bookmark = KnowledgeBookmark(user_id=user_id, article_id=article_id, notes=data.notes)
        return await self._storage(self._repository.create_bookmark(bookmark))

    async def delete_bookmark(self, user_id: str, article_id: int) -> bool:
        deleted = await self._storage(self._repository.delete_bookmark(user_id, article_id))
        if not deleted:
            raise EntityNotFoundError("KnowledgeBookmark", f"{user_id}/{article_id}")
        return deleted
