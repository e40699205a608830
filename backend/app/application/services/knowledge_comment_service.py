"""Application service (use case) for article comment threads."""

import logging

from app.application.schemas import CommentCreate, CommentUpdate
from app.application.services.repository_service import RepositoryService
from app.domain.entities import KnowledgeComment
from app.domain.exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)


class KnowledgeCommentService(RepositoryService):
    async def list_comments(self, article_id: int) -> list[KnowledgeComment]:
        await self._require_article(article_id)
        return await self._storage(self._repository.list_comments(article_id))

    async def create_comment(
        self, article_id: int, data: CommentCreate, author_id: str
    ) -> KnowledgeComment:
        await self._require_article(article_id)
        if data.parent_id is not None:
            parent = await self._storage(self._repository.get_comment(data.parent_id))
            # Replies must stay inside the thread of the same article.
            if parent is None or parent.article_id != article_id:
                raise EntityNotFoundError("KnowledgeComment", data.parent_id)

        comment = KnowledgeComment(
            article_id=article_id,
            author_id=data.author_id or author_id,
            content=data.content,
            parent_id=data.parent_id,
        )
        created = await self._storage(self._repository.create_comment(comment))
        await self._publish(
            "comment_created", {"id": created.id, "article_id": article_id}
        )
        return created

    async def update_comment(self, comment_id: int, data: CommentUpdate) -> KnowledgeComment:
        comment = await self._storage(self._repository.get_comment(comment_id))
        if comment is None:
            raise EntityNotFoundError("KnowledgeComment", comment_id)
        comment.update(data.changes())
        return await self._storage(self._repository.update_comment(comment))

    async def delete_comment(self, comment_id: int) -> bool:
        deleted = await self._storage(self._repository.delete_comment(comment_id))
        if not deleted:
            raise EntityNotFoundError("KnowledgeComment", comment_id)
        logger.debug("Deleted comment %s", comment_id)
        return deleted

    async def _require_article(self, article_id: int) -> None:
        if await self._storage(self._repository.get_article(article_id)) is None:
            raise EntityNotFoundError("KnowledgeArticle", article_id)
