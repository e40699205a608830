from .knowledge_models import (
    KnowledgeAnalyticsModel,
    KnowledgeArticleModel,
    KnowledgeBookmarkModel,
    KnowledgeCategoryModel,
    KnowledgeCommentModel,
    KnowledgeRevisionModel,
)

__all__ = [
    "KnowledgeAnalyticsModel",
    "KnowledgeArticleModel",
    "KnowledgeBookmarkModel",
    "KnowledgeCategoryModel",
    "KnowledgeCommentModel",
    "KnowledgeRevisionModel",
]
