from .base import Base
from .session import create_engine, create_session_factory, get_async_url
from .models import (
    KnowledgeAnalyticsModel,
    KnowledgeArticleModel,
    KnowledgeBookmarkModel,
    KnowledgeCategoryModel,
    KnowledgeCommentModel,
    KnowledgeRevisionModel,
)

__all__ = [
    "Base",
    "create_engine",
    "create_session_factory",
    "get_async_url",
    "KnowledgeAnalyticsModel",
    "KnowledgeArticleModel",
    "KnowledgeBookmarkModel",
    "KnowledgeCategoryModel",
    "KnowledgeCommentModel",
    "KnowledgeRevisionModel",
]
