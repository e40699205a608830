from .event_broadcaster import KnowledgeEventBroadcaster, PendingEvents
from .repository_service import RepositoryService
from .knowledge_category_service import KnowledgeCategoryService
from .knowledge_article_service import KnowledgeArticleService
from .knowledge_comment_service import KnowledgeCommentService
from .knowledge_bookmark_service import KnowledgeBookmarkService
from .knowledge_analytics_service import KnowledgeAnalyticsService

__all__ = [
    "KnowledgeEventBroadcaster",
    "PendingEvents",
    "RepositoryService",
    "KnowledgeCategoryService",
    "KnowledgeArticleService",
    "KnowledgeCommentService",
    "KnowledgeBookmarkService",
    "KnowledgeAnalyticsService",
]
