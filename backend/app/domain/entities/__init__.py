from .knowledge_article import (
    ArticlePriority,
    ArticleStatus,
    KnowledgeArticle,
    COUNTER_FIELDS,
    ReactionAction,
    VERSIONED_FIELDS,
)
from .knowledge_category import KnowledgeCategory
from .knowledge_revision import (
    INITIAL_REVISION_DESCRIPTION,
    UPDATE_REVISION_DESCRIPTION,
    KnowledgeRevision,
)
from .knowledge_comment import KnowledgeComment
from .knowledge_bookmark import KnowledgeBookmark
from .knowledge_analytics import AnalyticsEvent, AnalyticsTimeframe

__all__ = [
    "ArticlePriority",
    "ArticleStatus",
    "KnowledgeArticle",
    "ReactionAction",
    "COUNTER_FIELDS",
    "VERSIONED_FIELDS",
    "KnowledgeCategory",
    "INITIAL_REVISION_DESCRIPTION",
    "UPDATE_REVISION_DESCRIPTION",
    "KnowledgeRevision",
    "KnowledgeComment",
    "KnowledgeBookmark",
    "AnalyticsEvent",
    "AnalyticsTimeframe",
]
