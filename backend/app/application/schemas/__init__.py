from .knowledge_category import CategoryCreate, CategoryUpdate, CategoryResponse
from .knowledge_article import (
    ArticleCreate,
    ArticleUpdate,
    ArticleResponse,
    ArticleSearchResult,
    ReactionRequest,
    ReactionResponse,
    RevisionResponse,
)
from .knowledge_engagement import (
    AnalyticsEventCreate,
    AnalyticsEventResponse,
    BookmarkCreate,
    BookmarkResponse,
    CommentCreate,
    CommentResponse,
    CommentUpdate,
)

__all__ = [
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "ArticleCreate",
    "ArticleUpdate",
    "ArticleResponse",
    "ArticleSearchResult",
    "ReactionRequest",
    "ReactionResponse",
    "RevisionResponse",
    "AnalyticsEventCreate",
    "AnalyticsEventResponse",
    "BookmarkCreate",
    "BookmarkResponse",
    "CommentCreate",
    "CommentResponse",
    "CommentUpdate",
]
