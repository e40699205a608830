"""Pydantic DTOs for knowledge articles, reactions and revisions."""

from datetime import datetime
from typing import Any, ClassVar

from pydantic import Field

from app.application.schemas.base import CamelModel, PartialUpdate
from app.domain.entities import ArticlePriority, ArticleStatus, ReactionAction


class ArticleCreate(CamelModel):
    """Schema for creating a new article.

    ``author_id`` defaults to the requesting user when omitted.
    """

    title: str = Field(..., min_length=1, max_length=500, examples=["GDPR Policy"])
    content: str = Field(..., min_length=1, examples=["# Data handling rules"])
    excerpt: str | None = Field(None, max_length=1000)
    category_id: int | None = None
    author_id: str | None = Field(None, min_length=1, max_length=255)
    status: ArticleStatus = ArticleStatus.DRAFT
    priority: ArticlePriority = ArticlePriority.MEDIUM
    tags: list[str] = Field(default_factory=list)
    attachments: list[str] = Field(default_factory=list)
    related_articles: list[int] = Field(default_factory=list)
    search_keywords: str | None = Field(None, max_length=2000)
    metadata: dict[str, Any] = Field(default_factory=dict)
    is_public: bool = False
    is_featured: bool = False
    published_at: datetime | None = None
    archived_at: datetime | None = None


class ArticleUpdate(PartialUpdate):
    """Schema for updating an existing article — all fields optional.

    Counters (views, likes) and the version are managed by the server.
    """

    nullable_fields: ClassVar[frozenset[str]] = frozenset({
        "excerpt",
        "category_id",
        "search_keywords",
        "published_at",
        "archived_at",
    })

    title: str | None = Field(None, min_length=1, max_length=500)
    content: str | None = Field(None, min_length=1)
    excerpt: str | None = Field(None, max_length=1000)
    category_id: int | None = None
    author_id: str | None = Field(None, min_length=1, max_length=255)
    status: ArticleStatus | None = None
    priority: ArticlePriority | None = None
    tags: list[str] | None = None
    attachments: list[str] | None = None
    related_articles: list[int] | None = None
    search_keywords: str | None = Field(None, max_length=2000)
    metadata: dict[str, Any] | None = None
    is_public: bool | None = None
    is_featured: bool | None = None
    published_at: datetime | None = None
    archived_at: datetime | None = None


class ArticleResponse(CamelModel):
    """Schema returned to the client."""

    id: int
    title: str
    slug: str
    content: str
    excerpt: str | None
    category_id: int | None
    author_id: str
    status: ArticleStatus
    priority: ArticlePriority
    tags: list[str]
    attachments: list[str]
    related_articles: list[int]
    search_keywords: str | None
    metadata: dict[str, Any]
    view_count: int
    likes: int
    dislikes: int
    is_public: bool
    is_featured: bool
    version: int
    published_at: datetime | None
    archived_at: datetime | None
    created_at: datetime
    updated_at: datetime


class ArticleSearchResult(ArticleResponse):
    search_score: float


class ReactionRequest(CamelModel):
    action: ReactionAction


class ReactionResponse(CamelModel):
    success: bool = True
    likes: int


class RevisionResponse(CamelModel):
    id: int
    article_id: int
    title: str
    content: str
    author_id: str
    change_description: str | None
    version: int
    created_at: datetime
