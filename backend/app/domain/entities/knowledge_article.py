"""Domain entity for knowledge-base articles — pure Python, no framework dependencies."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ArticleStatus(str, Enum):
    """Workflow status of an article. Any status may follow any other."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class ArticlePriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ReactionAction(str, Enum):
    LIKE = "like"
    UNLIKE = "unlike"

    @property
    def delta(self) -> int:
        return 1 if self is ReactionAction.LIKE else -1


# Fields that count as a content change and therefore produce a new version.
VERSIONED_FIELDS = frozenset({"title", "content"})

# Engagement counters. Only changed in place by the repository, never by a
# whole-record write.
COUNTER_FIELDS = frozenset({"view_count", "likes", "dislikes"})


@dataclass
class KnowledgeArticle:
    """Core domain entity representing a versioned knowledge article.

    ``version`` starts at 1 and grows by exactly one for every update that
    changes the title or the content. Every such version has a matching
    revision snapshot in the revision ledger.
    """

    title: str
    content: str
    author_id: str
    id: int | None = None
    slug: str = ""
    excerpt: str | None = None
    category_id: int | None = None
    status: ArticleStatus = ArticleStatus.DRAFT
    priority: ArticlePriority = ArticlePriority.MEDIUM
    tags: list[str] = field(default_factory=list)
    attachments: list[str] = field(default_factory=list)
    related_articles: list[int] = field(default_factory=list)
    search_keywords: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    view_count: int = 0
    likes: int = 0
    dislikes: int = 0
    is_public: bool = False
    is_featured: bool = False
    version: int = 1
    published_at: datetime | None = None
    archived_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def update(self, changes: dict[str, Any]) -> bool:
        """Merge ``changes`` into the article and refresh ``updated_at``.

        Returns True when the title or content actually changed, in which
        case the version has been incremented. Metadata-only updates
        (status, tags, flags, ...) leave the version untouched.
        """
        content_changed = any(
            name in changes and changes[name] != getattr(self, name)
            for name in VERSIONED_FIELDS
        )
        for name, value in changes.items():
            setattr(self, name, value)
        if "status" in changes:
            self.stamp_status_dates(explicit=changes.keys())
        if content_changed:
            self.version += 1
        self.updated_at = datetime.now(timezone.utc)
        return content_changed

    def stamp_status_dates(self, explicit: Any = ()) -> None:
        """Fill ``published_at`` / ``archived_at`` on entering those states."""
        now = datetime.now(timezone.utc)
        if (
            self.status == ArticleStatus.PUBLISHED
            and self.published_at is None
            and "published_at" not in explicit
        ):
            self.published_at = now
        if (
            self.status == ArticleStatus.ARCHIVED
            and self.archived_at is None
            and "archived_at" not in explicit
        ):
            self.archived_at = now
