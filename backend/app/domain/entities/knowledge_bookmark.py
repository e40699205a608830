"""Domain entity for per-user article bookmarks."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class KnowledgeBookmark:
    user_id: str
    article_id: int
    id: int | None = None
    notes: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
