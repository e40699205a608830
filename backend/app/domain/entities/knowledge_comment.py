"""Domain entity for article comments."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass
class KnowledgeComment:
    """A comment on an article; ``parent_id`` points at the comment being replied to."""

    article_id: int
    author_id: str
    content: str
    id: int | None = None
    parent_id: int | None = None
    is_resolved: bool = False
    likes: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def update(self, changes: dict[str, Any]) -> None:
        for name, value in changes.items():
            setattr(self, name, value)
        self.updated_at = datetime.now(timezone.utc)
