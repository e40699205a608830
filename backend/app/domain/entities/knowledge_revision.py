"""Domain entity for article revision snapshots."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

INITIAL_REVISION_DESCRIPTION = "Initial creation"
UPDATE_REVISION_DESCRIPTION = "Content updated"


@dataclass(frozen=True)
class KnowledgeRevision:
    """Immutable snapshot of an article's title and content at one version."""

    article_id: int
    title: str
    content: str
    author_id: str
    version: int
    change_description: str | None = None
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
