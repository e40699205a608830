"""Domain entity for knowledge categories."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

DEFAULT_CATEGORY_COLOR = "#3b82f6"
DEFAULT_CATEGORY_ICON = "Book"


@dataclass
class KnowledgeCategory:
    """A grouping for articles. ``parent_id`` allows a shallow hierarchy."""

    name: str
    id: int | None = None
    description: str | None = None
    color: str = DEFAULT_CATEGORY_COLOR
    icon: str = DEFAULT_CATEGORY_ICON
    parent_id: int | None = None
    sort_order: int = 0
    is_active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def update(self, changes: dict[str, Any]) -> None:
        """Merge field changes and refresh the updated_at timestamp."""
        for name, value in changes.items():
            setattr(self, name, value)
        self.updated_at = datetime.now(timezone.utc)
