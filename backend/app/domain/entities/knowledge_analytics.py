"""Domain entities for knowledge usage analytics."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any


class AnalyticsTimeframe(str, Enum):
    """Recency windows accepted by analytics queries."""

    LAST_24_HOURS = "24h"
    LAST_7_DAYS = "7d"
    LAST_30_DAYS = "30d"

    @property
    def window(self) -> timedelta:
        return _WINDOWS[self]

    def cutoff(self, now: datetime | None = None) -> datetime:
        """Oldest ``created_at`` still inside this timeframe."""
        return (now or datetime.now(timezone.utc)) - self.window


_WINDOWS = {
    AnalyticsTimeframe.LAST_24_HOURS: timedelta(hours=24),
    AnalyticsTimeframe.LAST_7_DAYS: timedelta(days=7),
    AnalyticsTimeframe.LAST_30_DAYS: timedelta(days=30),
}


@dataclass
class AnalyticsEvent:
    """A recorded interaction (view, like, search, ...) with the knowledge base.

    ``article_id`` is None for events that are not about a single article,
    such as searches.
    """

    action: str
    user_id: str
    article_id: int | None = None
    id: int | None = None
    session_id: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    referrer: str | None = None
    time_spent: int | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
