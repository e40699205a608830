"""Application service (use case) for knowledge usage analytics."""

from datetime import datetime
from typing import Any

from app.application.schemas import AnalyticsEventCreate
from app.application.services.repository_service import RepositoryService
from app.domain.entities import AnalyticsEvent, AnalyticsTimeframe


class KnowledgeAnalyticsService(RepositoryService):
    """Append-only event log with article and recency filters."""

    async def track(
        self,
        data: AnalyticsEventCreate,
        user_id: str,
        context: dict[str, Any] | None = None,
    ) -> AnalyticsEvent:
        fields = {**(context or {}), **data.model_dump()}
        fields["user_id"] = data.user_id or user_id
        return await self._storage(self._repository.track_event(AnalyticsEvent(**fields)))

    async def query(
        self,
        *,
        article_id: int | None = None,
        timeframe: AnalyticsTimeframe | None = None,
        now: datetime | None = None,
    ) -> list[AnalyticsEvent]:
        since = timeframe.cutoff(now) if timeframe is not None else None
        return await self._storage(
            self._repository.list_events(article_id=article_id, since=since)
        )
