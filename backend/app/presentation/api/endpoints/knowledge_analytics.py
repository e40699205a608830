"""Analytics endpoints: record usage events and query them back."""

from typing import Any

from fastapi import APIRouter, Depends, Query, status

from app.application.schemas import AnalyticsEventCreate, AnalyticsEventResponse
from app.application.services import KnowledgeAnalyticsService
from app.domain.entities import AnalyticsTimeframe
from app.infrastructure.dependencies import (
    get_analytics_service,
    get_current_user_id,
    get_request_context,
)

router = APIRouter(prefix="/analytics", tags=["Knowledge Analytics"])


@router.get("", response_model=list[AnalyticsEventResponse])
async def query_analytics(
    article_id: int | None = Query(None, alias="articleId"),
    timeframe: AnalyticsTimeframe | None = None,
    service: KnowledgeAnalyticsService = Depends(get_analytics_service),
) -> list[AnalyticsEventResponse]:
    """Events newest first, optionally limited to one article and a recent window."""
    events = await service.query(article_id=article_id, timeframe=timeframe)
    return [AnalyticsEventResponse.model_validate(e) for e in events]


@router.post("", response_model=AnalyticsEventResponse, status_code=status.HTTP_201_CREATED)
async def track_event(
    data: AnalyticsEventCreate,
    service: KnowledgeAnalyticsService = Depends(get_analytics_service),
    user_id: str = Depends(get_current_user_id),
    context: dict[str, Any] = Depends(get_request_context),
) -> AnalyticsEventResponse:
    event = await service.track(data, user_id, context)
    return AnalyticsEventResponse.model_validate(event)
