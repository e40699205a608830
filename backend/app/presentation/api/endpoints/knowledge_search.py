"""Ranked full-text search over knowledge articles."""

from typing import Any

from fastapi import APIRouter, Depends

from app.application.schemas import ArticleResponse, ArticleSearchResult
from app.application.services import KnowledgeArticleService
from app.infrastructure.dependencies import get_article_service, get_request_context

router = APIRouter(tags=["Knowledge Search"])


@router.get("/search", response_model=list[ArticleSearchResult])
async def search_articles(
    q: str = "",
    service: KnowledgeArticleService = Depends(get_article_service),
    context: dict[str, Any] = Depends(get_request_context),
) -> list[ArticleSearchResult]:
    """Articles matching ``q``, best match first. An empty query returns nothing."""
    results = await service.search(q, context)
    return [
        ArticleSearchResult(
            **ArticleResponse.model_validate(article).model_dump(),
            search_score=score,
        )
        for article, score in results
    ]
