"""Top-level API router — health plus the knowledge sub-routers."""

from fastapi import APIRouter

from app.presentation.api.endpoints.health import router as health_router
from app.presentation.api.endpoints.knowledge_analytics import router as analytics_router
from app.presentation.api.endpoints.knowledge_articles import router as articles_router
from app.presentation.api.endpoints.knowledge_bookmarks import router as bookmarks_router
from app.presentation.api.endpoints.knowledge_categories import router as categories_router
from app.presentation.api.endpoints.knowledge_comments import router as comments_router
from app.presentation.api.endpoints.knowledge_events import router as events_router
from app.presentation.api.endpoints.knowledge_search import router as search_router

knowledge_router = APIRouter(prefix="/knowledge")
knowledge_router.include_router(categories_router)
knowledge_router.include_router(articles_router)
knowledge_router.include_router(comments_router)
knowledge_router.include_router(bookmarks_router)
knowledge_router.include_router(analytics_router)
knowledge_router.include_router(search_router)
knowledge_router.include_router(events_router)

router = APIRouter(prefix="/api")
router.include_router(health_router)
router.include_router(knowledge_router)
