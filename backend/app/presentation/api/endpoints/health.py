"""Health check endpoint — no storage access, always available."""

from fastapi import APIRouter, Depends, Request

from app.config import Settings
from app.infrastructure.dependencies import get_app_settings

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> dict:
    """Returns the current application health status."""
    storage = getattr(request.app.state, "knowledge_storage", None)
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "storage": storage.name if storage is not None else None,
    }
