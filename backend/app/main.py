"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.application.services import KnowledgeEventBroadcaster
from app.config import Settings, get_settings
from app.domain.exceptions import StorageTimeoutError, UnsupportedOperationError
from app.infrastructure.logging.log_config import setup_logging
from app.infrastructure.storage.knowledge_storage import build_knowledge_storage
from app.infrastructure.storage.sample_data import seed_sample_data
from app.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — prepare storage, seed sample data, close streams."""
    settings: Settings = app.state.settings
    storage = app.state.knowledge_storage
    setup_logging(settings)

    # 1. Create tables (database backend only)
    await storage.initialize()

    # 2. Seed default categories and sample articles into an empty store
    if settings.seed_sample_data:
        await seed_sample_data(storage)

    yield

    # Shutdown
    await app.state.event_broadcaster.shutdown()
    await storage.dispose()


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid data", "details": jsonable_encoder(exc.errors())},
    )


async def unsupported_operation_handler(
    request: Request, exc: UnsupportedOperationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_501_NOT_IMPLEMENTED,
        content={"detail": str(exc)},
    )


async def storage_timeout_handler(request: Request, exc: StorageTimeoutError) -> JSONResponse:
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the failure, never leak it to the client."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # Storage backend and event stream are process-wide
    app.state.settings = settings
    app.state.knowledge_storage = build_knowledge_storage(settings)
    app.state.event_broadcaster = KnowledgeEventBroadcaster(queue_size=settings.sse_queue_size)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(UnsupportedOperationError, unsupported_operation_handler)
    app.add_exception_handler(StorageTimeoutError, storage_timeout_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
