"""Server-Sent Events stream of knowledge store changes."""

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from app.application.services import KnowledgeEventBroadcaster
from app.infrastructure.dependencies import get_event_broadcaster

router = APIRouter(tags=["Knowledge Events"])


@router.get("/events")
async def stream_events(
    broadcaster: KnowledgeEventBroadcaster = Depends(get_event_broadcaster),
) -> StreamingResponse:
    """Stream article, category and comment change notifications."""
    return StreamingResponse(
        broadcaster.subscribe(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
