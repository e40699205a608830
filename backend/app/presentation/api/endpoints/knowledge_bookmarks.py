"""Bookmark endpoints for the requesting user."""

from fastapi import APIRouter, Body, Depends, HTTPException, status

from app.application.schemas import BookmarkCreate, BookmarkResponse
from app.application.services import KnowledgeBookmarkService
from app.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from app.infrastructure.dependencies import get_bookmark_service, get_current_user_id

router = APIRouter(tags=["Knowledge Bookmarks"])


@router.get("/bookmarks", response_model=list[BookmarkResponse])
async def list_bookmarks(
    service: KnowledgeBookmarkService = Depends(get_bookmark_service),
    user_id: str = Depends(get_current_user_id),
) -> list[BookmarkResponse]:
    bookmarks = await service.list_bookmarks(user_id)
    return [BookmarkResponse.model_validate(b) for b in bookmarks]


@router.post(
    "/articles/{article_id}/bookmark",
    response_model=BookmarkResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_bookmark(
    article_id: int,
    data: BookmarkCreate | None = Body(None),
    service: KnowledgeBookmarkService = Depends(get_bookmark_service),
    user_id: str = Depends(get_current_user_id),
) -> BookmarkResponse:
    """Bookmark an article. The body (``notes``) is optional."""
    try:
        bookmark = await service.create_bookmark(user_id, article_id, data or BookmarkCreate())
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return BookmarkResponse.model_validate(bookmark)


@router.delete("/articles/{article_id}/bookmark", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bookmark(
    article_id: int,
    service: KnowledgeBookmarkService = Depends(get_bookmark_service),
    user_id: str = Depends(get_current_user_id),
) -> None:
    try:
        await service.delete_bookmark(user_id, article_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
