"""Endpoints operating on a single comment."""

from fastapi import APIRouter, Depends, HTTPException, status

from app.application.schemas import CommentResponse, CommentUpdate
from app.application.services import KnowledgeCommentService
from app.domain.exceptions import EntityNotFoundError
from app.infrastructure.dependencies import get_comment_service

router = APIRouter(prefix="/comments", tags=["Knowledge Comments"])


@router.put("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: int,
    data: CommentUpdate,
    service: KnowledgeCommentService = Depends(get_comment_service),
) -> CommentResponse:
    """Edit a comment or mark it resolved."""
    try:
        comment = await service.update_comment(comment_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return CommentResponse.model_validate(comment)


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: int,
    service: KnowledgeCommentService = Depends(get_comment_service),
) -> None:
    """Delete a comment. Its replies are kept as top-level comments."""
    try:
        await service.delete_comment(comment_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
