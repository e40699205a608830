"""Knowledge article endpoints: CRUD, reactions, comment threads and revisions."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.application.schemas import (
    ArticleCreate,
    ArticleResponse,
    ArticleUpdate,
    CommentCreate,
    CommentResponse,
    ReactionRequest,
    ReactionResponse,
    RevisionResponse,
)
from app.application.services import KnowledgeArticleService, KnowledgeCommentService
from app.domain.entities import ArticleStatus
from app.domain.exceptions import EntityNotFoundError
from app.infrastructure.dependencies import (
    get_article_service,
    get_comment_service,
    get_current_user_id,
    get_request_context,
)

router = APIRouter(prefix="/articles", tags=["Knowledge Articles"])


@router.get("", response_model=list[ArticleResponse])
async def list_articles(
    category_id: int | None = Query(None, alias="categoryId"),
    article_status: ArticleStatus | None = Query(None, alias="status"),
    author_id: str | None = Query(None, alias="authorId"),
    search: str | None = None,
    service: KnowledgeArticleService = Depends(get_article_service),
) -> list[ArticleResponse]:
    """Retrieve articles, most recently updated first. All filters are optional."""
    articles = await service.list_articles(
        category_id=category_id,
        status=article_status,
        author_id=author_id,
        search=search,
    )
    return [ArticleResponse.model_validate(a) for a in articles]


@router.get("/{id_or_slug}", response_model=ArticleResponse)
async def get_article(
    id_or_slug: str,
    service: KnowledgeArticleService = Depends(get_article_service),
    context: dict[str, Any] = Depends(get_request_context),
) -> ArticleResponse:
    """Retrieve a single article by numeric ID or slug and count the view."""
    try:
        article = await service.view_article(id_or_slug, context)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ArticleResponse.model_validate(article)


@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_article(
    data: ArticleCreate,
    service: KnowledgeArticleService = Depends(get_article_service),
    user_id: str = Depends(get_current_user_id),
) -> ArticleResponse:
    """Create a new article at version 1 with its initial revision."""
    try:
        article = await service.create_article(data, author_id=user_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ArticleResponse.model_validate(article)


@router.put("/{article_id}", response_model=ArticleResponse)
async def update_article(
    article_id: int,
    data: ArticleUpdate,
    service: KnowledgeArticleService = Depends(get_article_service),
    user_id: str = Depends(get_current_user_id),
) -> ArticleResponse:
    """Update an existing article. Title or content changes add a revision."""
    try:
        article = await service.update_article(article_id, data, editor_id=user_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ArticleResponse.model_validate(article)


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(
    article_id: int,
    service: KnowledgeArticleService = Depends(get_article_service),
) -> None:
    """Delete an article together with its revisions, comments and bookmarks."""
    try:
        await service.delete_article(article_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/{article_id}/like", response_model=ReactionResponse)
async def react_to_article(
    article_id: int,
    data: ReactionRequest,
    service: KnowledgeArticleService = Depends(get_article_service),
    context: dict[str, Any] = Depends(get_request_context),
) -> ReactionResponse:
    try:
        article = await service.react(article_id, data.action, context)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ReactionResponse(likes=article.likes)


@router.get("/{article_id}/revisions", response_model=list[RevisionResponse])
async def list_revisions(
    article_id: int,
    service: KnowledgeArticleService = Depends(get_article_service),
) -> list[RevisionResponse]:
    """Revision history, newest version first."""
    try:
        revisions = await service.list_revisions(article_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return [RevisionResponse.model_validate(r) for r in revisions]


@router.get("/{article_id}/comments", response_model=list[CommentResponse])
async def list_comments(
    article_id: int,
    service: KnowledgeCommentService = Depends(get_comment_service),
) -> list[CommentResponse]:
    try:
        comments = await service.list_comments(article_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return [CommentResponse.model_validate(c) for c in comments]


@router.post(
    "/{article_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    article_id: int,
    data: CommentCreate,
    service: KnowledgeCommentService = Depends(get_comment_service),
    user_id: str = Depends(get_current_user_id),
) -> CommentResponse:
    """Add a comment, or a reply when ``parentId`` is given."""
    try:
        comment = await service.create_comment(article_id, data, author_id=user_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return CommentResponse.model_validate(comment)
