"""Knowledge category CRUD endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from app.application.schemas import CategoryCreate, CategoryResponse, CategoryUpdate
from app.application.services import KnowledgeCategoryService
from app.domain.exceptions import EntityNotFoundError
from app.infrastructure.dependencies import get_category_service

router = APIRouter(prefix="/categories", tags=["Knowledge Categories"])


@router.get("", response_model=list[CategoryResponse])
async def list_categories(
    service: KnowledgeCategoryService = Depends(get_category_service),
) -> list[CategoryResponse]:
    """Retrieve all categories ordered by sort order, then name."""
    categories = await service.list_categories()
    return [CategoryResponse.model_validate(c) for c in categories]


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    data: CategoryCreate,
    service: KnowledgeCategoryService = Depends(get_category_service),
) -> CategoryResponse:
    """Create a new category."""
    try:
        category = await service.create_category(data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return CategoryResponse.model_validate(category)


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: int,
    data: CategoryUpdate,
    service: KnowledgeCategoryService = Depends(get_category_service),
) -> CategoryResponse:
    """Update an existing category."""
    try:
        category = await service.update_category(category_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return CategoryResponse.model_validate(category)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: int,
    service: KnowledgeCategoryService = Depends(get_category_service),
) -> None:
    """Delete a category. Its articles and sub-categories become uncategorised."""
    try:
        await service.delete_category(category_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
