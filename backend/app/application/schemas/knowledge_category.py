"""Pydantic DTOs for knowledge categories."""

from datetime import datetime
from typing import ClassVar

from pydantic import Field

from app.application.schemas.base import CamelModel, PartialUpdate
from app.domain.entities.knowledge_category import (
    DEFAULT_CATEGORY_COLOR,
    DEFAULT_CATEGORY_ICON,
)

_HEX_COLOR = r"^#[0-9a-fA-F]{6}$"


class CategoryCreate(CamelModel):
    """Schema for creating a new category."""

    name: str = Field(..., min_length=1, max_length=255, examples=["Policies & Compliance"])
    description: str | None = None
    color: str = Field(DEFAULT_CATEGORY_COLOR, pattern=_HEX_COLOR)
    icon: str = Field(DEFAULT_CATEGORY_ICON, min_length=1, max_length=50)
    parent_id: int | None = None
    sort_order: int = 0
    is_active: bool = True


class CategoryUpdate(PartialUpdate):
    """Schema for updating a category — all fields optional."""

    nullable_fields: ClassVar[frozenset[str]] = frozenset({"description", "parent_id"})

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    color: str | None = Field(None, pattern=_HEX_COLOR)
    icon: str | None = Field(None, min_length=1, max_length=50)
    parent_id: int | None = None
    sort_order: int | None = None
    is_active: bool | None = None


class CategoryResponse(CamelModel):
    id: int
    name: str
    description: str | None
    color: str
    icon: str
    parent_id: int | None
    sort_order: int
    is_active: bool
    created_at: datetime
    updated_at: datetime
