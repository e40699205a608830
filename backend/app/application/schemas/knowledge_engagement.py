"""Pydantic DTOs for comments, bookmarks and analytics events."""

from datetime import datetime
from typing import Any

from pydantic import Field

from app.application.schemas.base import CamelModel, PartialUpdate


class CommentCreate(CamelModel):
    content: str = Field(..., min_length=1, examples=["Is this still current?"])
    parent_id: int | None = None
    author_id: str | None = Field(None, min_length=1, max_length=255)


class CommentUpdate(PartialUpdate):
    content: str | None = Field(None, min_length=1)
    is_resolved: bool | None = None


class CommentResponse(CamelModel):
    id: int
    article_id: int
    author_id: str
    content: str
    parent_id: int | None
    is_resolved: bool
    likes: int
    created_at: datetime
    updated_at: datetime


class BookmarkCreate(CamelModel):
    notes: str | None = None


class BookmarkResponse(CamelModel):
    id: int
    user_id: str
    article_id: int
    notes: str | None
    created_at: datetime


class AnalyticsEventCreate(CamelModel):
    """Client-submitted analytics event.

    Request metadata (session, IP address, user agent, referrer) is filled
    in by the server.
    """

    action: str = Field(..., min_length=1, max_length=50, examples=["share"])
    article_id: int | None = None
    user_id: str | None = Field(None, min_length=1, max_length=255)
    time_spent: int | None = Field(None, ge=0)
    metadata: dict[str, Any] = Field(default_factory=dict)


class AnalyticsEventResponse(CamelModel):
    id: int
    article_id: int | None
    user_id: str
    action: str
    session_id: str | None
    ip_address: str | None
    user_agent: str | None
    referrer: str | None
    time_spent: int | None
    metadata: dict[str, Any]
    created_at: datetime
