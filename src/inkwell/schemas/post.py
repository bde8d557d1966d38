# src/inkwell/schemas/post.py
"""Post-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from inkwell.schemas.common import AuthorSnapshot, Page, UtcDatetime

PostStatus = Literal["draft", "published"]


def _normalize_tags(tags: list[str] | None) -> list[str] | None:
    if tags is None:
        return None
    seen: list[str] = []
    for tag in tags:
        cleaned = tag.strip()
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return seen


class PostFields(BaseModel):
    """Editable post fields shared by create and update payloads."""

    title: str | None = Field(None, max_length=300)
    content: str | None = None
    tags: list[str] | None = None
    category: str | None = None
    featured_image: str | None = Field(None, description="URL returned by the image provider")
    scheduled_for: datetime | None = Field(None, description="Advisory publish time")

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: list[str] | None) -> list[str] | None:
        """Strip whitespace and drop empty or duplicate tags."""
        return _normalize_tags(v)


class PostCreate(PostFields):
    """Schema submitted by the editor when saving or publishing."""

    title: str = Field("", max_length=300)
    content: str = ""
    tags: list[str] = Field(default_factory=list)
    status: PostStatus = "draft"


class PostUpdate(PostFields):
    """Partial patch for an existing post; unset fields are left untouched."""

    status: PostStatus | None = None


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: int
    author_id: int
    title: str
    content: str
    status: PostStatus
    tags: list[str]
    category: str | None
    featured_image: str | None
    created_at: UtcDatetime
    updated_at: UtcDatetime
    published_at: UtcDatetime | None
    scheduled_for: UtcDatetime | None
    view_count: int
    like_count: int
    author: AuthorSnapshot | None = None

    model_config = ConfigDict(from_attributes=True)


class PostPage(Page):
    """A page of posts with a has-more flag."""

    posts: list[PostResponse]


class PostWithAnalytics(PostResponse):
    """Post annotated with its approved comment count."""

    comment_count: int
