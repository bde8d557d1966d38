"""Comment-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field

from inkwell.schemas.common import AuthorSnapshot, UtcDatetime


class CommentCreate(BaseModel):
    """Schema for adding a comment; length rules are enforced by the service."""

    comment: str = Field(..., description="Comment text (1-1000 characters after trimming)")


class CommentResponse(BaseModel):
    """Schema for comment information returned by the API."""

    id: int
    post_id: int
    author_id: int | None
    author_name: str
    content: str
    status: str
    created_at: UtcDatetime
    author: AuthorSnapshot | None = None

    model_config = ConfigDict(from_attributes=True)
