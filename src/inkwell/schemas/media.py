"""Schemas for the image-upload and writing-assistant collaborators."""

from typing import Literal

from pydantic import BaseModel, Field


class UploadAuthResponse(BaseModel):
    """Signed parameters a client needs for a direct image upload."""

    token: str
    expire: int
    signature: str
    public_key: str


class GenerateContentRequest(BaseModel):
    """Request to pre-fill a post body from its metadata."""

    title: str = Field(..., min_length=1, max_length=300)
    category: str | None = None
    tags: list[str] = Field(default_factory=list)


class ImproveContentRequest(BaseModel):
    """Request to rewrite an existing post body."""

    content: str = Field(..., min_length=1)
    mode: Literal["enhance", "expand", "simplify", "shorten"] = "enhance"


class AssistantResponse(BaseModel):
    """Generated HTML content."""

    content: str
