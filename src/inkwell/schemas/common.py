"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from inkwell.db.time import ensure_utc

# SQLite returns naive datetimes; responses always carry an explicit UTC offset.
UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]


class AuthorSnapshot(BaseModel):
    """Denormalized author details attached to posts and comments."""

    id: int
    name: str
    username: str | None = None
    image_url: str | None = None

    model_config = ConfigDict(from_attributes=True)


class Page(BaseModel):
    """Pagination envelope filled from a ``limit + 1`` read."""

    has_more: bool = Field(..., description="True when more rows exist past this page.")
