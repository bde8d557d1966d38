"""Schemas for like, follow and view responses."""

from pydantic import BaseModel


class LikeToggleResponse(BaseModel):
    """Like state after a toggle."""

    liked: bool
    like_count: int


class LikeStatusResponse(BaseModel):
    """Whether the caller currently likes a post."""

    liked: bool


class FollowToggleResponse(BaseModel):
    """Follow state after a toggle."""

    following: bool


class FollowerCountResponse(BaseModel):
    """Number of followers of a user."""

    user_id: int
    follower_count: int


class ViewRecordedResponse(BaseModel):
    """Outcome of a view ping; ``recorded`` is False for unpublished or missing posts."""

    recorded: bool
