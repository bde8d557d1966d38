"""User-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field

from inkwell.schemas.common import UtcDatetime


class ProfileUpdateRequest(BaseModel):
    """Schema for updating user profile information.

    Handle format, length and uniqueness are checked by the user service so
    that each failure carries its own message.
    """

    username: str = Field(..., description="Public handle (3-20 characters)")
    bio: str | None = Field(None, description="Short biography (up to 300 characters)")
    state: str | None = None
    country: str | None = None


class UsernameUpdateRequest(BaseModel):
    """Schema for changing only the public handle."""

    username: str


class UserResponse(BaseModel):
    """Response schema for the caller's own account."""

    id: int
    name: str
    email: str | None
    image_url: str | None
    username: str | None
    bio: str | None
    state: str | None
    country: str | None
    created_at: UtcDatetime
    last_active_at: UtcDatetime

    model_config = ConfigDict(from_attributes=True)


class PublicProfileResponse(BaseModel):
    """Public profile shown on an author's page."""

    id: int
    name: str
    username: str | None
    image_url: str | None
    bio: str | None
    state: str | None
    country: str | None
    created_at: UtcDatetime
    follower_count: int
    following_count: int


class SuggestedUser(BaseModel):
    """Candidate account for the "who to follow" widget."""

    id: int
    name: str
    username: str | None
    image_url: str | None
    created_at: UtcDatetime

    model_config = ConfigDict(from_attributes=True)


class FollowingEntry(BaseModel):
    """A user the caller follows."""

    id: int
    name: str
    username: str | None
    image_url: str | None
    followed_at: UtcDatetime


class FollowerEntry(FollowingEntry):
    """A user following the caller, flagged when the caller follows back."""

    follows_back: bool
