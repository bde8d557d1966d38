# src/inkwell/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .analytics import ActivityItem, AnalyticsResponse
from .comment import CommentCreate, CommentResponse
from .common import AuthorSnapshot
from .engagement import FollowToggleResponse, LikeToggleResponse
from .post import PostCreate, PostPage, PostResponse, PostUpdate, PostWithAnalytics
from .user import ProfileUpdateRequest, PublicProfileResponse, UserResponse

__all__ = [
    "ActivityItem", "AnalyticsResponse",
    "CommentCreate", "CommentResponse",
    "AuthorSnapshot",
    "FollowToggleResponse", "LikeToggleResponse",
    "PostCreate", "PostPage", "PostResponse", "PostUpdate", "PostWithAnalytics",
    "ProfileUpdateRequest", "PublicProfileResponse", "UserResponse",
]
