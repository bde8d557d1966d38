# src/inkwell/models/__init__.py
"""SQLAlchemy models for the Inkwell application."""

from .comment import Comment
from .daily_stat import DailyStat
from .follow import Follow
from .like import Like
from .post import Post
from .user import User

__all__ = [
    "Comment",
    "DailyStat",
    "Follow",
    "Like",
    "Post",
    "User",
]
