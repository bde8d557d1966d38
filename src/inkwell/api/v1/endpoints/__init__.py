# src/inkwell/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .comments import router as comments_router
from .dashboard import router as dashboard_router
from .feed import router as feed_router
from .follows import router as follows_router
from .likes import router as likes_router
from .media import router as media_router
from .posts import router as posts_router
from .public import router as public_router
from .users import router as users_router

__all__ = [
    "posts_router",
    "comments_router",
    "likes_router",
    "follows_router",
    "feed_router",
    "public_router",
    "dashboard_router",
    "users_router",
    "media_router",
]
