# src/inkwell/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    comments_router,
    dashboard_router,
    feed_router,
    follows_router,
    likes_router,
    media_router,
    posts_router,
    public_router,
    users_router,
)

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
