# src/inkwell/api/v1/endpoints/public.py
"""Anonymous-friendly endpoints backing author pages and post pages."""

from fastapi import APIRouter, Query

from inkwell.api.v1.dependencies import SessionDep
from inkwell.schemas.engagement import ViewRecordedResponse
from inkwell.schemas.post import PostPage, PostResponse
from inkwell.schemas.user import PublicProfileResponse
from inkwell.services import engagement, feed, user_service
from inkwell.services.errors import NotFoundError

router = APIRouter(tags=["public"])


@router.get("/profiles/{username}", response_model=PublicProfileResponse)
async def get_profile(username: str, db: SessionDep) -> PublicProfileResponse:
    """Return an author's public profile with follow counts."""
    profile = user_service.get_public_profile(db, username)
    if profile is None:
        raise NotFoundError("User not found")
    return profile


@router.get("/profiles/{username}/posts", response_model=PostPage)
async def list_published_posts(
    username: str,
    db: SessionDep,
    limit: int | None = Query(None, ge=1, le=100),
) -> PostPage:
    """Return a page of an author's published posts."""
    return feed.get_published_posts_by_user(db, username, limit)


@router.get("/profiles/{username}/posts/{post_id}", response_model=PostResponse)
async def get_published_post(username: str, post_id: int, db: SessionDep) -> PostResponse:
    """Return a published post of the author for its public page."""
    post = feed.get_published_post(db, username, post_id)
    if post is None:
        raise NotFoundError("Post not found")
    return post


@router.post("/posts/{post_id}/views", response_model=ViewRecordedResponse)
async def record_view(post_id: int, db: SessionDep) -> ViewRecordedResponse:
    """Count a view of a published post."""
    return ViewRecordedResponse(recorded=engagement.record_view(db, post_id))
