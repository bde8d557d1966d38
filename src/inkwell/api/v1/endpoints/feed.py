# src/inkwell/api/v1/endpoints/feed.py
"""Feed, discovery and trending endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query

from inkwell.api.v1.dependencies import CurrentUserDep, OptionalUserDep, SessionDep
from inkwell.schemas.post import PostPage, PostResponse
from inkwell.schemas.user import SuggestedUser
from inkwell.services import feed, ranking

router = APIRouter(prefix="/feed", tags=["feed"])

LimitQuery = Annotated[
    int | None,
    Query(ge=1, le=100, description="Maximum number of items to return"),
]


@router.get("/", response_model=PostPage)
async def get_feed(db: SessionDep, limit: LimitQuery = None) -> PostPage:
    """Return the newest published posts across the platform."""
    return feed.get_feed(db, limit)


@router.get("/following", response_model=PostPage)
async def get_following_feed(
    current_user: CurrentUserDep,
    db: SessionDep,
    limit: LimitQuery = None,
) -> PostPage:
    """Return the newest published posts by authors the caller follows."""
    return feed.get_following_feed(db, current_user, limit)


@router.get("/suggested-users", response_model=list[SuggestedUser])
async def get_suggested_users(
    current_user: OptionalUserDep,
    db: SessionDep,
    limit: LimitQuery = None,
) -> list[SuggestedUser]:
    """Suggest accounts the caller does not follow yet."""
    users = feed.get_suggested_users(db, current_user, limit)
    return [SuggestedUser.model_validate(user) for user in users]


@router.get("/trending", response_model=list[PostResponse])
async def get_trending(db: SessionDep, limit: LimitQuery = None) -> list[PostResponse]:
    """Return the top posts of the trending window."""
    return ranking.get_trending_posts(db, limit)
