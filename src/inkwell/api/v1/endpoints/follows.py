# src/inkwell/api/v1/endpoints/follows.py
"""Follow graph endpoints."""

from fastapi import APIRouter, Query

from inkwell.api.v1.dependencies import CurrentUserDep, OptionalUserDep, SessionDep
from inkwell.schemas.engagement import FollowerCountResponse, FollowToggleResponse
from inkwell.schemas.user import FollowerEntry, FollowingEntry
from inkwell.services import follow_service

router = APIRouter(tags=["follows"])


@router.post("/users/{user_id}/follow", response_model=FollowToggleResponse)
async def toggle_follow(
    user_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> FollowToggleResponse:
    """Follow the user, or unfollow when already following."""
    following = follow_service.toggle_follow(db, current_user, user_id)
    return FollowToggleResponse(following=following)


@router.get("/users/{user_id}/follow", response_model=FollowToggleResponse)
async def get_follow_status(
    user_id: int,
    current_user: OptionalUserDep,
    db: SessionDep,
) -> FollowToggleResponse:
    """Report whether the caller follows the user."""
    return FollowToggleResponse(following=follow_service.is_following(db, current_user, user_id))


@router.get("/users/{user_id}/followers/count", response_model=FollowerCountResponse)
async def get_follower_count(user_id: int, db: SessionDep) -> FollowerCountResponse:
    """Return the number of followers of a user."""
    return FollowerCountResponse(
        user_id=user_id,
        follower_count=follow_service.get_follower_count(db, user_id),
    )


@router.get("/me/followers", response_model=list[FollowerEntry])
async def list_my_followers(
    current_user: CurrentUserDep,
    db: SessionDep,
    limit: int | None = Query(None, ge=1, le=100),
) -> list[FollowerEntry]:
    """List the caller's most recent followers."""
    return follow_service.get_my_followers(db, current_user, limit)


@router.get("/me/followings", response_model=list[FollowingEntry])
async def list_my_followings(
    current_user: CurrentUserDep,
    db: SessionDep,
    limit: int | None = Query(None, ge=1, le=100),
) -> list[FollowingEntry]:
    """List the users the caller most recently followed."""
    return follow_service.get_my_followings(db, current_user, limit)
