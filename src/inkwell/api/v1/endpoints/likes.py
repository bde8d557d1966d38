# src/inkwell/api/v1/endpoints/likes.py
"""Like endpoints."""

from fastapi import APIRouter

from inkwell.api.v1.dependencies import CurrentUserDep, OptionalUserDep, SessionDep
from inkwell.schemas.engagement import LikeStatusResponse, LikeToggleResponse
from inkwell.services import engagement

router = APIRouter(prefix="/posts", tags=["likes"])


@router.post("/{post_id}/like", response_model=LikeToggleResponse)
async def toggle_like(post_id: int, current_user: CurrentUserDep, db: SessionDep) -> LikeToggleResponse:
    """Like or unlike a published post."""
    state = engagement.toggle_like(db, post_id, current_user)
    return LikeToggleResponse(liked=state.liked, like_count=state.like_count)


@router.get("/{post_id}/like", response_model=LikeStatusResponse)
async def get_like_status(
    post_id: int,
    current_user: OptionalUserDep,
    db: SessionDep,
) -> LikeStatusResponse:
    """Report whether the caller likes the post; anonymous callers never do."""
    return LikeStatusResponse(liked=engagement.has_user_liked(db, post_id, current_user))
