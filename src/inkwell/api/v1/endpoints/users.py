# src/inkwell/api/v1/endpoints/users.py
"""User profile endpoints."""

from fastapi import APIRouter

from inkwell.api.v1.dependencies import CurrentUserDep, SessionDep
from inkwell.models import User
from inkwell.schemas.user import ProfileUpdateRequest, UsernameUpdateRequest, UserResponse
from inkwell.services import user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def read_current_user(current_user: CurrentUserDep) -> User:
    """Return the caller's account, registering it on first sight."""
    return current_user


@router.put("/me/profile", response_model=UserResponse)
async def update_profile(
    payload: ProfileUpdateRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> User:
    """Update the caller's handle and profile details."""
    return user_service.update_profile(db, current_user, payload)


@router.put("/me/username", response_model=UserResponse)
async def update_username(
    payload: UsernameUpdateRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> User:
    """Change only the caller's public handle."""
    return user_service.update_username(db, current_user, payload.username)
