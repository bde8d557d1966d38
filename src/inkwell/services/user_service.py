"""Profile and handle management for users."""
from __future__ import annotations

import re

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inkwell.core.settings import settings
from inkwell.db.time import utcnow
from inkwell.models import User
from inkwell.schemas.user import ProfileUpdateRequest, PublicProfileResponse
from inkwell.services.errors import UsernameTakenError, ValidationError
from inkwell.services.follow_service import get_follower_count, get_following_count

__all__ = [
    "validate_username",
    "get_user_by_username",
    "get_public_profile",
    "update_username",
    "update_profile",
]

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20


def validate_username(username: str) -> str:
    """Check handle length and character set, returning the handle unchanged."""
    if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        raise ValidationError(
            f"Username must be between {USERNAME_MIN_LENGTH} and {USERNAME_MAX_LENGTH} characters"
        )
    if not USERNAME_PATTERN.fullmatch(username):
        raise ValidationError(
            "Username can only contain letters, numbers, underscores, and hyphens"
        )
    return username


def get_user_by_username(db: Session, username: str) -> User | None:
    """Return the user owning ``username``, if any."""
    return db.execute(select(User).where(User.username == username)).scalars().first()


def get_public_profile(db: Session, username: str) -> PublicProfileResponse | None:
    """Return the public profile for a handle with derived follow counts."""
    user = get_user_by_username(db, username)
    if user is None:
        return None
    return PublicProfileResponse(
        id=user.id,
        name=user.name,
        username=user.username,
        image_url=user.image_url,
        bio=user.bio,
        state=user.state,
        country=user.country,
        created_at=user.created_at,
        follower_count=get_follower_count(db, user.id),
        following_count=get_following_count(db, user.id),
    )


def _claim_username(db: Session, user: User, username: str) -> None:
    validate_username(username)
    if username != user.username:
        owner = get_user_by_username(db, username)
        if owner is not None and owner.id != user.id:
            raise UsernameTakenError("Username is already taken")


def _save_profile(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        # Another user claimed the handle between the check and the write.
        db.rollback()
        raise UsernameTakenError("Username is already taken") from exc


def update_username(db: Session, user: User, username: str) -> User:
    """Change the user's public handle.

    Raises:
        ValidationError: If the handle is malformed.
        UsernameTakenError: If another user owns the handle.
    """
    _claim_username(db, user, username)
    user.username = username
    user.last_active_at = utcnow()
    _save_profile(db)
    return user


def update_profile(db: Session, user: User, data: ProfileUpdateRequest) -> User:
    """Replace the user's handle and optional profile fields.

    Raises:
        ValidationError: If the handle is malformed or the bio is too long.
        UsernameTakenError: If another user owns the handle.
    """
    _claim_username(db, user, data.username)
    if data.bio is not None and len(data.bio) > settings.bio_max_length:
        raise ValidationError(f"Bio must be at most {settings.bio_max_length} characters")

    user.username = data.username
    user.bio = data.bio
    user.state = data.state
    user.country = data.country
    user.last_active_at = utcnow()
    _save_profile(db)
    return user
