"""Follow graph operations.

Follower and following counts are always computed from edge rows; nothing
caches them.
"""
from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inkwell.core.settings import settings
from inkwell.db.time import utcnow
from inkwell.models import Follow, User
from inkwell.schemas.user import FollowerEntry, FollowingEntry
from inkwell.services.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

__all__ = [
    "toggle_follow",
    "is_following",
    "get_follower_count",
    "get_following_count",
    "get_followed_ids",
    "get_my_followers",
    "get_my_followings",
]


def _get_edge(db: Session, follower_id: int, following_id: int) -> Follow | None:
    result = db.execute(
        select(Follow).where(
            Follow.follower_id == follower_id,
            Follow.following_id == following_id,
        )
    )
    return result.scalars().first()


def toggle_follow(
    db: Session,
    follower: User,
    following_id: int,
    *,
    now: datetime | None = None,
) -> bool:
    """Follow ``following_id`` if not yet followed, otherwise unfollow.

    Returns:
        True if ``follower`` follows the target after the call.

    Raises:
        ValidationError: If a user tries to follow themselves.
        NotFoundError: If the target user does not exist.
    """
    if follower.id == following_id:
        raise ValidationError("You can not follow yourself")
    if db.get(User, following_id) is None:
        raise NotFoundError("User not found")

    edge = _get_edge(db, follower.id, following_id)
    if edge is not None:
        db.delete(edge)
        db.commit()
        return False

    db.add(Follow(follower_id=follower.id, following_id=following_id, created_at=now or utcnow()))
    try:
        db.commit()
    except IntegrityError:
        # A concurrent request created the same edge first.
        db.rollback()
        logger.warning("Duplicate follow of %s by user %s", following_id, follower.id)
        return True

    logger.debug("User %s now follows %s", follower.id, following_id)
    return True


def is_following(db: Session, follower: User | None, following_id: int) -> bool:
    """Return True when ``follower`` follows ``following_id``; anonymous callers never do."""
    if follower is None:
        return False
    return _get_edge(db, follower.id, following_id) is not None


def get_follower_count(db: Session, user_id: int) -> int:
    """Return how many users follow ``user_id``."""
    return db.execute(
        select(func.count()).select_from(Follow).where(Follow.following_id == user_id)
    ).scalar_one()


def get_following_count(db: Session, user_id: int) -> int:
    """Return how many users ``user_id`` follows."""
    return db.execute(
        select(func.count()).select_from(Follow).where(Follow.follower_id == user_id)
    ).scalar_one()


def get_followed_ids(db: Session, user_id: int) -> list[int]:
    """Return the ids of every user ``user_id`` follows."""
    return list(
        db.execute(select(Follow.following_id).where(Follow.follower_id == user_id)).scalars()
    )


def get_my_followers(db: Session, user: User, limit: int | None = None) -> list[FollowerEntry]:
    """Return the most recent followers of ``user`` with a follows-back flag."""
    if limit is None:
        limit = settings.followers_page_size
    rows = db.execute(
        select(Follow, User)
        .join(User, Follow.follower_id == User.id)
        .where(Follow.following_id == user.id)
        .order_by(Follow.created_at.desc(), Follow.id.desc())
        .limit(limit)
    ).all()
    followed_back = set(get_followed_ids(db, user.id))
    return [
        FollowerEntry(
            id=follower.id,
            name=follower.name,
            username=follower.username,
            image_url=follower.image_url,
            followed_at=edge.created_at,
            follows_back=follower.id in followed_back,
        )
        for edge, follower in rows
    ]


def get_my_followings(db: Session, user: User, limit: int | None = None) -> list[FollowingEntry]:
    """Return the users ``user`` most recently followed."""
    if limit is None:
        limit = settings.followers_page_size
    rows = db.execute(
        select(Follow, User)
        .join(User, Follow.following_id == User.id)
        .where(Follow.follower_id == user.id)
        .order_by(Follow.created_at.desc(), Follow.id.desc())
        .limit(limit)
    ).all()
    return [
        FollowingEntry(
            id=followed.id,
            name=followed.name,
            username=followed.username,
            image_url=followed.image_url,
            followed_at=edge.created_at,
        )
        for edge, followed in rows
    ]
