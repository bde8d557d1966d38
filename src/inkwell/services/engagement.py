"""Counter maintenance for likes and views.

Each engagement event touches exactly one post. The event row (like or daily
stat) and the denormalized counter on the post are written in the same
transaction, so a failure cannot leave them out of step.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inkwell.db.time import utc_day, utcnow
from inkwell.models import DailyStat, Like, Post, User
from inkwell.services.errors import NotFoundError, NotPublishedError

logger = logging.getLogger(__name__)

__all__ = ["LikeState", "toggle_like", "has_user_liked", "record_view"]


@dataclass(frozen=True)
class LikeState:
    """Like state of a post for one user after a toggle."""

    liked: bool
    like_count: int


def _get_like(db: Session, post_id: int, user_id: int) -> Like | None:
    result = db.execute(select(Like).where(Like.post_id == post_id, Like.user_id == user_id))
    return result.scalars().first()


def toggle_like(
    db: Session,
    post_id: int,
    user: User,
    *,
    now: datetime | None = None,
) -> LikeState:
    """Like the post if ``user`` has not liked it yet, otherwise unlike it.

    Raises:
        NotFoundError: If the post does not exist.
        NotPublishedError: If the post is still a draft.
    """
    post = db.get(Post, post_id)
    if post is None:
        raise NotFoundError("Post not found")
    if not post.is_published:
        raise NotPublishedError("Only published posts can be liked")

    existing = _get_like(db, post.id, user.id)
    if existing is not None:
        db.delete(existing)
        if post.like_count <= 0:
            logger.warning("like_count for post %s was already %s on unlike", post.id, post.like_count)
        post.like_count = max(0, post.like_count - 1)
        liked = False
    else:
        db.add(Like(post_id=post.id, user_id=user.id, created_at=now or utcnow()))
        post.like_count += 1
        liked = True

    try:
        db.commit()
    except IntegrityError:
        # A concurrent request stored the same like first; keep its result.
        db.rollback()
        logger.warning("Duplicate like by user %s on post %s", user.id, post_id)
        db.refresh(post)
        return LikeState(liked=True, like_count=post.like_count)

    logger.debug("Post %s like_count=%s after toggle by user %s", post.id, post.like_count, user.id)
    return LikeState(liked=liked, like_count=post.like_count)


def has_user_liked(db: Session, post_id: int, user: User | None) -> bool:
    """Return True when ``user`` has liked the post; anonymous callers never have."""
    if user is None:
        return False
    return _get_like(db, post_id, user.id) is not None


def record_view(db: Session, post_id: int, *, now: datetime | None = None) -> bool:
    """Count one view of a published post.

    Increments ``Post.view_count`` and the post's bucket for the current UTC
    day, creating the bucket on the first view of the day. Missing or
    unpublished posts are ignored.

    Returns:
        True if the view was recorded.
    """
    now = now or utcnow()
    post = db.get(Post, post_id)
    if post is None or not post.is_published:
        return False

    post.view_count += 1

    day = utc_day(now)
    stat = db.execute(
        select(DailyStat).where(DailyStat.post_id == post.id, DailyStat.day == day)
    ).scalars().first()
    if stat is None:
        db.add(DailyStat(post_id=post.id, day=day, views=1, created_at=now, updated_at=now))
    else:
        stat.views += 1
        stat.updated_at = now

    db.commit()
    return True
