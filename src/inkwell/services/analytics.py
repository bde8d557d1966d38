"""Dashboard analytics: totals, growth metrics and the activity log."""
from __future__ import annotations

from datetime import datetime, timedelta

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from inkwell.core.settings import settings
from inkwell.db.time import ensure_utc, utcnow
from inkwell.models import Comment, Follow, Like, Post, User
from inkwell.models.comment import COMMENT_STATUS_APPROVED
from inkwell.models.post import POST_STATUS_PUBLISHED
from inkwell.repositories.post_repo import PostRepository
from inkwell.schemas.analytics import ActivityItem, AnalyticsResponse
from inkwell.schemas.post import PostWithAnalytics
from inkwell.services.post_service import to_post_out

__all__ = [
    "share_percentage",
    "period_growth",
    "get_analytics",
    "recent_activity",
    "get_posts_with_analytics",
]


def share_percentage(part: int, total: int) -> float:
    """Return ``part`` as a percentage of ``total`` (0 when total is 0)."""
    if total <= 0:
        return 0.0
    return part / total * 100


def period_growth(recent: int, previous: int) -> float:
    """Return the period-over-period change of ``recent`` against ``previous``.

    Positive values mean the recent window beat the previous one. A previous
    window of zero is treated as one so growth from nothing stays finite.

    Note: the earlier dashboard subtracted in the opposite order, so a
    shrinking audience showed up as positive growth.
    """
    return (recent - previous) / max(previous, 1) * 100


def _windowed_count(db: Session, stmt, column, start: datetime, end: datetime) -> int:
    return db.execute(stmt.where(column > start, column <= end)).scalar_one()


def get_analytics(db: Session, author: User, *, now: datetime | None = None) -> AnalyticsResponse:
    """Compute dashboard totals and growth metrics for ``author``.

    The recent window covers the last ``analytics_window_days`` days before
    ``now`` and the previous window the same span before that.

    View and like growth report the share of all-time views/likes carried by
    posts created in the recent window. Comment and follower growth compare
    the recent window with the previous one.
    """
    now = now or utcnow()
    window = timedelta(days=settings.analytics_window_days)
    recent_start = now - window
    previous_start = now - 2 * window

    posts = PostRepository(db).list_by_author(author.id)
    total_views = sum(post.view_count for post in posts)
    total_likes = sum(post.like_count for post in posts)
    recent_posts = [post for post in posts if ensure_utc(post.created_at) > recent_start]
    recent_views = sum(post.view_count for post in recent_posts)
    recent_likes = sum(post.like_count for post in recent_posts)

    comments_stmt = (
        select(func.count())
        .select_from(Comment)
        .join(Post, Comment.post_id == Post.id)
        .where(Post.author_id == author.id, Comment.status == COMMENT_STATUS_APPROVED)
    )
    recent_comments = _windowed_count(db, comments_stmt, Comment.created_at, recent_start, now)
    previous_comments = _windowed_count(
        db, comments_stmt, Comment.created_at, previous_start, recent_start
    )

    followers_stmt = (
        select(func.count()).select_from(Follow).where(Follow.following_id == author.id)
    )
    total_followers = db.execute(followers_stmt).scalar_one()
    recent_followers = _windowed_count(db, followers_stmt, Follow.created_at, recent_start, now)
    previous_followers = _windowed_count(
        db, followers_stmt, Follow.created_at, previous_start, recent_start
    )

    return AnalyticsResponse(
        total_views=total_views,
        total_likes=total_likes,
        total_followers=total_followers,
        recent_comments=recent_comments,
        views_growth=share_percentage(recent_views, total_views),
        likes_growth=share_percentage(recent_likes, total_likes),
        comments_growth=period_growth(recent_comments, previous_comments),
        followers_growth=period_growth(recent_followers, previous_followers),
    )


def recent_activity(db: Session, author: User, limit: int | None = None) -> list[ActivityItem]:
    """Return the newest likes, comments and follows around ``author``.

    Each source contributes a small tail (``activity_per_source`` rows per
    published post for likes and comments, and in total for follows); the
    tails are merged and the newest ``limit`` items returned. This is a
    widget feed, not a complete history.
    """
    if limit is None:
        limit = settings.feed_page_size
    per_source = settings.activity_per_source
    posts = PostRepository(db).list_by_author(author.id, status=POST_STATUS_PUBLISHED)
    items: list[ActivityItem] = []

    for post in posts:
        likes = db.execute(
            select(Like, User)
            .join(User, Like.user_id == User.id)
            .where(Like.post_id == post.id)
            .order_by(Like.created_at.desc(), Like.id.desc())
            .limit(per_source)
        ).all()
        for like, liker in likes:
            items.append(
                ActivityItem(
                    type="like",
                    actor=liker.username or liker.name,
                    post_title=post.title,
                    timestamp=like.created_at,
                )
            )

        comments = db.execute(
            select(Comment)
            .where(Comment.post_id == post.id, Comment.status == COMMENT_STATUS_APPROVED)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
            .limit(per_source)
        ).scalars()
        for comment in comments:
            items.append(
                ActivityItem(
                    type="comment",
                    actor=comment.author_name,
                    post_title=post.title,
                    timestamp=comment.created_at,
                )
            )

    follows = db.execute(
        select(Follow, User)
        .join(User, Follow.follower_id == User.id)
        .where(Follow.following_id == author.id)
        .order_by(Follow.created_at.desc(), Follow.id.desc())
        .limit(per_source)
    ).all()
    for follow, follower in follows:
        items.append(ActivityItem(type="follow", actor=follower.name, timestamp=follow.created_at))

    items.sort(key=lambda item: item.timestamp, reverse=True)
    return items[:limit]


def get_posts_with_analytics(
    db: Session,
    author: User,
    limit: int | None = None,
) -> list[PostWithAnalytics]:
    """Return the author's most recent posts of any status with comment counts."""
    if limit is None:
        limit = settings.dashboard_posts_page_size
    posts = PostRepository(db).list_by_author(author.id, limit=limit)
    if not posts:
        return []

    counts = dict(
        db.execute(
            select(Comment.post_id, func.count())
            .where(
                Comment.post_id.in_([post.id for post in posts]),
                Comment.status == COMMENT_STATUS_APPROVED,
            )
            .group_by(Comment.post_id)
        ).all()
    )
    return [
        PostWithAnalytics(
            **to_post_out(post, author).model_dump(),
            comment_count=counts.get(post.id, 0),
        )
        for post in posts
    ]
