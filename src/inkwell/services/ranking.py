"""Trending ranking over a sliding publication window."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from sqlalchemy.orm import Session

from inkwell.core.settings import settings
from inkwell.db.time import ensure_utc, utcnow
from inkwell.models import Post
from inkwell.repositories.post_repo import PostRepository
from inkwell.schemas.post import PostResponse
from inkwell.services.feed import attach_authors

__all__ = ["trending_score", "rank_posts", "get_trending_posts"]

_EPOCH = datetime.min.replace(tzinfo=UTC)


def trending_score(post: Post, like_weight: int | None = None) -> int:
    """Return ``views + like_weight * likes`` for a post."""
    weight = settings.trending_like_weight if like_weight is None else like_weight
    return post.view_count + weight * post.like_count


def rank_posts(posts: list[Post], like_weight: int | None = None) -> list[Post]:
    """Order posts by trending score, highest first.

    Ties go to the more recently published post, then to the higher id, so
    the order is reproducible.
    """

    def sort_key(post: Post) -> tuple[int, datetime, int]:
        published = ensure_utc(post.published_at) if post.published_at else _EPOCH
        return trending_score(post, like_weight), published, post.id

    return sorted(posts, key=sort_key, reverse=True)


def get_trending_posts(
    db: Session,
    limit: int | None = None,
    *,
    now: datetime | None = None,
) -> list[PostResponse]:
    """Return the top published posts of the trending window.

    Candidates are published posts whose ``published_at`` falls within the
    last ``trending_window_days`` days before ``now``.
    """
    now = now or utcnow()
    if limit is None:
        limit = settings.feed_page_size
    cutoff = now - timedelta(days=settings.trending_window_days)
    candidates = PostRepository(db).list_published_since(cutoff, until=now)
    return attach_authors(db, rank_posts(candidates)[:limit])
