"""Feed assembly: chronological feeds, author pages and follow suggestions."""
from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from inkwell.core.settings import settings
from inkwell.models import Post, User
from inkwell.repositories.post_repo import PostRepository
from inkwell.schemas.post import PostPage, PostResponse
from inkwell.services.follow_service import get_followed_ids
from inkwell.services.post_service import to_post_out
from inkwell.services.user_service import get_user_by_username

__all__ = [
    "attach_authors",
    "get_feed",
    "get_following_feed",
    "get_suggested_users",
    "get_published_posts_by_user",
    "get_published_post",
]


def attach_authors(db: Session, posts: Iterable[Post]) -> list[PostResponse]:
    """Attach an author snapshot to each post, dropping posts whose author is gone."""
    posts = list(posts)
    author_ids = {post.author_id for post in posts}
    if not author_ids:
        return []
    authors = {
        user.id: user
        for user in db.execute(select(User).where(User.id.in_(author_ids))).scalars()
    }
    return [
        to_post_out(post, authors[post.author_id])
        for post in posts
        if post.author_id in authors
    ]


def _page(db: Session, rows: list[Post], limit: int) -> PostPage:
    # Rows were fetched with limit + 1 to learn whether another page exists.
    has_more = len(rows) > limit
    return PostPage(posts=attach_authors(db, rows[:limit]), has_more=has_more)


def get_feed(db: Session, limit: int | None = None) -> PostPage:
    """Return the newest published posts across the whole platform."""
    if limit is None:
        limit = settings.feed_page_size
    rows = PostRepository(db).list_published(limit + 1)
    return _page(db, rows, limit)


def get_following_feed(db: Session, viewer: User, limit: int | None = None) -> PostPage:
    """Return the newest published posts by authors ``viewer`` follows."""
    if limit is None:
        limit = settings.feed_page_size
    followed = get_followed_ids(db, viewer.id)
    if not followed:
        return PostPage(posts=[], has_more=False)
    rows = PostRepository(db).list_published(limit + 1, author_ids=followed)
    return _page(db, rows, limit)


def get_suggested_users(db: Session, viewer: User | None, limit: int | None = None) -> list[User]:
    """Return the first users, in sign-up order, that ``viewer`` does not follow yet.

    Anonymous viewers get the first ``limit`` users.
    """
    if limit is None:
        limit = settings.feed_page_size
    stmt = select(User).order_by(User.id.asc())
    if viewer is not None:
        excluded = [viewer.id, *get_followed_ids(db, viewer.id)]
        stmt = stmt.where(User.id.not_in(excluded))
    return list(db.execute(stmt.limit(limit)).scalars())


def get_published_posts_by_user(
    db: Session,
    username: str,
    limit: int | None = None,
) -> PostPage:
    """Return a page of one author's published posts, newest first.

    An unknown handle yields an empty page.
    """
    if limit is None:
        limit = settings.feed_page_size
    user = get_user_by_username(db, username)
    if user is None:
        return PostPage(posts=[], has_more=False)
    rows = PostRepository(db).list_published(limit + 1, author_ids=[user.id])
    has_more = len(rows) > limit
    return PostPage(posts=[to_post_out(post, user) for post in rows[:limit]], has_more=has_more)


def get_published_post(db: Session, username: str, post_id: int) -> PostResponse | None:
    """Return one post for its public page.

    Visibility rule: the post is returned only when it belongs to the user
    owning ``username`` AND is published. Drafts are never served here, not
    even to their author; the author previews drafts through the dashboard.
    """
    user = get_user_by_username(db, username)
    if user is None:
        return None
    post = PostRepository(db).get_by_id(post_id)
    if post is None:
        return None
    if post.author_id != user.id or not post.is_published:
        return None
    return to_post_out(post, user)
