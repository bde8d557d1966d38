"""Post lifecycle: the draft slot, publishing, patching and deletion."""
from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import delete
from sqlalchemy.orm import Session

from inkwell.core.settings import settings
from inkwell.db.time import ensure_utc, utcnow
from inkwell.models import Comment, DailyStat, Like, Post, User
from inkwell.models.post import POST_STATUS_DRAFT, POST_STATUS_PUBLISHED
from inkwell.repositories.post_repo import PostRepository
from inkwell.schemas.common import AuthorSnapshot
from inkwell.schemas.post import PostCreate, PostFields, PostResponse, PostUpdate
from inkwell.services.errors import NotFoundError, UnauthorizedError, ValidationError

logger = logging.getLogger(__name__)

__all__ = [
    "author_snapshot",
    "to_post_out",
    "create_or_update_draft",
    "create_post",
    "publish",
    "update_post",
    "delete_post",
    "get_draft_post",
    "get_post_by_id",
    "get_user_posts",
]


def author_snapshot(user: User) -> AuthorSnapshot:
    """Return the denormalized author fields attached to posts."""
    return AuthorSnapshot.model_validate(user)


def to_post_out(post: Post, author: User | None = None) -> PostResponse:
    """Convert a Post ORM instance to an API schema."""
    out = PostResponse.model_validate(post)
    if author is not None:
        out = out.model_copy(update={"author": author_snapshot(author)})
    return out


def _check_tags(tags: list[str] | None) -> None:
    if tags is not None and len(tags) > settings.post_max_tags:
        raise ValidationError(f"A post can have at most {settings.post_max_tags} tags")


def _apply_fields(post: Post, data: PostFields, *, only_set: bool = True) -> None:
    """Copy editable fields from ``data`` onto ``post``.

    With ``only_set`` the patch carries just the fields the caller sent.
    """
    values = data.model_dump(exclude_unset=only_set, exclude={"status"})
    _check_tags(values.get("tags"))
    for key, value in values.items():
        if key in ("title", "content") and value is None:
            continue
        if key == "tags" and value is None:
            value = []
        if key == "scheduled_for" and value is not None:
            value = ensure_utc(value)
        setattr(post, key, value)


def _ensure_publishable(post: Post | None, data: PostFields | None) -> None:
    """Check the title the post will carry once ``data`` is applied."""
    title = None
    if data is not None and "title" in data.model_fields_set:
        title = data.title
    if title is None and post is not None:
        title = post.title
    if not (title or "").strip():
        raise ValidationError("A title is required to publish a post")


def _mark_published(post: Post, now: datetime) -> None:
    post.status = POST_STATUS_PUBLISHED
    # Re-publishing keeps the original publication time.
    if post.published_at is None:
        post.published_at = now


def _get_owned_post(repo: PostRepository, post_id: int, user: User, action: str) -> Post:
    post = repo.get_by_id(post_id)
    if post is None:
        raise NotFoundError("Post not found")
    if post.author_id != user.id:
        raise UnauthorizedError(f"Not authorized to {action} this post")
    return post


def create_or_update_draft(
    db: Session,
    author: User,
    data: PostFields,
    *,
    now: datetime | None = None,
) -> Post:
    """Save ``data`` into the author's draft slot.

    The existing draft is patched in place when there is one; otherwise a new
    draft row is inserted. An author never holds more than one draft.
    """
    now = now or utcnow()
    repo = PostRepository(db)
    draft = repo.get_draft_for_author(author.id)
    if draft is not None:
        _apply_fields(draft, data)
        draft.updated_at = now
        db.commit()
        logger.debug("Updated draft %s for user %s", draft.id, author.id)
        return draft

    post = Post(
        author_id=author.id,
        status=POST_STATUS_DRAFT,
        created_at=now,
        updated_at=now,
        view_count=0,
        like_count=0,
    )
    _apply_fields(post, data, only_set=False)
    db.add(post)
    db.commit()
    logger.info("Created draft %s for user %s", post.id, author.id)
    return post


def create_post(
    db: Session,
    author: User,
    data: PostCreate,
    *,
    now: datetime | None = None,
) -> Post:
    """Save or publish a post from the editor.

    Drafts go to the draft slot. Publishing consumes the draft slot when it is
    occupied, otherwise inserts a post that is published straight away.
    """
    now = now or utcnow()
    if data.status == POST_STATUS_DRAFT:
        return create_or_update_draft(db, author, data, now=now)

    repo = PostRepository(db)
    post = repo.get_draft_for_author(author.id)
    _ensure_publishable(post, data)
    if post is None:
        post = Post(
            author_id=author.id,
            created_at=now,
            view_count=0,
            like_count=0,
        )
        _apply_fields(post, data, only_set=False)
        db.add(post)
    else:
        _apply_fields(post, data)
    post.updated_at = now
    _mark_published(post, now)
    db.commit()
    logger.info("Published post %s for user %s", post.id, author.id)
    return post


def publish(
    db: Session,
    post_id: int,
    author: User,
    data: PostUpdate | None = None,
    *,
    now: datetime | None = None,
) -> Post:
    """Publish an existing post, optionally patching fields first.

    Raises:
        NotFoundError: If the post does not exist.
        UnauthorizedError: If ``author`` does not own the post.
        ValidationError: If the post would be published without a title.
    """
    now = now or utcnow()
    post = _get_owned_post(PostRepository(db), post_id, author, "publish")
    _ensure_publishable(post, data)
    if data is not None:
        _apply_fields(post, data)
    post.updated_at = now
    first_time = post.published_at is None
    _mark_published(post, now)
    db.commit()
    if first_time:
        logger.info("Published post %s", post.id)
    return post


def update_post(
    db: Session,
    post_id: int,
    author: User,
    data: PostUpdate,
    *,
    now: datetime | None = None,
) -> Post:
    """Apply a partial patch to a post owned by ``author``.

    A status change to ``published`` follows the publish rules. Moving a
    published post back to ``draft`` is refused while the author already
    holds another draft.
    """
    now = now or utcnow()
    repo = PostRepository(db)
    post = _get_owned_post(repo, post_id, author, "update")

    publishing = data.status == POST_STATUS_PUBLISHED and post.status != POST_STATUS_PUBLISHED
    unpublishing = data.status == POST_STATUS_DRAFT and post.status != POST_STATUS_DRAFT
    if publishing:
        _ensure_publishable(post, data)
    elif unpublishing:
        existing = repo.get_draft_for_author(author.id)
        if existing is not None and existing.id != post.id:
            raise ValidationError(
                "You already have a draft in progress; publish or delete it first"
            )

    _apply_fields(post, data)
    post.updated_at = now
    if publishing:
        _mark_published(post, now)
    elif unpublishing:
        post.status = POST_STATUS_DRAFT
    db.commit()
    return post


def delete_post(db: Session, post_id: int, author: User) -> None:
    """Delete a post and its likes, comments and daily stats."""
    repo = PostRepository(db)
    post = _get_owned_post(repo, post_id, author, "delete")
    db.execute(delete(Like).where(Like.post_id == post.id))
    db.execute(delete(Comment).where(Comment.post_id == post.id))
    db.execute(delete(DailyStat).where(DailyStat.post_id == post.id))
    repo.delete(post)
    db.commit()
    logger.info("Deleted post %s", post_id)


def get_draft_post(db: Session, author: User) -> Post | None:
    """Return the author's current draft, if any."""
    return PostRepository(db).get_draft_for_author(author.id)


def get_post_by_id(db: Session, post_id: int, viewer: User) -> Post:
    """Return a post by id as seen by ``viewer``.

    Published posts are visible to everyone; a draft only to its author.

    Raises:
        NotFoundError: If the post does not exist or is someone else's draft.
    """
    post = PostRepository(db).get_by_id(post_id)
    if post is None:
        raise NotFoundError("Post not found")
    if post.status == POST_STATUS_DRAFT and post.author_id != viewer.id:
        raise NotFoundError("Post not found")
    return post


def get_user_posts(db: Session, author: User, status: str | None = None) -> list[PostResponse]:
    """Return every post of ``author`` newest first with the author attached."""
    posts = PostRepository(db).list_by_author(author.id, status=status)
    return [to_post_out(post, author) for post in posts]
