"""Comments on published posts."""
from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from inkwell.core.settings import settings
from inkwell.db.time import utcnow
from inkwell.models import Comment, Post, User
from inkwell.models.comment import COMMENT_STATUS_APPROVED
from inkwell.schemas.comment import CommentResponse
from inkwell.services.errors import (
    NotFoundError,
    NotPublishedError,
    UnauthorizedError,
    ValidationError,
)
from inkwell.services.post_service import author_snapshot

logger = logging.getLogger(__name__)

__all__ = [
    "add_comment",
    "delete_comment",
    "get_post_comments",
]


def _clean_comment(text: str) -> str:
    cleaned = text.strip()
    if not cleaned or len(cleaned) > settings.comment_max_length:
        raise ValidationError(
            f"Comment must be between 1-{settings.comment_max_length} characters"
        )
    return cleaned


def add_comment(
    db: Session,
    post_id: int,
    author: User,
    text: str,
    *,
    now: datetime | None = None,
) -> Comment:
    """Add an approved comment by ``author`` to a published post.

    Raises:
        ValidationError: If the trimmed text is empty or too long.
        NotFoundError: If the post does not exist.
        NotPublishedError: If the post is still a draft.
    """
    content = _clean_comment(text)
    post = db.get(Post, post_id)
    if post is None:
        raise NotFoundError("Post not found")
    if not post.is_published:
        raise NotPublishedError("Comments are only allowed on published posts")

    comment = Comment(
        post_id=post.id,
        author_id=author.id,
        author_name=author.name,
        author_email=author.email,
        content=content,
        status=COMMENT_STATUS_APPROVED,
        created_at=now or utcnow(),
    )
    db.add(comment)
    db.commit()
    logger.debug("User %s commented on post %s", author.id, post.id)
    return comment


def delete_comment(db: Session, comment_id: int, caller: User) -> None:
    """Delete a comment as its author or as the author of the post.

    Raises:
        NotFoundError: If the comment or its post does not exist.
        UnauthorizedError: If ``caller`` is neither author.
    """
    comment = db.get(Comment, comment_id)
    if comment is None:
        raise NotFoundError("Comment not found")
    post = db.get(Post, comment.post_id)
    if post is None:
        raise NotFoundError("Post not found")

    if comment.author_id != caller.id and post.author_id != caller.id:
        raise UnauthorizedError("Not authorized to delete this comment")

    db.delete(comment)
    db.commit()


def get_post_comments(db: Session, post_id: int) -> list[CommentResponse]:
    """Return approved comments on a post, oldest first."""
    rows = db.execute(
        select(Comment, User)
        .outerjoin(User, Comment.author_id == User.id)
        .where(Comment.post_id == post_id, Comment.status == COMMENT_STATUS_APPROVED)
        .order_by(Comment.created_at.asc(), Comment.id.asc())
    ).all()
    results: list[CommentResponse] = []
    for comment, user in rows:
        out = CommentResponse.model_validate(comment)
        if user is not None:
            out = out.model_copy(update={"author": author_snapshot(user)})
        results.append(out)
    return results
