"""Data access helpers for working with posts."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from inkwell.models.post import POST_STATUS_DRAFT, POST_STATUS_PUBLISHED, Post

__all__ = ["PostRepository"]


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, post_id: int) -> Post | None:
        """Return a post by identifier."""
        return self.session.get(Post, post_id)

    def get_draft_for_author(self, author_id: int) -> Post | None:
        """Return the author's draft slot, if occupied."""
        result = self.session.execute(
            select(Post).where(Post.author_id == author_id, Post.status == POST_STATUS_DRAFT)
        )
        return result.scalars().first()

    def list_published(
        self,
        limit: int,
        *,
        author_ids: list[int] | None = None,
    ) -> list[Post]:
        """Return published posts, newest publication first.

        Args:
            limit: Maximum number of rows to return.
            author_ids: Restrict to these authors when given.
        """
        stmt = select(Post).where(Post.status == POST_STATUS_PUBLISHED)
        if author_ids is not None:
            stmt = stmt.where(Post.author_id.in_(author_ids))
        stmt = stmt.order_by(Post.published_at.desc(), Post.id.desc()).limit(limit)
        return list(self.session.execute(stmt).scalars())

    def list_published_since(self, cutoff: datetime, until: datetime | None = None) -> list[Post]:
        """Return published posts whose ``published_at`` is after ``cutoff``."""
        stmt = select(Post).where(
            Post.status == POST_STATUS_PUBLISHED,
            Post.published_at > cutoff,
        )
        if until is not None:
            stmt = stmt.where(Post.published_at <= until)
        return list(self.session.execute(stmt).scalars())

    def list_by_author(
        self,
        author_id: int,
        *,
        status: str | None = None,
        limit: int | None = None,
    ) -> list[Post]:
        """Return an author's posts, newest first, optionally by status."""
        stmt = select(Post).where(Post.author_id == author_id)
        if status is not None:
            stmt = stmt.where(Post.status == status)
        stmt = stmt.order_by(Post.created_at.desc(), Post.id.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.session.execute(stmt).scalars())

    def create(self, **fields: object) -> Post:
        """Insert a new post and return the persisted ORM instance."""
        post = Post(**fields)
        self.session.add(post)
        self.session.flush()
        return post

    def delete(self, post: Post) -> None:
        """Remove a post row."""
        self.session.delete(post)
        self.session.flush()
