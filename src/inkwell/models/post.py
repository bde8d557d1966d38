# src/inkwell/models/post.py
"""SQLAlchemy model for posts and their lifecycle state."""

from datetime import datetime

from sqlalchemy import JSON, CheckConstraint, DateTime, ForeignKey, Index, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from inkwell.db.session import Base
from inkwell.db.time import utcnow

POST_STATUS_DRAFT = "draft"
POST_STATUS_PUBLISHED = "published"
POST_STATUSES = (POST_STATUS_DRAFT, POST_STATUS_PUBLISHED)


class Post(Base):
    """Primary content entity written by an author.

    An author owns at most one post in ``draft`` status (the draft slot).
    ``view_count`` and ``like_count`` are denormalized counters maintained by
    the engagement service.
    """

    __tablename__ = "post"
    __table_args__ = (
        CheckConstraint("status IN ('draft', 'published')", name="ck_post_status"),
        CheckConstraint("view_count >= 0", name="ck_post_view_count"),
        CheckConstraint("like_count >= 0", name="ck_post_like_count"),
        Index("ix_post_status_published_at", "status", "published_at"),
        Index("ix_post_author_status", "author_id", "status"),
        # Draft slot: one draft per author.
        Index(
            "uq_post_author_draft",
            "author_id",
            unique=True,
            sqlite_where=text("status = 'draft'"),
            postgresql_where=text("status = 'draft'"),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=False,
    )

    title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # Rich-text HTML produced by the editor; stored verbatim.
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[str] = mapped_column(Text, nullable=False, default=POST_STATUS_DRAFT)

    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    category: Mapped[str | None] = mapped_column(Text, nullable=True)
    # URL owned by the image storage provider.
    featured_image: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    # Advisory only; visibility depends on status alone.
    scheduled_for: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    like_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    @property
    def is_published(self) -> bool:
        """Return True when the post is publicly visible."""
        return self.status == POST_STATUS_PUBLISHED
