# src/inkwell/models/comment.py
"""Models for reader comments on posts."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from inkwell.db.session import Base
from inkwell.db.time import utcnow

COMMENT_STATUS_APPROVED = "approved"
COMMENT_STATUS_PENDING = "pending"
COMMENT_STATUS_REJECTED = "rejected"


class Comment(Base):
    """Comment left on a published post.

    ``author_id`` is null for legacy anonymous comments, which only carry the
    free-text name/email pair.
    """

    __tablename__ = "comment"
    __table_args__ = (
        CheckConstraint(
            "status IN ('approved', 'pending', 'rejected')",
            name="ck_comment_status",
        ),
        Index("ix_comment_post_status", "post_id", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
    )
    author_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=True,
        index=True,
    )
    author_name: Mapped[str] = mapped_column(Text, nullable=False)
    author_email: Mapped[str | None] = mapped_column(String(320), nullable=True)

    content: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(Text, nullable=False, default=COMMENT_STATUS_APPROVED)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
