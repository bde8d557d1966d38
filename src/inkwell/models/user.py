# src/inkwell/models/user.py
"""SQLAlchemy model for platform accounts resolved from identity tokens."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from inkwell.db.session import Base
from inkwell.db.time import utcnow


class User(Base):
    """Account keyed by the opaque token identifier of the identity provider."""

    __tablename__ = "user_account"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    external_id: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False, default="Anonymous")
    email: Mapped[str | None] = mapped_column(String(320), nullable=True, index=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Public handle; optional until the user picks one.
    username: Mapped[str | None] = mapped_column(String(20), unique=True, nullable=True)
    bio: Mapped[str | None] = mapped_column(String(300), nullable=True)
    state: Mapped[str | None] = mapped_column(Text, nullable=True)
    country: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    last_active_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
