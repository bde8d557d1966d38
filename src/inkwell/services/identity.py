"""Resolve external identities to internal user rows."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from inkwell.db.time import utcnow
from inkwell.models import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """Identity asserted by the external identity provider."""

    external_id: str
    display_name: str | None = None
    email: str | None = None
    picture_url: str | None = None


def find_user(db: Session, external_id: str) -> User | None:
    """Return the user registered for ``external_id`` without creating one."""
    result = db.execute(select(User).where(User.external_id == external_id))
    return result.scalars().first()


def resolve_user(db: Session, identity: Identity, *, now: datetime | None = None) -> User:
    """Return the user for ``identity``, creating the row on first sight.

    The display name follows the identity provider: when it changes there,
    the stored name is patched. ``last_active_at`` is refreshed on every call.
    """
    now = now or utcnow()
    user = find_user(db, identity.external_id)
    if user is None:
        user = User(
            external_id=identity.external_id,
            name=identity.display_name or "Anonymous",
            email=identity.email,
            image_url=identity.picture_url,
            created_at=now,
            last_active_at=now,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info("Created user %s for new identity", user.id)
        return user

    if identity.display_name and user.name != identity.display_name:
        user.name = identity.display_name
    user.last_active_at = now
    db.commit()
    return user
