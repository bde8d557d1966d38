"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from inkwell.core.security import decode_identity_token
from inkwell.db.session import get_db
from inkwell.models import User
from inkwell.services.errors import UnauthenticatedError
from inkwell.services.identity import Identity, resolve_user

# Missing credentials are reported as a domain error rather than FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)

BearerDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_optional_identity(credentials: BearerDep) -> Identity | None:
    """Return the identity asserted by the bearer token, if one was sent.

    Raises:
        UnauthenticatedError: If a token was sent but fails verification.
    """
    if credentials is None:
        return None
    return decode_identity_token(credentials.credentials)


def get_current_identity(credentials: BearerDep) -> Identity:
    """Return the verified identity of the caller.

    Raises:
        UnauthenticatedError: If no token was sent or it fails verification.
    """
    if credentials is None:
        raise UnauthenticatedError("Not authenticated")
    return decode_identity_token(credentials.credentials)


def get_current_user(
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: SessionDep,
) -> User:
    """Resolve the caller to a user row, registering it on first sight."""
    return resolve_user(db, identity)


def get_optional_user(
    identity: Annotated[Identity | None, Depends(get_optional_identity)],
    db: SessionDep,
) -> User | None:
    """Resolve the caller when authenticated; anonymous callers get None."""
    if identity is None:
        return None
    return resolve_user(db, identity)


# Type aliases for user dependencies
CurrentUserDep = Annotated[User, Depends(get_current_user)]
OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]
