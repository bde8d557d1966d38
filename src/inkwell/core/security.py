"""Identity token handling.

Tokens are issued by the external identity provider and verified here with
the shared secret. ``create_identity_token`` mints tokens with the same
claim layout for local development and tests.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from inkwell.core.settings import settings
from inkwell.services.errors import UnauthenticatedError
from inkwell.services.identity import Identity


def decode_identity_token(token: str) -> Identity:
    """Verify ``token`` and return the identity it asserts.

    Raises:
        UnauthenticatedError: If the token is invalid, expired or has no subject.
    """
    options = {"verify_aud": settings.identity_jwt_audience is not None}
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.identity_jwt_secret,
            algorithms=[settings.identity_jwt_algorithm],
            audience=settings.identity_jwt_audience,
            issuer=settings.identity_jwt_issuer,
            options=options,
        )
    except JWTError as err:
        raise UnauthenticatedError("Could not validate credentials") from err

    subject = payload.get("sub")
    if not subject:
        raise UnauthenticatedError("Could not validate credentials")
    return Identity(
        external_id=str(subject),
        display_name=payload.get("name"),
        email=payload.get("email"),
        picture_url=payload.get("picture"),
    )


def create_identity_token(
    subject: str,
    *,
    name: str | None = None,
    email: str | None = None,
    picture: str | None = None,
    expires_in: timedelta = timedelta(hours=1),
) -> str:
    """Create a signed identity token in the provider's claim layout."""
    to_encode: dict[str, object] = {"sub": subject}
    if name is not None:
        to_encode["name"] = name
    if email is not None:
        to_encode["email"] = email
    if picture is not None:
        to_encode["picture"] = picture
    if settings.identity_jwt_audience is not None:
        to_encode["aud"] = settings.identity_jwt_audience
    if settings.identity_jwt_issuer is not None:
        to_encode["iss"] = settings.identity_jwt_issuer
    to_encode["exp"] = datetime.now(UTC) + expires_in
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.identity_jwt_secret,
        algorithm=settings.identity_jwt_algorithm,
    )
    return encoded_jwt
