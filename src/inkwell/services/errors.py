"""Error taxonomy raised by the engine's service layer.

Every service raises one of these with a message that is safe to show to
end users. The API layer maps each class to an HTTP status in one place
(see ``inkwell.main``).
"""

from __future__ import annotations


class InkwellError(Exception):
    """Base class for domain failures surfaced to callers."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnauthenticatedError(InkwellError):
    """Raised when no identity could be resolved for the caller."""

    status_code = 401


class UnauthorizedError(InkwellError):
    """Raised when the caller lacks rights over the target row."""

    status_code = 403


class NotFoundError(InkwellError):
    """Raised when a referenced row does not exist."""

    status_code = 404


class NotPublishedError(InkwellError):
    """Raised when an operation requires a published post."""

    status_code = 409


class ValidationError(InkwellError):
    """Raised for malformed input rejected by a business rule."""

    status_code = 400


class UsernameTakenError(ValidationError):
    """Raised when a requested handle already belongs to another user."""

    status_code = 409
