"""Signed parameters for direct browser uploads to the image provider.

Images never pass through this service: the client uploads straight to
ImageKit with a short-lived signature and the engine only stores the
resulting URL on the post.
"""

from __future__ import annotations

import time
from dataclasses import dataclass

from imagekitio import ImageKit

from inkwell.core.settings import settings


class ImageUploadsDisabledError(RuntimeError):
    """Raised when upload credentials are not configured."""


@dataclass(frozen=True)
class UploadAuthParams:
    """Token, expiry and signature expected by the image provider."""

    token: str
    expire: int
    signature: str
    public_key: str


def get_imagekit() -> ImageKit:
    """Build an ImageKit client from the configured key pair.

    Raises:
        ImageUploadsDisabledError: If the ImageKit key pair is missing.
    """
    if not settings.image_uploads_enabled:
        raise ImageUploadsDisabledError("Image uploads are not configured")
    return ImageKit(
        private_key=settings.imagekit_private_key,
        public_key=settings.imagekit_public_key,
        url_endpoint=settings.imagekit_url_endpoint,
    )


def upload_auth_params(
    *,
    now: float | None = None,
    token: str | None = None,
) -> UploadAuthParams:
    """Issue upload parameters valid for ``image_upload_ttl_seconds``.

    The SDK generates a random token when none is given.

    Raises:
        ImageUploadsDisabledError: If the ImageKit key pair is missing.
    """
    imagekit = get_imagekit()
    issued_at = int(time.time() if now is None else now)
    expire = issued_at + settings.image_upload_ttl_seconds
    params = imagekit.get_authentication_parameters(token or "", expire)
    return UploadAuthParams(
        token=params["token"],
        expire=int(params["expire"]),
        signature=params["signature"],
        public_key=settings.imagekit_public_key or "",
    )
