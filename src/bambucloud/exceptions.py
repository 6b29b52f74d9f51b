"""Exceptions raised by bambucloud.

Catch :class:`BambuCloudError` to handle every library failure, or one of
the subclasses to tell a network problem apart from a malformed response.
"""

from __future__ import annotations


class BambuCloudError(Exception):
    """Base exception for all bambucloud errors."""


class TransportError(BambuCloudError):
    """Raised when a request fails at the network level or returns a non-2xx status."""

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        response_body: str | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            message: Error description.
            status: HTTP status code, or ``None`` if no response was received.
            response_body: Raw response body, when one was read.
        """
        super().__init__(f"[{status}] {message}" if status is not None else message)
        self.status = status
        self.response_body = response_body


class DecodeError(BambuCloudError):
    """Raised when a response body does not have the expected shape."""


class TokenError(DecodeError):
    """Raised when the login credential is not a parseable RS256 claims token."""


class CameraUrlError(BambuCloudError):
    """Raised when a camera ticket cannot be encoded into a streaming URL."""
