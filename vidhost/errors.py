"""
Client Errors

Exception hierarchy for the video-hosting client.
Every error carries an ErrorKind so callers can branch on the category
without matching on exception classes.
"""

from typing import Optional

from vidhost.constants import ErrorKind


class VideoClientError(Exception):
    """
    Base exception for client errors.

    Examples:
    - Source file missing or empty
    - Server payload missing a field
    - Upload request rejected by the server
    """

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.TRANSPORT):
        super().__init__(message)
        self.kind = kind


class SourceUnreadable(VideoClientError):
    """Source path cannot be opened for reading"""

    def __init__(self, message: str):
        super().__init__(message, kind=ErrorKind.SOURCE_UNREADABLE)


class EmptySource(VideoClientError):
    """Source has zero length"""

    def __init__(self, message: str):
        super().__init__(message, kind=ErrorKind.EMPTY_SOURCE)


class InvalidSource(VideoClientError):
    """Source cannot be split into byte ranges"""

    def __init__(self, message: str):
        super().__init__(message, kind=ErrorKind.INVALID_SOURCE)


class MalformedResponse(VideoClientError):
    """Server payload does not match the expected schema"""

    def __init__(self, message: str):
        super().__init__(message, kind=ErrorKind.MALFORMED_RESPONSE)


class AuthenticationError(VideoClientError):
    """API key exchange or token refresh failed"""

    def __init__(self, message: str):
        super().__init__(message, kind=ErrorKind.AUTH_ERROR)


class TransportError(VideoClientError):
    """
    Fatal transport outcome.

    Attributes:
        status_code: HTTP status, or None when no response was received
        body: Raw response body (if any)
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message, kind=ErrorKind.TRANSPORT)
        self.status_code = status_code
        self.body = body

    @classmethod
    def from_response(cls, response, action: str) -> "TransportError":
        """Build an error from a failed ApiResponse"""
        return cls(
            f"{action} failed with status {response.status_code}",
            status_code=response.status_code,
            body=response.text,
        )
