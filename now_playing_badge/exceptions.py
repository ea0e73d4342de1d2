"""Exception taxonomy for the badge pipeline.

None of these ever reach the HTTP caller: the badge pipeline catches every one of
them and answers with the default badge. They exist so the server-side log says
which stage failed and why.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured log records."""

    BADGE_ERROR = "BADGE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    CONFIG_MISSING = "CONFIG_MISSING"

    SPOTIFY_AUTH_ERROR = "SPOTIFY_AUTH_ERROR"
    SPOTIFY_PLAYBACK_ERROR = "SPOTIFY_PLAYBACK_ERROR"

    IMAGE_FETCH_ERROR = "IMAGE_FETCH_ERROR"
    DATA_SHAPE_ERROR = "DATA_SHAPE_ERROR"


class BadgeException(Exception):
    """Base exception for badge pipeline errors.

    All pipeline exceptions inherit from this class so the failure boundary
    can log them with a stable error code.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.BADGE_ERROR,
        details: dict[str, Any] | None = None,
    ):
        """Initialize badge exception.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            details: Additional error context/details
        """
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)


class ConfigError(BadgeException):
    """One or more Spotify credentials are not configured."""

    def __init__(self, message: str = "Missing Spotify credentials", details: dict[str, Any] | None = None):
        super().__init__(message, code=ErrorCode.CONFIG_MISSING, details=details)


class UpstreamError(BadgeException):
    """An upstream HTTP call failed."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.BADGE_ERROR,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.status_code = status_code
        super().__init__(message, code, details)


class UpstreamAuthError(UpstreamError):
    """Spotify token exchange failed."""

    def __init__(self, message: str, status_code: int | None = None, details: dict[str, Any] | None = None):
        super().__init__(message, code=ErrorCode.SPOTIFY_AUTH_ERROR, status_code=status_code, details=details)


class UpstreamPlaybackError(UpstreamError):
    """Spotify currently-playing query failed."""

    def __init__(self, message: str, status_code: int | None = None, details: dict[str, Any] | None = None):
        super().__init__(message, code=ErrorCode.SPOTIFY_PLAYBACK_ERROR, status_code=status_code, details=details)


class ImageFetchError(UpstreamError):
    """Album artwork could not be downloaded."""

    def __init__(self, message: str, status_code: int | None = None, details: dict[str, Any] | None = None):
        super().__init__(message, code=ErrorCode.IMAGE_FETCH_ERROR, status_code=status_code, details=details)


class DataShapeError(BadgeException):
    """Upstream JSON did not have the expected shape."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, code=ErrorCode.DATA_SHAPE_ERROR, details=details)
