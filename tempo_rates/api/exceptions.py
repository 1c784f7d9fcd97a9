"""Exception hierarchy for the RTE Tempo API client."""

from __future__ import annotations


class RTETempoError(Exception):
    """Base exception for all RTE Tempo API errors."""


class RTETempoAuthError(RTETempoError):
    """OAuth2 token exchange failed or the token was rejected."""


class RTETempoConnectionError(RTETempoError):
    """Network-level error (timeout, DNS, connection refused, garbled body)."""


class RTETempoResponseError(RTETempoError):
    """The response body parsed but does not hold the calendar values."""


class RTETempoClientError(RTETempoError):
    """HTTP 4xx error (except 401)."""

    def __init__(self, status_code: int, message: str) -> None:
        """Initialize with HTTP status code."""
        self.status_code = status_code
        super().__init__(f"HTTP {status_code}: {message}")


class RTETempoServerError(RTETempoError):
    """HTTP 5xx server error."""

    def __init__(self, status_code: int, message: str) -> None:
        """Initialize with HTTP status code."""
        self.status_code = status_code
        super().__init__(f"HTTP {status_code}: {message}")
