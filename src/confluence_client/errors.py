"""Typed exception hierarchy for Confluence-related errors.

Every application error derives from SyncError; errors raised while talking
to Confluence derive from ConfluenceError. Each carries the context needed
for a descriptive message.
"""

from typing import Optional


class SyncError(Exception):
    """Base exception for all confluence-page-sync errors.

    Use this to catch any application-level error from the sync tool.
    """
    pass


class ConfluenceError(SyncError):
    """Base exception for all Confluence-related errors."""
    pass


class AuthConfigurationError(ConfluenceError):
    """Raised when neither a personal access token nor user/pass is configured."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message
            or "Either personalAccessToken or both user and pass must be "
               "provided for authentication"
        )


class InvalidCredentialsError(ConfluenceError):
    """Raised when the remote rejects the configured credentials (401/403)."""

    def __init__(
        self,
        endpoint: str,
        status_code: int = 401,
        reason: str = "",
        body: str = "",
    ):
        message = f"Credentials were rejected by {endpoint}: {status_code} {reason}".rstrip()
        if body:
            message += f"\nResponse: {body}"
        super().__init__(message)
        self.endpoint = endpoint
        self.status_code = status_code
        self.reason = reason
        self.body = body


class PageNotFoundError(ConfluenceError):
    """Raised when a requested page does not exist."""

    def __init__(self, page_id: str):
        super().__init__(f"Page {page_id} not found")
        self.page_id = page_id


class SpaceNotFoundError(ConfluenceError):
    """Raised when a requested space does not exist."""

    def __init__(self, space_key: str):
        super().__init__(f"Space {space_key} not found")
        self.space_key = space_key


class APIUnreachableError(ConfluenceError):
    """Raised when the Confluence API is not available or unreachable."""

    def __init__(self, endpoint: str):
        super().__init__(f"API is not available at {endpoint}")
        self.endpoint = endpoint


class RemoteRequestFailed(ConfluenceError):
    """Raised for any non-2xx response that is not a not-found signal.

    The message keeps the status code, status text and raw response body
    so callers can surface the remote's own explanation.
    """

    def __init__(self, status_code: int, reason: str = "", body: str = ""):
        super().__init__(
            f"Confluence API request failed: {status_code} {reason}\n"
            f"Response: {body}"
        )
        self.status_code = status_code
        self.reason = reason
        self.body = body

    @property
    def is_version_conflict(self) -> bool:
        return self.status_code == 409


class ConversionError(ConfluenceError):
    """Raised when content conversion to storage format fails."""

    def __init__(self, message: str):
        super().__init__(message)
