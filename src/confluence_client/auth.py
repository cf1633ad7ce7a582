"""Authentication header construction for the Confluence REST API.

Two credential forms are supported: a personal access token (sent as a
Bearer token) or a user/password pair (sent as HTTP Basic). The token wins
when both are configured. Missing credentials fail at construction time so
no request is ever attempted without an Authorization header.
"""

import base64
from typing import Dict, NamedTuple, Optional

from .errors import AuthConfigurationError


class Credentials(NamedTuple):
    """Confluence API credentials."""
    user: Optional[str]
    password: Optional[str]
    personal_access_token: Optional[str]


class Authenticator:
    """Builds Authorization headers from configured credentials.

    Credentials are held in memory only and are never logged.

    Raises:
        AuthConfigurationError: If neither a token nor a complete
            user/password pair is configured

    Example:
        >>> auth = Authenticator(personal_access_token="abc")
        >>> auth.auth_header()
        'Bearer abc'
    """

    def __init__(
        self,
        user: Optional[str] = None,
        password: Optional[str] = None,
        personal_access_token: Optional[str] = None,
    ):
        if not personal_access_token and not (user and password):
            raise AuthConfigurationError()
        self._credentials = Credentials(
            user=user,
            password=password,
            personal_access_token=personal_access_token,
        )

    @classmethod
    def from_config(cls, config) -> "Authenticator":
        """Create an authenticator from a SyncConfiguration."""
        return cls(
            user=config.user,
            password=config.password,
            personal_access_token=config.personal_access_token,
        )

    @property
    def scheme(self) -> str:
        """Authorization scheme that will be sent ("Bearer" or "Basic")."""
        return "Bearer" if self._credentials.personal_access_token else "Basic"

    def auth_header(self) -> str:
        """Return the value of the Authorization header.

        Returns:
            "Bearer <token>" when a token is configured, otherwise
            "Basic <base64(user:pass)>"
        """
        creds = self._credentials
        if creds.personal_access_token:
            return f"Bearer {creds.personal_access_token}"

        raw = f"{creds.user}:{creds.password}".encode("utf-8")
        return f"Basic {base64.b64encode(raw).decode('ascii')}"

    def headers(self) -> Dict[str, str]:
        """Return the full header set sent with every request."""
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Authorization": self.auth_header(),
        }
