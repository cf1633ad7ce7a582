"""API wrapper for the Confluence REST API (content endpoints).

This module wraps the atlassian-python-api Confluence client and provides
translation from HTTP responses to our typed exception hierarchy. Requests
are issued in advanced mode so the raw status code decides the outcome:
a 404 becomes PageNotFoundError, every other non-2xx response becomes
RemoteRequestFailed. It integrates with the retry logic for rate limits.
"""

import logging
import re
from typing import Any, Dict, Optional, Union
from urllib.parse import quote

import requests
from atlassian import Confluence
from requests.exceptions import ConnectionError, Timeout

from src.models.confluence_page import ConfluencePage

from .auth import Authenticator
from .errors import (
    APIUnreachableError,
    InvalidCredentialsError,
    PageNotFoundError,
    RemoteRequestFailed,
    SpaceNotFoundError,
)
from .retry_logic import retry_on_rate_limit

logger = logging.getLogger(__name__)

Log = Union[logging.Logger, logging.LoggerAdapter]

PAGE_EXPAND = "body.storage,version,space"
REQUEST_TIMEOUT = 30


class APIWrapper:
    """Wrapper around atlassian-python-api Confluence client with error translation.

    This class provides a thin wrapper over the Confluence API client that:
    1. Sends the Authorization header built by the Authenticator
    2. Translates HTTP status codes to typed exceptions
    3. Integrates retry logic for 429 rate limits
    4. Returns ConfluencePage models instead of raw dictionaries

    The wrapper holds no per-page state, so one instance can be shared by
    concurrently running page syncs.

    Example:
        >>> auth = Authenticator(personal_access_token="...")
        >>> api = APIWrapper("https://wiki.example.com", auth)
        >>> page = api.get_page_by_id("123456")
    """

    def __init__(
        self,
        base_url: str,
        authenticator: Authenticator,
        insecure: bool = False,
    ):
        """Initialize the API wrapper.

        Args:
            base_url: Confluence base URL (REST root is {base_url}/rest/api)
            authenticator: Authenticator producing request headers
            insecure: Skip TLS certificate verification
        """
        self.base_url = base_url.rstrip("/")
        self._authenticator = authenticator
        self._insecure = insecure
        self._client: Optional[Confluence] = None

    def _get_client(self) -> Confluence:
        """Get or create the Confluence API client.

        The client is created lazily on first use over a requests session
        that carries the authentication and content-type headers.

        Returns:
            Confluence: Initialized atlassian-python-api Confluence client
        """
        if self._client is None:
            session = requests.Session()
            session.headers.update(self._authenticator.headers())
            self._client = Confluence(
                url=self.base_url,
                session=session,
                verify_ssl=not self._insecure,
                timeout=REQUEST_TIMEOUT,
            )
        return self._client

    def _sanitize_credentials(self, text: str) -> str:
        """Mask Authorization values and tokens before text reaches a log.

        Example:
            >>> api._sanitize_credentials("Authorization: Bearer abc123")
            'Authorization: ***REDACTED***'
        """
        if not text:
            return text

        sanitized = re.sub(
            r'://([\w.-]+):([\w.-]+)@',
            r'://***:***@',
            text
        )
        sanitized = re.sub(
            r'Authorization:\s*[^\n\r]+',
            'Authorization: ***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )
        sanitized = re.sub(
            r'(Bearer|Basic)\s+[^\s\n\r]+',
            r'\1 ***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )
        return sanitized

    def _send(
        self,
        method: str,
        path: str,
        log: Log,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        """Issue one request and return the raw response.

        Raises:
            APIUnreachableError: On connection failures and timeouts
        """
        client = self._get_client()
        log.debug(f"Making {method} request to: {self.base_url}/{path}")
        try:
            if method == "GET":
                response = client.get(path, params=params, advanced_mode=True)
            elif method == "POST":
                response = client.post(path, data=data, advanced_mode=True)
            elif method == "PUT":
                response = client.put(path, data=data, advanced_mode=True)
            else:
                raise ValueError(f"Unsupported HTTP method: {method}")
        except (ConnectionError, Timeout) as e:
            raise APIUnreachableError(endpoint=self.base_url) from e

        log.debug(f"Response status: {response.status_code} {response.reason}")
        return response

    def _raise_for_status(
        self,
        response: requests.Response,
        operation: str,
        log: Log,
    ) -> None:
        """Translate a non-2xx response into a typed exception.

        404 is left to the caller, which knows what was not found.

        Raises:
            InvalidCredentialsError: On 401 or 403
            RemoteRequestFailed: On any other non-2xx status
        """
        status = response.status_code
        if 200 <= status < 300:
            return

        if status in (401, 403):
            raise InvalidCredentialsError(
                endpoint=self.base_url,
                status_code=status,
                reason=response.reason or "",
                body=self._sanitize_credentials(response.text or ""),
            )

        error = RemoteRequestFailed(
            status_code=status,
            reason=response.reason or "",
            body=response.text or "",
        )
        log.error(
            f"API operation failed: {operation} - "
            f"{self._sanitize_credentials(str(error))}"
        )
        raise error

    def get_page_by_id(self, page_id: str, log: Optional[Log] = None) -> ConfluencePage:
        """Fetch a page by its ID with body, version and space expanded.

        Args:
            page_id: The Confluence page ID
            log: Logger to report on (defaults to the module logger)

        Returns:
            ConfluencePage with storage body and version

        Raises:
            PageNotFoundError: If the remote answers 404
            InvalidCredentialsError: If credentials are rejected
            APIUnreachableError: If API is unreachable
            RemoteRequestFailed: On any other non-2xx response
        """
        log = log or logger
        if not page_id or not str(page_id).strip():
            raise ValueError("page_id cannot be empty")

        def _fetch():
            log.info(f"Fetching page with ID: {page_id}")
            response = self._send(
                "GET",
                f"rest/api/content/{quote(str(page_id), safe='')}",
                log,
                params={"expand": PAGE_EXPAND},
            )
            if response.status_code == 404:
                log.info(f"Page with ID {page_id} not found")
                raise PageNotFoundError(page_id=page_id)
            self._raise_for_status(response, f"get_page_by_id({page_id})", log)

            page = ConfluencePage.from_api(response.json())
            log.info(f"Successfully fetched page: {page.title}")
            return page

        return retry_on_rate_limit(_fetch, log)

    def create_page(
        self,
        title: str,
        space_key: Optional[str],
        body: str,
        parent_id: Optional[str] = None,
        log: Optional[Log] = None,
    ) -> ConfluencePage:
        """Create a new page in storage representation.

        Args:
            title: The page title
            space_key: The space key where the page will be created
            body: The page content in storage format
            parent_id: Optional parent page ID (sent as the only ancestor)
            log: Logger to report on (defaults to the module logger)

        Returns:
            ConfluencePage as created by the remote

        Raises:
            InvalidCredentialsError: If credentials are rejected
            APIUnreachableError: If API is unreachable
            RemoteRequestFailed: On any non-2xx response
        """
        log = log or logger
        payload: Dict[str, Any] = {
            "type": "page",
            "title": title,
            "space": {"key": space_key},
            "body": {
                "storage": {
                    "value": body,
                    "representation": "storage",
                }
            },
        }
        if parent_id:
            payload["ancestors"] = [{"id": parent_id}]

        def _create():
            log.info(f"Creating new page: {title}")
            response = self._send("POST", "rest/api/content", log, data=payload)
            self._raise_for_status(response, f"create_page({space_key}, {title})", log)

            page = ConfluencePage.from_api(response.json())
            log.info(f"Successfully created page with ID: {page.page_id}")
            return page

        return retry_on_rate_limit(_create, log)

    def update_page(
        self,
        page_id: str,
        title: str,
        body: str,
        version: int,
        log: Optional[Log] = None,
    ) -> ConfluencePage:
        """Replace a page's content.

        Args:
            page_id: The Confluence page ID
            title: The page title
            body: The page content in storage format
            version: The currently observed version number; the request
                carries version + 1 and Confluence rejects it with 409 when
                the page has moved on in the meantime
            log: Logger to report on (defaults to the module logger)

        Returns:
            ConfluencePage as updated by the remote

        Raises:
            PageNotFoundError: If the page vanished (404)
            InvalidCredentialsError: If credentials are rejected
            APIUnreachableError: If API is unreachable
            RemoteRequestFailed: On any other non-2xx response, including
                409 version conflicts
        """
        log = log or logger
        payload = {
            "id": page_id,
            "type": "page",
            "title": title,
            "body": {
                "storage": {
                    "value": body,
                    "representation": "storage",
                }
            },
            "version": {"number": version + 1},
        }

        def _update():
            log.info(f"Updating page: {title} (ID: {page_id})")
            response = self._send(
                "PUT",
                f"rest/api/content/{quote(str(page_id), safe='')}",
                log,
                data=payload,
            )
            if response.status_code == 404:
                raise PageNotFoundError(page_id=page_id)
            try:
                self._raise_for_status(response, f"update_page({page_id})", log)
            except RemoteRequestFailed as e:
                if e.is_version_conflict:
                    log.warning(
                        f"Version conflict updating page {page_id} "
                        f"(version {version} is stale)"
                    )
                raise

            page = ConfluencePage.from_api(response.json())
            log.info(f"Successfully updated page with ID: {page.page_id}")
            return page

        return retry_on_rate_limit(_update, log)

    def get_space(self, space_key: str, log: Optional[Log] = None) -> Dict[str, Any]:
        """Get space metadata.

        Args:
            space_key: The space key (e.g., "TEAM")
            log: Logger to report on (defaults to the module logger)

        Returns:
            Dict containing space data (key, name, ...)

        Raises:
            SpaceNotFoundError: If the space doesn't exist
            InvalidCredentialsError: If credentials are rejected
            APIUnreachableError: If API is unreachable
            RemoteRequestFailed: On any other non-2xx response
        """
        log = log or logger

        def _fetch():
            log.debug(f"Fetching space with key: {space_key}")
            response = self._send(
                "GET",
                f"rest/api/space/{quote(space_key, safe='')}",
                log,
            )
            if response.status_code == 404:
                raise SpaceNotFoundError(space_key=space_key)
            self._raise_for_status(response, f"get_space({space_key})", log)

            space = response.json()
            log.debug(f"Successfully fetched space: {space.get('name')}")
            return space

        return retry_on_rate_limit(_fetch, log)
