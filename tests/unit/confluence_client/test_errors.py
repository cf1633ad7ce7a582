"""Unit tests for the exception hierarchy."""

import pytest

from src.confluence_client.errors import (
    APIUnreachableError,
    AuthConfigurationError,
    ConfluenceError,
    ConversionError,
    InvalidCredentialsError,
    PageNotFoundError,
    RemoteRequestFailed,
    SpaceNotFoundError,
    SyncError,
)
from src.page_sync.errors import LocalFileNotFoundError, PageSyncFailure
from src.sync_config.errors import ConfigFileError, ConfigValidationError


class TestHierarchy:
    """All application errors can be caught as SyncError."""

    @pytest.mark.parametrize("error", [
        AuthConfigurationError(),
        InvalidCredentialsError("https://wiki"),
        PageNotFoundError("1"),
        SpaceNotFoundError("DOC"),
        APIUnreachableError("https://wiki"),
        RemoteRequestFailed(500),
        ConversionError("bad"),
    ])
    def test_confluence_errors(self, error):
        assert isinstance(error, ConfluenceError)
        assert isinstance(error, SyncError)

    def test_local_file_error_is_page_sync_failure(self):
        error = LocalFileNotFoundError("a.md", "/work/a.md")
        assert isinstance(error, PageSyncFailure)
        assert isinstance(error, SyncError)


class TestMessages:
    """Error messages keep their context."""

    def test_remote_request_failed_message(self):
        error = RemoteRequestFailed(400, "Bad Request", '{"reason":"x"}')
        assert str(error) == (
            'Confluence API request failed: 400 Bad Request\nResponse: {"reason":"x"}'
        )
        assert error.is_version_conflict is False

    def test_version_conflict(self):
        assert RemoteRequestFailed(409, "Conflict").is_version_conflict is True

    def test_invalid_credentials_keeps_status_and_body(self):
        error = InvalidCredentialsError("https://wiki", 403, "Forbidden", "no access")
        assert str(error) == (
            "Credentials were rejected by https://wiki: 403 Forbidden\nResponse: no access"
        )

    def test_local_file_not_found_message(self):
        error = LocalFileNotFoundError("docs/a.md", "/work/docs/a.md")
        assert str(error) == "File docs/a.md not found at /work/docs/a.md"

    def test_config_validation_with_field(self):
        error = ConfigValidationError("Field cannot be empty", "pages[0].file")
        assert str(error) == (
            "Configuration error in field 'pages[0].file': Field cannot be empty"
        )
        assert error.config_field == "pages[0].file"

    def test_config_file_error_with_reason(self):
        error = ConfigFileError("sync.json", "read", "Permission denied")
        assert str(error) == (
            "Configuration file operation 'read' failed for sync.json: Permission denied"
        )
