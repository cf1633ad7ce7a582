"""Unit tests for page_sync.validator module."""

import pytest

from src.confluence_client.errors import (
    APIUnreachableError,
    RemoteRequestFailed,
    SpaceNotFoundError,
)
from src.page_sync.validator import ConnectionValidator
from src.sync_config.models import PageMapping


class TestConnectionValidator:
    """Test cases for ConnectionValidator.validate."""

    def test_existing_page(self, mock_api, make_config, remote_page):
        mock_api.get_page_by_id.side_effect = None
        mock_api.get_page_by_id.return_value = remote_page(title="Readme")
        config = make_config(pages=[PageMapping(page_id="123", file="README.md")])

        [check] = ConnectionValidator(config, mock_api).validate()

        assert check.ok
        assert check.remote_found
        assert check.remote_title == "Readme"
        assert check.local_size == len("# Hello\n")
        assert check.warnings == []

    def test_missing_page_without_space_key_warns(self, mock_api, make_config):
        config = make_config(pages=[PageMapping(page_id="new", file="README.md")])

        [check] = ConnectionValidator(config, mock_api).validate()

        assert check.ok
        assert not check.remote_found
        assert check.warnings == ["Page new does not exist and no spaceKey is set"]
        mock_api.get_space.assert_not_called()

    def test_missing_page_checks_space(self, mock_api, make_config):
        mock_api.get_space.side_effect = SpaceNotFoundError("NOPE")
        config = make_config(
            pages=[PageMapping(page_id="new", file="README.md", space_key="NOPE")]
        )

        [check] = ConnectionValidator(config, mock_api).validate()

        assert not check.ok
        assert check.error == "Space NOPE not found"

    def test_missing_local_file(self, mock_api, make_config, remote_page):
        mock_api.get_page_by_id.side_effect = None
        mock_api.get_page_by_id.return_value = remote_page()
        config = make_config(pages=[PageMapping(page_id="123", file="gone.md")])

        [check] = ConnectionValidator(config, mock_api).validate()

        assert not check.ok
        assert check.local_size is None
        assert check.warnings[0].startswith("File gone.md not found at ")

    def test_remote_failure_recorded_per_page(self, mock_api, make_config):
        mock_api.get_page_by_id.side_effect = RemoteRequestFailed(500, "Server Error")
        config = make_config(pages=[PageMapping(page_id="1", file="README.md")])

        [check] = ConnectionValidator(config, mock_api).validate()

        assert check.error.startswith("Confluence API request failed: 500")

    def test_unreachable_remote_is_raised(self, mock_api, make_config):
        mock_api.get_page_by_id.side_effect = APIUnreachableError("https://wiki")
        config = make_config(pages=[PageMapping(page_id="1", file="README.md")])

        with pytest.raises(APIUnreachableError):
            ConnectionValidator(config, mock_api).validate()

    def test_nothing_is_written(self, mock_api, make_config):
        config = make_config(pages=[
            PageMapping(page_id="1", file="README.md", space_key="DOC"),
            PageMapping(page_id="2", file="notes.txt"),
        ])

        checks = ConnectionValidator(config, mock_api).validate()

        assert len(checks) == 2
        mock_api.create_page.assert_not_called()
        mock_api.update_page.assert_not_called()
