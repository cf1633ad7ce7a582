"""Shared fixtures for page_sync tests."""

from unittest.mock import Mock

import pytest

from src.confluence_client.api_wrapper import APIWrapper
from src.confluence_client.errors import PageNotFoundError
from src.models.confluence_page import ConfluencePage
from src.sync_config.models import PageMapping, SyncConfiguration


def _page_not_found(page_id, log=None):
    raise PageNotFoundError(page_id)


def _created(title, space_key, body, parent_id=None, log=None):
    return ConfluencePage(page_id="900", title=title, version=1, body=body, space_key=space_key)


def _updated(page_id, title, body, version, log=None):
    return ConfluencePage(page_id=page_id, title=title, version=version + 1, body=body)


@pytest.fixture
def mock_api():
    """An APIWrapper double that finds no pages by default."""
    api = Mock(spec=APIWrapper)
    api.get_page_by_id.side_effect = _page_not_found
    api.create_page.side_effect = _created
    api.update_page.side_effect = _updated
    return api


@pytest.fixture
def remote_page():
    """Factory for pages returned by get_page_by_id."""
    def _make(page_id="123", title="Remote Title", version=7, body="<p>old</p>"):
        return ConfluencePage(page_id=page_id, title=title, version=version, body=body)
    return _make


@pytest.fixture
def docs(tmp_path):
    """A docs directory with one file of each supported kind."""
    (tmp_path / "README.md").write_text("# Hello\n", encoding="utf-8")
    (tmp_path / "page.html").write_text("<b>hi</b>", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("A\n\nB", encoding="utf-8")
    return tmp_path


@pytest.fixture
def make_config(docs):
    """Factory for configurations rooted at the docs directory."""
    def _make(pages=(), **overrides):
        return SyncConfiguration(
            base_url="https://wiki.example.com",
            personal_access_token="tok",
            file_root=str(docs),
            pages=tuple(pages),
            **overrides,
        )
    return _make


@pytest.fixture
def readme_mapping():
    return PageMapping(page_id="123", file="README.md", space_key="DOC")
