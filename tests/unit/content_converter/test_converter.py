"""Unit tests for content type detection and converter dispatch."""

import pytest
from unittest.mock import patch

from src.confluence_client.errors import ConversionError
from src.content_converter import ContentType, ConverterOptions, convert_to_storage


class TestContentType:
    """Test cases for ContentType.from_path."""

    @pytest.mark.parametrize("path,expected", [
        ("README.md", ContentType.MARKDOWN),
        ("docs/guide.MARKDOWN", ContentType.MARKDOWN),
        ("page.html", ContentType.HTML),
        ("page.htm", ContentType.HTML),
        ("notes.txt", ContentType.PLAIN),
        ("LICENSE", ContentType.PLAIN),
        ("archive.md.bak", ContentType.PLAIN),
    ])
    def test_from_path(self, path, expected):
        assert ContentType.from_path(path) is expected


class TestConvertToStorage:
    """Test cases for convert_to_storage."""

    def test_markdown(self):
        assert convert_to_storage("# Hi", ContentType.MARKDOWN) == "<h1>Hi</h1>\n"

    def test_html(self):
        assert convert_to_storage("<i>x</i>", ContentType.HTML) == "<p><i>x</i></p>"

    def test_plain(self):
        assert convert_to_storage("A\n\nB", ContentType.PLAIN) == "<p>A</p><p>B</p>"

    def test_missing_type_is_plain(self):
        assert convert_to_storage("A", None) == "<p>A</p>"

    def test_options_are_applied(self):
        options = ConverterOptions(html_wrap_in_paragraph=False, plain_split_paragraphs=False)
        assert convert_to_storage("<i>x</i>", ContentType.HTML, options) == "<i>x</i>"
        assert convert_to_storage("A\n\nB", ContentType.PLAIN, options) == "<p>A<br/><br/>B</p>"

    @patch('src.content_converter.converter.markdown_to_storage')
    def test_renderer_failure_is_wrapped(self, mock_render):
        mock_render.side_effect = RuntimeError("parser exploded")

        with pytest.raises(ConversionError) as exc_info:
            convert_to_storage("# x", ContentType.MARKDOWN)

        assert str(exc_info.value) == "Failed to convert markdown content: parser exploded"
        assert isinstance(exc_info.value.__cause__, RuntimeError)
