"""Unit tests for content_converter.markdown_converter module."""

from src.content_converter.markdown_converter import MarkdownConverter, markdown_to_storage

CODE_MACRO_OPEN = '<ac:structured-macro ac:name="code"><ac:plain-text-body><![CDATA['


class TestMarkdownConverter:
    """Test cases for MarkdownConverter."""

    def setup_method(self):
        self.converter = MarkdownConverter()

    def test_heading_and_paragraph(self):
        html = self.converter.markdown_to_html("# Title\n\nSome *text*")
        assert html == "<h1>Title</h1>\n<p>Some <em>text</em></p>\n"

    def test_soft_breaks_are_not_converted(self):
        assert self.converter.markdown_to_html("a\nb") == "<p>a\nb</p>\n"

    def test_tables_are_supported(self):
        html = self.converter.markdown_to_html("| a | b |\n|---|---|\n| 1 | 2 |\n")
        assert "<table>" in html
        assert "<td>1</td>" in html

    def test_strikethrough_is_supported(self):
        assert "<s>gone</s>" in self.converter.markdown_to_html("~~gone~~")

    def test_bare_urls_are_linked(self):
        html = self.converter.markdown_to_html("see https://example.com now")
        assert '<a href="https://example.com">' in html

    def test_fenced_code_becomes_macro(self):
        storage = self.converter.markdown_to_storage(
            "```python\nif a < b:\n    pass\n```\n"
        )
        assert storage == (
            CODE_MACRO_OPEN + "if a < b:\n    pass"
            + "]]></ac:plain-text-body></ac:structured-macro>\n"
        )

    def test_two_fences_become_two_macros(self):
        storage = self.converter.markdown_to_storage(
            "```\none\n```\n\ntext\n\n```js\ntwo\n```\n"
        )
        assert storage.count(CODE_MACRO_OPEN) == 2
        assert "<p>text</p>" in storage
        assert "<pre>" not in storage

    def test_code_containing_entities_survives(self):
        storage = self.converter.markdown_to_storage("```\n&lt;tag&gt;\n```\n")
        assert CODE_MACRO_OPEN + "&lt;tag&gt;]]>" in storage


class TestModuleFunction:
    """Test cases for the shared-converter helper."""

    def test_markdown_to_storage(self):
        assert markdown_to_storage("**bold**") == "<p><strong>bold</strong></p>\n"
