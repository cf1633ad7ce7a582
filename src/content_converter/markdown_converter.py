"""Markdown converter using markdown-it-py.

This module converts Markdown to Confluence storage format. Parsing is
delegated to markdown-it-py with GitHub-flavoured extensions (tables,
strikethrough, autolinks) and without soft-break-to-<br> conversion; the
generic HTML it produces is then normalized so fenced code becomes the
Confluence code macro.
"""

from markdown_it import MarkdownIt

from .storage_normalizer import normalize_code_blocks


class MarkdownConverter:
    """Converts Markdown to Confluence storage format.

    The parser is built once per converter and is safe to reuse across
    documents; rendering keeps no state between calls.
    """

    def __init__(self):
        self._markdown = MarkdownIt("gfm-like", {"breaks": False})

    def markdown_to_html(self, markdown: str) -> str:
        """Render Markdown to generic HTML."""
        return self._markdown.render(markdown)

    def markdown_to_storage(self, markdown: str) -> str:
        """Render Markdown and rewrite code blocks into code macros.

        Args:
            markdown: Markdown source

        Returns:
            Storage format string
        """
        return normalize_code_blocks(self.markdown_to_html(markdown))


_default_converter = None


def markdown_to_storage(content: str) -> str:
    """Convert Markdown to storage format with a shared converter."""
    global _default_converter
    if _default_converter is None:
        _default_converter = MarkdownConverter()
    return _default_converter.markdown_to_storage(content)
