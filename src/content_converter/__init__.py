"""Content conversion module for source text → Confluence storage format.

This module provides the converters for Markdown, HTML and plain text
sources and the normalizer that turns fenced code into code macros.
"""

from .content_type import ContentType
from .converter import ConverterOptions, convert_to_storage
from .html_converter import html_to_storage
from .markdown_converter import MarkdownConverter, markdown_to_storage
from .plaintext_converter import plaintext_to_storage
from .storage_normalizer import normalize_code_blocks

__all__ = [
    'ContentType',
    'ConverterOptions',
    'convert_to_storage',
    'html_to_storage',
    'MarkdownConverter',
    'markdown_to_storage',
    'plaintext_to_storage',
    'normalize_code_blocks',
]
