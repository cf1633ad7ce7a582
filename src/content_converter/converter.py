"""Content type dispatch for storage format conversion."""

from dataclasses import dataclass
from typing import Optional

from src.confluence_client.errors import ConversionError
from .content_type import ContentType
from .html_converter import html_to_storage
from .markdown_converter import markdown_to_storage
from .plaintext_converter import plaintext_to_storage


@dataclass(frozen=True)
class ConverterOptions:
    """Per-format conversion switches.

    Attributes:
        html_wrap_in_paragraph: Wrap HTML sources in a single <p>
        plain_split_paragraphs: Split plain text on blank lines
    """
    html_wrap_in_paragraph: bool = True
    plain_split_paragraphs: bool = True


def convert_to_storage(
    content: str,
    content_type: Optional[ContentType] = ContentType.PLAIN,
    options: Optional[ConverterOptions] = None,
) -> str:
    """Convert source text to Confluence storage format.

    Unknown or missing content types are treated as plain text.

    Args:
        content: Source text
        content_type: Format of the source text
        options: Format-specific switches

    Returns:
        Storage format string

    Raises:
        ConversionError: If the underlying renderer fails unexpectedly
    """
    options = options or ConverterOptions()

    try:
        if content_type is ContentType.MARKDOWN:
            return markdown_to_storage(content)
        if content_type is ContentType.HTML:
            return html_to_storage(content, options.html_wrap_in_paragraph)
        return plaintext_to_storage(content, options.plain_split_paragraphs)
    except Exception as e:
        kind = content_type.value if content_type else ContentType.PLAIN.value
        raise ConversionError(f"Failed to convert {kind} content: {e}") from e
