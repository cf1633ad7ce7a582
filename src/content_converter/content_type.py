"""Content type detection for local source files."""

from enum import Enum
from pathlib import Path
from typing import Union


class ContentType(Enum):
    """Source formats that can be converted to storage format."""

    MARKDOWN = "markdown"
    HTML = "html"
    PLAIN = "plain"

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "ContentType":
        """Map a file extension to a content type.

        .md/.markdown are Markdown, .html/.htm are HTML, everything else
        (including files without an extension) is plain text.
        """
        return _EXTENSIONS.get(Path(path).suffix.lower(), cls.PLAIN)


_EXTENSIONS = {
    ".md": ContentType.MARKDOWN,
    ".markdown": ContentType.MARKDOWN,
    ".html": ContentType.HTML,
    ".htm": ContentType.HTML,
}
