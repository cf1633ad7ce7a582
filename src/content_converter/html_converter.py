"""HTML to Confluence storage format conversion."""


def html_to_storage(content: str, wrap_in_paragraph: bool = True) -> str:
    """Pass HTML through, optionally wrapped in a single paragraph.

    No validation is performed; the caller supplies a well-formed fragment.
    """
    if not wrap_in_paragraph:
        return content
    return f"<p>{content}</p>"
