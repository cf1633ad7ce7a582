"""Plain text to Confluence storage format conversion."""

LINE_BREAK = "<br/>"
EMPTY_PARAGRAPH = "<p></p>"


def plaintext_to_storage(content: str, split_paragraphs: bool = True) -> str:
    """Wrap plain text in paragraphs.

    With split_paragraphs, the text is split on blank lines ("\\n\\n"), each
    piece is stripped and empty pieces are dropped; the remaining single
    newlines become line breaks. A document with no surviving paragraph
    still yields one empty paragraph so the page body is never empty.

    Without split_paragraphs, the whole text becomes one paragraph with
    every newline turned into a line break, untrimmed.

    Args:
        content: Plain text source
        split_paragraphs: Split on blank lines (default True)

    Returns:
        Storage format string

    Example:
        >>> plaintext_to_storage("A\\n\\nB")
        '<p>A</p><p>B</p>'
    """
    if not split_paragraphs:
        return "<p>" + content.replace("\n", LINE_BREAK) + "</p>"

    paragraphs = [p.strip() for p in content.split("\n\n")]
    paragraphs = [p for p in paragraphs if p]

    if not paragraphs:
        return EMPTY_PARAGRAPH

    return "".join(
        "<p>" + p.replace("\n", LINE_BREAK) + "</p>" for p in paragraphs
    )
