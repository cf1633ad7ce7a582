"""Confluence page data model."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class ConfluencePage:
    """Confluence page as returned by the REST API.

    Owned by the remote service: the version number is assigned by
    Confluence on every successful write and is only ever read here.

    Attributes:
        page_id: Unique identifier for the page
        title: Page title
        version: Current version number (version.number)
        body: Page content in Confluence storage format (body.storage.value)
        space_key: Space key where the page resides, if expanded
    """
    page_id: str
    title: str
    version: int
    body: str = ""
    space_key: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "ConfluencePage":
        """Build a page from a /rest/api/content response payload."""
        body = (data.get("body") or {}).get("storage") or {}
        space = data.get("space") or {}
        return cls(
            page_id=str(data.get("id", "")),
            title=data.get("title", ""),
            version=int((data.get("version") or {}).get("number", 0)),
            body=body.get("value", ""),
            space_key=space.get("key"),
        )
