"""Data models for sync configuration.

Both models are frozen: they are loaded once per run and shared read-only
by every concurrently running page sync.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple


@dataclass(frozen=True)
class PageMapping:
    """One sync target: a local file and the page it is published to.

    Attributes:
        page_id: Remote page ID, or a placeholder key for a page that does
                 not exist yet
        file: Source file path, relative to the configured file root
        title: Page title (defaults to the file name)
        space_key: Space to create the page in (needed only for new pages)
        parent_id: Parent page ID for new pages
    """
    page_id: str
    file: str
    title: Optional[str] = None
    space_key: Optional[str] = None
    parent_id: Optional[str] = None

    @property
    def default_title(self) -> str:
        """Title to use when none is configured."""
        return self.title or Path(self.file).name


@dataclass(frozen=True)
class SyncConfiguration:
    """Global settings shared by all page mappings in a run.

    Attributes:
        base_url: Confluence base URL (REST root is {base_url}/rest/api)
        user: User name for Basic authentication
        password: Password for Basic authentication
        personal_access_token: Token for Bearer authentication (wins over
                               user/password when both are set)
        cache_path: Working directory for build artifacts
        prefix: Text prepended to every synced body
        insecure: Skip TLS certificate verification
        force: Skip the dry-run content comparison
        file_root: Directory page files are resolved against (None = cwd)
        pages: Page mappings to sync
    """
    base_url: str
    user: Optional[str] = None
    password: Optional[str] = None
    personal_access_token: Optional[str] = None
    cache_path: str = "build"
    prefix: Optional[str] = None
    insecure: bool = False
    force: bool = False
    file_root: Optional[str] = None
    pages: Tuple[PageMapping, ...] = field(default_factory=tuple)

    def resolve_file(self, mapping: PageMapping) -> Path:
        """Absolute path of a mapping's source file."""
        root = Path(self.file_root) if self.file_root else Path(os.getcwd())
        return (root / mapping.file).resolve()
