"""Data models for page sync operations.

This module defines the state machine phases and the outcome records that
flow from the orchestrator back to the batch runner and the CLI.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class SyncPhase(Enum):
    """States a single page sync moves through."""

    INIT = "init"
    READING_FILE = "reading_file"
    FILE_MISSING = "file_missing"
    CONVERTING = "converting"
    FETCHING_REMOTE = "fetching_remote"
    CREATING = "creating"
    UPDATING = "updating"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class SyncStatus(Enum):
    """Terminal status reported for a page."""

    SUCCESS = "success"
    FAILED = "failed"


class SyncAction(Enum):
    """What happened (or would happen in a dry run) to the remote page."""

    CREATED = "created"
    UPDATED = "updated"
    WOULD_CREATE = "would_create"
    WOULD_UPDATE = "would_update"
    UNCHANGED = "unchanged"


@dataclass
class PageOutcome:
    """Result of syncing one page mapping.

    Attributes:
        status: Terminal status
        page_id: Remote page ID (the created page's ID after a create)
        title: Page title that was sent (or would be sent)
        file_path: Source file as configured
        action: Action taken on the remote (None on failure)
        version: Remote version after the write, when known
        error: Original error message on failure
    """
    status: SyncStatus
    page_id: str
    title: str
    file_path: str
    action: Optional[SyncAction] = None
    version: Optional[int] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status is SyncStatus.SUCCESS

    def as_outputs(self) -> Dict[str, str]:
        """Process outputs for this page (status, page-id, page-title, ...)."""
        outputs = {
            'status': self.status.value,
            'page-id': self.page_id,
            'page-title': self.title,
            'file-path': self.file_path,
        }
        if self.error is not None:
            outputs['error'] = self.error
        return outputs


@dataclass
class BatchResult:
    """Outcomes of a batch run, in configuration order.

    Example:
        >>> result = BatchResult(outcomes=[ok_outcome, failed_outcome])
        >>> result.succeeded, result.failed
        (1, 1)
    """
    outcomes: List[PageOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.succeeded)

    @property
    def failed(self) -> int:
        return len(self.outcomes) - self.succeeded

    @property
    def ok(self) -> bool:
        return self.failed == 0

    @property
    def failures(self) -> List[PageOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.succeeded]


@dataclass
class PageCheck:
    """Result of validating one page mapping without writing anything.

    Attributes:
        page_id: Configured page ID
        file_path: Source file as configured
        remote_title: Title of the existing page (None if not found)
        remote_found: Whether the page exists remotely
        local_size: Source file size in bytes (None if missing)
        warnings: Non-fatal problems (e.g. missing spaceKey for a new page)
        error: Fatal problem reaching the remote
    """
    page_id: str
    file_path: str
    remote_title: Optional[str] = None
    remote_found: bool = False
    local_size: Optional[int] = None
    warnings: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.local_size is not None
