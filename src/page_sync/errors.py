"""Typed exception hierarchy for page sync errors."""

from typing import TYPE_CHECKING

from src.confluence_client.errors import SyncError

if TYPE_CHECKING:
    from .models import PageOutcome


class PageSyncFailure(SyncError):
    """Base exception for failures while syncing pages."""
    pass


class LocalFileNotFoundError(PageSyncFailure):
    """Raised when a page's source file cannot be accessed."""

    def __init__(self, file: str, resolved_path: str):
        super().__init__(f"File {file} not found at {resolved_path}")
        self.file = file
        self.resolved_path = resolved_path


class LocalFileDecodeError(PageSyncFailure):
    """Raised when a page's source file is not valid UTF-8."""

    def __init__(self, file: str, resolved_path: str, reason: str):
        super().__init__(f"File {file} at {resolved_path} is not valid UTF-8: {reason}")
        self.file = file
        self.resolved_path = resolved_path


class PageSyncError(PageSyncFailure):
    """Raised when one page fails; carries the failed outcome.

    The root cause is chained as __cause__ and its message is kept
    verbatim in outcome.error.
    """

    def __init__(self, outcome: "PageOutcome"):
        super().__init__(
            f"Error syncing {outcome.file_path} to Confluence page "
            f"{outcome.page_id}: {outcome.error}"
        )
        self.outcome = outcome


class BatchAbortedError(PageSyncFailure):
    """Raised by a fail-fast batch on the first failed page."""

    def __init__(self, outcome: "PageOutcome"):
        super().__init__(
            f"Batch stopped after page {outcome.page_id} failed: {outcome.error}"
        )
        self.outcome = outcome
