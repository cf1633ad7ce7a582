"""Page sync: publish local files to Confluence pages.

The orchestrator syncs one mapping; the batch runner fans a configuration's
mappings out over a thread pool; the validator checks mappings read-only.
"""

from .batch_runner import BatchRunner
from .errors import (
    BatchAbortedError,
    LocalFileDecodeError,
    LocalFileNotFoundError,
    PageSyncError,
    PageSyncFailure,
)
from .models import (
    BatchResult,
    PageCheck,
    PageOutcome,
    SyncAction,
    SyncPhase,
    SyncStatus,
)
from .orchestrator import PageSyncOrchestrator
from .page_logger import PageLogger
from .validator import ConnectionValidator

__all__ = [
    'BatchRunner',
    'BatchAbortedError',
    'LocalFileDecodeError',
    'LocalFileNotFoundError',
    'PageSyncError',
    'PageSyncFailure',
    'BatchResult',
    'PageCheck',
    'PageOutcome',
    'SyncAction',
    'SyncPhase',
    'SyncStatus',
    'PageSyncOrchestrator',
    'PageLogger',
    'ConnectionValidator',
]
