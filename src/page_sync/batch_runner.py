"""Concurrent batch runner for page syncs.

Pages are independent, so every mapping is submitted to a thread pool at
once. Two policies decide what a single failure means for the batch:

- collect-all (default): every page runs to completion and failures are
  reported alongside successes
- fail-fast: the first failure raises BatchAbortedError; pages still
  queued or running carry on in the background and go unreported
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Dict, Sequence

from src.sync_config.models import PageMapping

from .errors import BatchAbortedError, PageSyncError
from .models import BatchResult, PageOutcome
from .orchestrator import PageSyncOrchestrator

logger = logging.getLogger(__name__)

# Maximum parallel page syncs
MAX_WORKERS = 10


class BatchRunner:
    """Runs the orchestrator over every page mapping concurrently."""

    def __init__(
        self,
        orchestrator: PageSyncOrchestrator,
        stop_on_first_failure: bool = False,
        max_workers: int = MAX_WORKERS,
    ):
        self.orchestrator = orchestrator
        self.stop_on_first_failure = stop_on_first_failure
        self.max_workers = max_workers

    def run(self, pages: Sequence[PageMapping]) -> BatchResult:
        """Sync all pages.

        Args:
            pages: Page mappings in configuration order

        Returns:
            BatchResult with one outcome per page, in configuration order

        Raises:
            BatchAbortedError: In fail-fast mode, when any page fails
        """
        if not pages:
            logger.info("No pages configured, nothing to sync")
            return BatchResult()

        logger.info(
            f"Syncing {len(pages)} page(s) with up to {self.max_workers} workers"
            + (" (stop on first failure)" if self.stop_on_first_failure else "")
        )

        outcomes: Dict[int, PageOutcome] = {}
        executor = ThreadPoolExecutor(max_workers=self.max_workers)
        try:
            futures: Dict[Future, int] = {
                executor.submit(self.orchestrator.sync, page): index
                for index, page in enumerate(pages)
            }

            for done, future in enumerate(as_completed(futures), 1):
                index = futures[future]
                try:
                    outcomes[index] = future.result()
                except PageSyncError as e:
                    outcomes[index] = e.outcome
                    if self.stop_on_first_failure:
                        logger.error(
                            f"Page {e.outcome.page_id} failed, not reporting "
                            f"remaining pages"
                        )
                        raise BatchAbortedError(e.outcome) from e
                logger.debug(f"Completed {done}/{len(pages)} page(s)")
        finally:
            # An aborted batch returns at once; queued pages still run
            executor.shutdown(wait=not self.stop_on_first_failure)

        result = BatchResult(outcomes=[outcomes[i] for i in range(len(pages))])
        logger.info(
            f"Sync complete: {result.succeeded} succeeded, {result.failed} failed"
        )
        return result
