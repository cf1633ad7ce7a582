"""Per-page logger handle.

Each orchestrator run builds one PageLogger and passes it explicitly into
every call it makes, so concurrent page syncs interleave in the log with a
prefix naming the page instead of sharing mutable logging context.
"""

import logging
from typing import Any, MutableMapping, Optional, Tuple


class PageLogger(logging.LoggerAdapter):
    """Logger adapter that prefixes messages with the page being synced.

    Example:
        >>> log = PageLogger(logging.getLogger(__name__), "123456")
        >>> log.info("Fetching")  # logs "[page 123456] Fetching"
    """

    def __init__(self, logger: logging.Logger, page_id: str):
        super().__init__(logger, {'page_id': page_id})
        self.page_id = page_id

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        return f"[page {self.page_id}] {msg}", kwargs

    def failure(self, message: str, exc: Optional[BaseException] = None) -> None:
        """Log a failure; the traceback follows at debug level."""
        self.error(message)
        if exc is not None:
            self.debug("Error stack:", exc_info=(type(exc), exc, exc.__traceback__))
