"""Retry logic with exponential backoff for Confluence API rate limits.

This module provides retry functionality specifically for handling 429 rate limit
responses from the Confluence API. It implements exponential backoff (1s, 2s, 4s)
and fails fast for non-rate-limit errors, including version conflicts.
"""

import logging
import time
from typing import Callable, Optional, TypeVar, Union

from .errors import RemoteRequestFailed

logger = logging.getLogger(__name__)

T = TypeVar('T')

MAX_RETRIES = 3


def retry_on_rate_limit(
    func: Callable[[], T],
    log: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None,
) -> T:
    """Retry function on 429 rate limit with exponential backoff.

    Executes the given function, retrying up to 3 times with exponential
    backoff (1s, 2s, 4s) when a rate limit error is encountered. Fails fast
    for all other errors.

    Args:
        func: The zero-argument function to execute with retry logic
        log: Logger to report retries on (defaults to the module logger)

    Returns:
        The return value of the function

    Raises:
        RemoteRequestFailed: If the rate limit persists after 3 retries
        Other exceptions: Passed through immediately without retry

    Example:
        >>> page = retry_on_rate_limit(lambda: api.fetch("123"))
    """
    log = log or logger

    for retry_num in range(MAX_RETRIES + 1):  # 0, 1, 2, 3 = 4 attempts total
        try:
            return func()
        except RemoteRequestFailed as e:
            if not _is_rate_limit_error(e):
                raise

            if retry_num >= MAX_RETRIES:
                log.error(
                    f"Rate limit persisted after {MAX_RETRIES} retries, giving up"
                )
                raise

            # 1s, 2s, 4s
            wait_time = 2 ** retry_num
            log.info(
                f"Rate limit hit, retrying in {wait_time}s "
                f"(retry {retry_num + 1}/{MAX_RETRIES})"
            )
            time.sleep(wait_time)

    # Unreachable: the last attempt either returns or raises
    raise RuntimeError("retry loop exited without a result")


def _is_rate_limit_error(exception: RemoteRequestFailed) -> bool:
    """Check if a failed request represents a rate limit (429) error."""
    return exception.status_code == 429
