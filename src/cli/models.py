"""Data models for CLI operations."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for the confluence-page-sync command.

    - SUCCESS (0): Every page synced (or validated) successfully
    - GENERAL_ERROR (1): Configuration problems and unexpected errors
    - SYNC_FAILED (2): One or more pages failed
    - AUTH_ERROR (3): Credentials missing or rejected
    - NETWORK_ERROR (4): Confluence could not be reached

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    SYNC_FAILED = 2
    AUTH_ERROR = 3
    NETWORK_ERROR = 4
