"""Command-line interface for Confluence page sync.

This package provides the `confluence-page-sync` CLI tool that loads a page
mapping configuration and publishes each mapped file to Confluence, with
dry-run and validate-only modes.
"""

from .models import ExitCode
from .output import OutputHandler
from .sync_command import SyncCommand

__all__ = [
    'ExitCode',
    'OutputHandler',
    'SyncCommand',
]
