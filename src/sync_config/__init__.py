"""Sync configuration: page mappings and global settings.

This package loads the configuration object that drives a sync run and
validates it before anything touches the remote service.
"""

from .config_loader import ConfigLoader
from .errors import ConfigError, ConfigFileError, ConfigValidationError
from .models import PageMapping, SyncConfiguration

__all__ = [
    'ConfigLoader',
    'ConfigError',
    'ConfigFileError',
    'ConfigValidationError',
    'PageMapping',
    'SyncConfiguration',
]
