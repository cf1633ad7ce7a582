"""Typed exception hierarchy for configuration errors.

All exceptions inherit from ConfigError so callers can abort a run on any
configuration problem before a single remote call is made.
"""

from typing import Optional

from src.confluence_client.errors import SyncError


class ConfigError(SyncError):
    """Base exception for all configuration errors."""
    pass


class ConfigFileError(ConfigError):
    """Raised when the configuration file cannot be read."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Configuration file operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason


class ConfigValidationError(ConfigError):
    """Raised when the configuration object is malformed."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message
