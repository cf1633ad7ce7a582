"""Confluence client library for page publishing.

This package provides Python abstractions over the Confluence REST API
content endpoints, enabling clean and type-safe interactions with pages.
"""

from .auth import Authenticator, Credentials
from .api_wrapper import APIWrapper
from .errors import (
    SyncError,
    ConfluenceError,
    AuthConfigurationError,
    InvalidCredentialsError,
    PageNotFoundError,
    SpaceNotFoundError,
    APIUnreachableError,
    RemoteRequestFailed,
    ConversionError,
)

__all__ = [
    "Authenticator",
    "Credentials",
    "APIWrapper",
    "SyncError",
    "ConfluenceError",
    "AuthConfigurationError",
    "InvalidCredentialsError",
    "PageNotFoundError",
    "SpaceNotFoundError",
    "APIUnreachableError",
    "RemoteRequestFailed",
    "ConversionError",
]
