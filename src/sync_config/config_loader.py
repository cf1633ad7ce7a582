"""Configuration loading and validation.

This module turns the configuration object (a JSON document, or YAML for
.yaml/.yml files) into a validated SyncConfiguration. Validation happens
up front so a malformed configuration aborts the run before any remote call.

Configuration structure:
    {
      "baseUrl": "https://wiki.example.com",
      "personalAccessToken": "...",
      "prefix": "Generated from git, do not edit.",
      "fileRoot": "./docs",
      "pages": [
        {"pageId": "123456", "file": "README.md", "title": "Readme"},
        {"pageId": "new-guide", "file": "guide.md", "spaceKey": "DOC"}
      ]
    }
"""

import dataclasses
import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import ConfigFileError, ConfigValidationError
from .models import PageMapping, SyncConfiguration

# Environment variable holding the whole configuration document
CONFIG_ENV_VAR = "INPUT_FILE_MAPPINGS"

# Environment variables that fill credentials missing from the document
CREDENTIAL_ENV_VARS = {
    'personal_access_token': 'CONFLUENCE_PERSONAL_ACCESS_TOKEN',
    'user': 'CONFLUENCE_USER',
    'password': 'CONFLUENCE_PASS',
}


class ConfigLoader:
    """Handles configuration loading and validation.

    Field names follow the camelCase keys of the configuration document;
    the resulting models use snake_case attributes.
    """

    REQUIRED_TOP_LEVEL_FIELDS = {'baseUrl', 'pages'}

    REQUIRED_PAGE_FIELDS = {'pageId', 'file'}

    OPTIONAL_STRING_FIELDS = {
        'user': 'user',
        'pass': 'password',
        'personalAccessToken': 'personal_access_token',
        'prefix': 'prefix',
        'fileRoot': 'file_root',
    }

    OPTIONAL_PAGE_STRING_FIELDS = {
        'title': 'title',
        'spaceKey': 'space_key',
        'parentId': 'parent_id',
    }

    DEFAULTS = {
        'cachePath': 'build',
        'insecure': False,
        'force': False,
    }

    @classmethod
    def load(cls, config_path: str) -> SyncConfiguration:
        """Load and parse configuration from a JSON or YAML file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Validated SyncConfiguration

        Raises:
            ConfigFileError: If file cannot be read
            ConfigValidationError: If configuration is invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise ConfigFileError(
                config_path,
                'read',
                'Configuration file not found'
            )
        except PermissionError:
            raise ConfigFileError(
                config_path,
                'read',
                'Permission denied'
            )
        except OSError as e:
            raise ConfigFileError(
                config_path,
                'read',
                str(e)
            )

        if Path(config_path).suffix.lower() in ('.yaml', '.yml'):
            try:
                config_dict = yaml.safe_load(content)
            except yaml.YAMLError as e:
                raise ConfigValidationError(f"Invalid YAML syntax: {str(e)}")
        else:
            config_dict = cls._parse_json(content)

        return cls.from_dict(config_dict)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        var_name: str = CONFIG_ENV_VAR,
    ) -> SyncConfiguration:
        """Load configuration from a JSON document in an environment variable.

        Raises:
            ConfigValidationError: If the variable is unset, empty or invalid
        """
        environ = os.environ if environ is None else environ
        content = environ.get(var_name, '')
        if not content.strip():
            raise ConfigValidationError(
                f"No configuration provided. Use --config or set {var_name}."
            )
        return cls.from_dict(cls._parse_json(content))

    @classmethod
    def with_env_credentials(
        cls,
        config: SyncConfiguration,
        environ: Optional[Mapping[str, str]] = None,
    ) -> SyncConfiguration:
        """Fill credentials missing from the document from the environment."""
        environ = os.environ if environ is None else environ
        updates = {}
        for attr, env_name in CREDENTIAL_ENV_VARS.items():
            if not getattr(config, attr) and environ.get(env_name):
                updates[attr] = environ[env_name]
        if not updates:
            return config
        return dataclasses.replace(config, **updates)

    @classmethod
    def _parse_json(cls, content: str) -> Any:
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid JSON syntax: {str(e)}")

    @classmethod
    def from_dict(cls, config_dict: Any) -> SyncConfiguration:
        """Validate a configuration dictionary.

        Args:
            config_dict: Raw configuration object

        Returns:
            Validated SyncConfiguration

        Raises:
            ConfigValidationError: If configuration is invalid
        """
        if config_dict is None:
            raise ConfigValidationError("Configuration is empty")

        if not isinstance(config_dict, dict):
            raise ConfigValidationError(
                f"Configuration must be an object, got {type(config_dict).__name__}"
            )

        missing_fields = cls.REQUIRED_TOP_LEVEL_FIELDS - set(config_dict.keys())
        if missing_fields:
            raise ConfigValidationError(
                f"Missing required fields: {', '.join(sorted(missing_fields))}"
            )

        base_url = cls._required_string(config_dict, 'baseUrl', 'baseUrl')

        options: Dict[str, Any] = {}
        for key, attr in cls.OPTIONAL_STRING_FIELDS.items():
            options[attr] = cls._optional_string(config_dict, key, key)

        cache_path = config_dict.get('cachePath', cls.DEFAULTS['cachePath'])
        if not isinstance(cache_path, str):
            raise ConfigValidationError(
                f"Field must be a string, got {type(cache_path).__name__}",
                'cachePath'
            )

        for key in ('insecure', 'force'):
            value = config_dict.get(key, cls.DEFAULTS[key])
            if not isinstance(value, bool):
                raise ConfigValidationError(
                    f"Field must be a boolean, got {type(value).__name__}",
                    key
                )
            options[key] = value

        pages_raw = config_dict['pages']
        if not isinstance(pages_raw, list):
            raise ConfigValidationError("Field 'pages' must be a list", 'pages')

        pages = tuple(
            cls._parse_page(page_dict, i) for i, page_dict in enumerate(pages_raw)
        )

        return SyncConfiguration(
            base_url=base_url,
            cache_path=cache_path,
            pages=pages,
            **options,
        )

    @classmethod
    def _parse_page(cls, page_dict: Any, index: int) -> PageMapping:
        """Validate one entry of the pages list."""
        field_prefix = f'pages[{index}]'

        if not isinstance(page_dict, dict):
            raise ConfigValidationError(
                f"Page configuration at index {index} must be an object",
                field_prefix
            )

        missing = cls.REQUIRED_PAGE_FIELDS - set(page_dict.keys())
        if missing:
            raise ConfigValidationError(
                f"Missing required fields in page {index}: {', '.join(sorted(missing))}",
                field_prefix
            )

        page_id = cls._required_string(page_dict, 'pageId', f'{field_prefix}.pageId')
        file = cls._required_string(page_dict, 'file', f'{field_prefix}.file')

        optional = {
            attr: cls._optional_string(page_dict, key, f'{field_prefix}.{key}')
            for key, attr in cls.OPTIONAL_PAGE_STRING_FIELDS.items()
        }

        return PageMapping(page_id=page_id, file=file, **optional)

    @staticmethod
    def _required_string(data: Dict[str, Any], key: str, field_name: str) -> str:
        value = data.get(key)
        if not isinstance(value, str):
            raise ConfigValidationError(
                f"Field must be a string, got {type(value).__name__}",
                field_name
            )
        if not value.strip():
            raise ConfigValidationError("Field cannot be empty", field_name)
        return value

    @staticmethod
    def _optional_string(data: Dict[str, Any], key: str, field_name: str) -> Optional[str]:
        value = data.get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise ConfigValidationError(
                f"Field must be a string, got {type(value).__name__}",
                field_name
            )
        return value
