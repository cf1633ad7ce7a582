"""Sync command orchestration.

This module provides the SyncCommand class that wires configuration,
authentication, the API client and the batch runner together, runs the
selected mode (sync, dry run or validate-only) and translates failures into
exit codes.
"""

import logging
from typing import Optional

from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.confluence_client.api_wrapper import APIWrapper
from src.confluence_client.auth import Authenticator
from src.confluence_client.errors import (
    APIUnreachableError,
    AuthConfigurationError,
    InvalidCredentialsError,
)
from src.page_sync.batch_runner import BatchRunner
from src.page_sync.errors import BatchAbortedError
from src.page_sync.models import BatchResult
from src.page_sync.orchestrator import PageSyncOrchestrator
from src.page_sync.validator import ConnectionValidator
from src.sync_config.config_loader import ConfigLoader
from src.sync_config.errors import ConfigError
from src.sync_config.models import SyncConfiguration

logger = logging.getLogger(__name__)


class SyncCommand:
    """Runs one invocation of confluence-page-sync.

    Dependencies can be injected for testing; otherwise they are built from
    the loaded configuration.

    Example:
        >>> cmd = SyncCommand(output_handler=OutputHandler())
        >>> exit_code = cmd.run(config_path="sync.json", dry_run=True)
    """

    def __init__(
        self,
        output_handler: Optional[OutputHandler] = None,
        api: Optional[APIWrapper] = None,
    ):
        self.output_handler = output_handler or OutputHandler()
        self.api = api

    def run(
        self,
        config_path: Optional[str] = None,
        dry_run: bool = False,
        validate_only: bool = False,
        stop_on_first_failure: bool = False,
    ) -> ExitCode:
        """Execute the command.

        Args:
            config_path: JSON/YAML configuration file; when None the document
                is read from the INPUT_FILE_MAPPINGS environment variable
            dry_run: Compare with the remote without writing
            validate_only: Check mappings and connectivity only
            stop_on_first_failure: Abort the batch on the first failed page

        Returns:
            ExitCode indicating success or specific failure type
        """
        output = self.output_handler
        try:
            config = self._load_config(config_path)
            api = self.api or self._build_api(config)

            if validate_only:
                return self._run_validate(config, api)
            return self._run_sync(config, api, dry_run, stop_on_first_failure)

        except ConfigError as e:
            logger.error(f"Configuration error: {e}")
            output.error(f"Configuration error: {e}")
            return ExitCode.GENERAL_ERROR

        except (AuthConfigurationError, InvalidCredentialsError) as e:
            logger.error(f"Authentication failed: {e}")
            output.error(f"Authentication failed: {e}")
            output.info(
                "Set personalAccessToken (or CONFLUENCE_PERSONAL_ACCESS_TOKEN), "
                "or user and pass (CONFLUENCE_USER, CONFLUENCE_PASS)"
            )
            return ExitCode.AUTH_ERROR

        except APIUnreachableError as e:
            logger.error(f"API error: {e}")
            output.error(f"API error: {e}")
            output.info("Check the baseUrl and your network connection and try again")
            return ExitCode.NETWORK_ERROR

        except Exception as e:
            logger.exception("Unexpected error during sync")
            output.error(f"Unexpected error: {e}")
            return ExitCode.GENERAL_ERROR

    def _load_config(self, config_path: Optional[str]) -> SyncConfiguration:
        if config_path:
            logger.info(f"Loading configuration from {config_path}")
            self.output_handler.info(f"Loading configuration from {config_path}")
            config = ConfigLoader.load(config_path)
        else:
            logger.info("Loading configuration from environment")
            config = ConfigLoader.from_env()

        config = ConfigLoader.with_env_credentials(config)
        logger.info(f"Loaded config with {len(config.pages)} page(s)")
        return config

    def _build_api(self, config: SyncConfiguration) -> APIWrapper:
        authenticator = Authenticator.from_config(config)
        logger.debug(f"Using {authenticator.scheme} authentication")
        if config.insecure:
            logger.warning("TLS certificate verification is disabled")
        return APIWrapper(config.base_url, authenticator, insecure=config.insecure)

    def _run_validate(self, config: SyncConfiguration, api: APIWrapper) -> ExitCode:
        output = self.output_handler
        validator = ConnectionValidator(config, api)

        with output.spinner(f"Validating {len(config.pages)} page(s)..."):
            checks = validator.validate()

        output.print_validation_report(checks)

        if not all(check.ok for check in checks):
            return ExitCode.SYNC_FAILED
        return ExitCode.SUCCESS

    def _run_sync(
        self,
        config: SyncConfiguration,
        api: APIWrapper,
        dry_run: bool,
        stop_on_first_failure: bool,
    ) -> ExitCode:
        output = self.output_handler
        orchestrator = PageSyncOrchestrator(config, api, dry_run=dry_run)
        runner = BatchRunner(orchestrator, stop_on_first_failure=stop_on_first_failure)

        if dry_run:
            output.info("Dry run: no changes will be written to Confluence")

        try:
            with output.spinner(f"Syncing {len(config.pages)} page(s)..."):
                result = runner.run(config.pages)
        except BatchAbortedError as e:
            output.error(str(e))
            output.print_page_outputs(e.outcome)
            return self._exit_code_for_abort(e)

        for outcome in result.outcomes:
            if outcome.succeeded:
                output.success(f"{outcome.file_path} → page {outcome.page_id}")
            else:
                output.error(f"{outcome.file_path} → page {outcome.page_id}")
            output.print_page_outputs(outcome)

        output.print_batch_summary(result, dry_run=dry_run)
        return self._exit_code_for_result(result)

    def _exit_code_for_result(self, result: BatchResult) -> ExitCode:
        return ExitCode.SUCCESS if result.ok else ExitCode.SYNC_FAILED

    @staticmethod
    def _exit_code_for_abort(error: BatchAbortedError) -> ExitCode:
        """Map the cause chain of an aborted batch to an exit code."""
        cause = error.__cause__
        while cause is not None:
            if isinstance(cause, (InvalidCredentialsError, AuthConfigurationError)):
                return ExitCode.AUTH_ERROR
            if isinstance(cause, APIUnreachableError):
                return ExitCode.NETWORK_ERROR
            cause = cause.__cause__
        return ExitCode.SYNC_FAILED
