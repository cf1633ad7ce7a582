"""Unit tests for main CLI entry point (main.py).

Tests the Typer CLI application using CliRunner.
"""

import logging
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from src.cli.main import __version__, _configure_logging, app
from src.cli.models import ExitCode


runner = CliRunner()


@pytest.fixture(autouse=True)
def reset_src_logger():
    """Undo handlers and levels _configure_logging installs."""
    app_logger = logging.getLogger("src")
    level, handlers = app_logger.level, list(app_logger.handlers)
    yield
    app_logger.setLevel(level)
    app_logger.handlers[:] = handlers


class TestConfigureLogging:
    """Test cases for _configure_logging function."""

    @pytest.mark.parametrize("verbosity,level", [
        (0, logging.WARNING),
        (1, logging.INFO),
        (2, logging.DEBUG),
        (5, logging.DEBUG),
    ])
    def test_verbosity_sets_level(self, verbosity, level):
        with patch('logging.getLogger') as mock_get_logger:
            mock_logger = MagicMock()
            mock_get_logger.return_value = mock_logger

            _configure_logging(verbosity)

            mock_logger.setLevel.assert_called_with(level)

    def test_logdir_creates_log_file(self, tmp_path):
        logdir = tmp_path / "logs"

        _configure_logging(1, str(logdir))
        logging.getLogger("src.test").info("hello")

        log_files = list(logdir.glob("confluence-page-sync_*.log"))
        assert len(log_files) == 1
        for handler in logging.getLogger("src").handlers:
            handler.flush()
        assert "hello" in log_files[0].read_text(encoding="utf-8")

    def test_reconfiguring_does_not_duplicate_handlers(self):
        _configure_logging(0)
        _configure_logging(0)

        assert len(logging.getLogger("src").handlers) == 1


@patch('src.cli.main.load_dotenv')
@patch('src.cli.main.SyncCommand')
class TestMainCommand:
    """Test cases for option handling."""

    def test_default_run(self, mock_sync_cmd, mock_load_dotenv):
        mock_sync_cmd.return_value.run.return_value = ExitCode.SUCCESS

        result = runner.invoke(app, ["--config", "sync.json"])

        assert result.exit_code == 0
        mock_load_dotenv.assert_called_once()
        mock_sync_cmd.return_value.run.assert_called_once_with(
            config_path="sync.json",
            dry_run=False,
            validate_only=False,
            stop_on_first_failure=False,
        )

    def test_without_config_reads_environment(self, mock_sync_cmd, mock_load_dotenv):
        mock_sync_cmd.return_value.run.return_value = ExitCode.SUCCESS

        runner.invoke(app, [])

        assert mock_sync_cmd.return_value.run.call_args.kwargs["config_path"] is None

    def test_flags_are_passed_through(self, mock_sync_cmd, mock_load_dotenv):
        mock_sync_cmd.return_value.run.return_value = ExitCode.SUCCESS

        runner.invoke(app, ["--dry-run", "--stop-on-first-failure"])

        kwargs = mock_sync_cmd.return_value.run.call_args.kwargs
        assert kwargs["dry_run"] is True
        assert kwargs["stop_on_first_failure"] is True

    def test_validate_only(self, mock_sync_cmd, mock_load_dotenv):
        mock_sync_cmd.return_value.run.return_value = ExitCode.SUCCESS

        runner.invoke(app, ["--validate-only"])

        assert mock_sync_cmd.return_value.run.call_args.kwargs["validate_only"] is True

    def test_exit_code_is_propagated(self, mock_sync_cmd, mock_load_dotenv):
        mock_sync_cmd.return_value.run.return_value = ExitCode.SYNC_FAILED

        result = runner.invoke(app, [])

        assert result.exit_code == ExitCode.SYNC_FAILED

    def test_dry_run_and_validate_only_conflict(self, mock_sync_cmd, mock_load_dotenv):
        result = runner.invoke(app, ["--dry-run", "--validate-only"])

        assert result.exit_code == ExitCode.GENERAL_ERROR
        mock_sync_cmd.assert_not_called()

    @patch('src.cli.main._configure_logging')
    def test_debug_enables_debug_verbosity(
        self, mock_configure, mock_sync_cmd, mock_load_dotenv
    ):
        mock_sync_cmd.return_value.run.return_value = ExitCode.SUCCESS

        runner.invoke(app, ["--debug", "--logdir", "logs"])

        mock_configure.assert_called_once_with(2, "logs")

    def test_version(self, mock_sync_cmd, mock_load_dotenv):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"confluence-page-sync version {__version__}" in result.output
        mock_sync_cmd.assert_not_called()
