"""Main CLI entry point for confluence-page-sync command.

This module provides the Typer application that serves as the entry point
for the confluence-page-sync command-line tool. It uses options on the main
command rather than subcommands.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from dotenv import find_dotenv, load_dotenv

from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.cli.sync_command import SyncCommand

__version__ = "0.1.0"

app = typer.Typer(
    name="confluence-page-sync",
    help="Publish local Markdown, HTML and text files to Confluence pages.",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=False,
)

# Module logger
logger = logging.getLogger(__name__)


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)
    app_logger.handlers.clear()

    date_format = "%Y-%m-%d %H:%M:%S"
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)8s] %(message)s", datefmt=date_format)
    )
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"confluence-page-sync_{timestamp}.log"

        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(threadName)s - %(levelname)s - %(message)s",
            datefmt=date_format,
        )
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


@app.command()
def main_command(
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="JSON or YAML configuration file (default: INPUT_FILE_MAPPINGS env var)",
        metavar="PATH",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "--dryrun",
        help="Compare with Confluence without writing any changes",
    ),
    validate_only: bool = typer.Option(
        False,
        "--validate-only",
        help="Check configuration, credentials and page mappings only",
    ),
    stop_on_first_failure: bool = typer.Option(
        False,
        "--stop-on-first-failure",
        help="Abort the batch as soon as one page fails",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug logging (same as --verbosity 2)",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
) -> None:
    """Publish local files to Confluence pages.

    \b
    EXAMPLES:
      confluence-page-sync --config sync.json                  # Sync all pages
      confluence-page-sync --config sync.json --dry-run        # Preview changes
      confluence-page-sync --config sync.json --validate-only  # Check mappings

    \b
    Credentials may come from the configuration or from the environment
    (CONFLUENCE_PERSONAL_ACCESS_TOKEN, or CONFLUENCE_USER and CONFLUENCE_PASS).
    A .env file in the working directory is loaded first.
    """
    if version:
        typer.echo(f"confluence-page-sync version {__version__}")
        raise typer.Exit()

    if dry_run and validate_only:
        typer.echo("Error: --dry-run and --validate-only cannot be combined", err=True)
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if debug:
        verbosity = max(verbosity, 2)

    load_dotenv(find_dotenv(usecwd=True))
    _configure_logging(verbosity, logdir)

    output = OutputHandler(verbosity=verbosity, no_color=no_color)
    sync_cmd = SyncCommand(output_handler=output)

    exit_code = sync_cmd.run(
        config_path=config,
        dry_run=dry_run,
        validate_only=validate_only,
        stop_on_first_failure=stop_on_first_failure,
    )

    raise typer.Exit(exit_code)


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
