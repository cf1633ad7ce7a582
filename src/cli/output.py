"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output:
colored status lines, a spinner for long-running work, the batch summary,
per-page outputs and the validation report.
"""

from contextlib import contextmanager
from typing import Iterator, List

from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.spinner import Spinner
from rich.table import Table

from src.page_sync.models import BatchResult, PageCheck, PageOutcome, SyncAction


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Output verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Operation completed")
        >>> with handler.spinner("Syncing pages..."):
        ...     pass
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            force_terminal=not no_color,
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {escape(message)}", style="red")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(message, markup=False)

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner while a block runs.

        Example:
            >>> with handler.spinner("Syncing 3 page(s)..."):
            ...     runner.run(pages)
        """
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.console, refresh_per_second=10):
            yield

    def print_page_outputs(self, outcome: PageOutcome) -> None:
        """Display the outputs of one page (status, page-id, ...).

        Printed at verbosity >= 1 for successes and always for failures.
        """
        if outcome.succeeded and self.verbosity < 1:
            return
        for key, value in outcome.as_outputs().items():
            self.console.print(f"  {key}: {value}", markup=False)

    def print_batch_summary(self, result: BatchResult, dry_run: bool = False) -> None:
        """Display sync summary with color coding.

        Args:
            result: Finished batch
            dry_run: Use "would" wording for actions
        """
        title = "Dry Run Summary" if dry_run else "Sync Summary"
        self.console.print(f"\n[bold]{title}:[/bold]")

        counts = {action: 0 for action in SyncAction}
        for outcome in result.outcomes:
            if outcome.action is not None:
                counts[outcome.action] += 1

        labels = [
            (SyncAction.CREATED, "[green]+[/green] Created"),
            (SyncAction.UPDATED, "[green]↑[/green] Updated"),
            (SyncAction.WOULD_CREATE, "[blue]+[/blue] Would create"),
            (SyncAction.WOULD_UPDATE, "[blue]↑[/blue] Would update"),
            (SyncAction.UNCHANGED, "[dim]─[/dim] Unchanged"),
        ]
        for action, label in labels:
            if counts[action] > 0:
                self.console.print(f"  {label}: {counts[action]} page(s)")

        if result.failed > 0:
            self.console.print(f"  [red]✗[/red] Failed: {result.failed} page(s)")
            for outcome in result.failures:
                self.console.print(
                    f"    • {outcome.file_path} → {outcome.page_id}: {outcome.error}",
                    markup=False,
                )

        if not result.outcomes:
            self.console.print("\n[yellow]No pages to sync[/yellow]")
        elif result.failed > 0:
            self.console.print(
                f"\n[red]Sync finished with {result.failed} failure(s)[/red]"
            )
        else:
            self.console.print("\n[green]Sync completed successfully[/green]")

    def print_validation_report(self, checks: List[PageCheck]) -> None:
        """Display one row per validated page mapping."""
        table = Table(title="Validation")
        table.add_column("Page")
        table.add_column("File")
        table.add_column("Remote")
        table.add_column("Local")
        table.add_column("Notes")

        for check in checks:
            if check.error:
                remote = "[red]error[/red]"
            elif check.remote_found:
                remote = f"[green]{escape(check.remote_title or '')}[/green]"
            else:
                remote = "[yellow]will create[/yellow]"

            local = (
                f"{check.local_size} bytes"
                if check.local_size is not None
                else "[red]missing[/red]"
            )
            notes = "; ".join(([check.error] if check.error else []) + check.warnings)
            table.add_row(
                escape(check.page_id), escape(check.file_path), remote, local, escape(notes)
            )

        self.console.print(table)

        failed = sum(1 for check in checks if not check.ok)
        if failed:
            self.console.print(f"\n[red]{failed} page mapping(s) have problems[/red]")
        else:
            self.console.print("\n[green]All page mappings are valid[/green]")
