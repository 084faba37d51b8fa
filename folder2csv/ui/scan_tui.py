"""Terminal User Interface for folder2csv.

This module provides the ScanTUI class, a Rich-based front end for prompting
for the root folder, showing scan progress and presenting the final summary.

Example:
    from folder2csv.ui import ScanTUI

    tui = ScanTUI()
    root = tui.prompt_root_path()
    progress, callback = tui.create_progress_callback()
    with progress:
        ...
    tui.display_summary(summary)
"""

from collections import Counter
from pathlib import Path
from typing import Callable, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.prompt import Prompt
from rich.table import Table

from folder2csv.models import IssueKind, ScanIssue, ScanSummary
from folder2csv.output import format_duration, format_size

_ISSUE_LABELS = {
    IssueKind.DIRECTORY_UNREADABLE: "Directory unreadable",
    IssueKind.FILE_VANISHED: "File vanished",
    IssueKind.CONTENT_UNREADABLE: "Content unreadable",
}


class ScanTUI:
    """Rich-based Terminal User Interface for scan runs.

    Args:
        console: Optional Rich Console instance for output. If None, creates
            a new Console. Pass a custom Console for testing (e.g., with
            StringIO file for output capture).

    Attributes:
        console: The Rich Console instance used for all output.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def prompt_root_path(self) -> str:
        """Ask the user for the folder to scan.

        Returns:
            The entered text, with surrounding quotes and spaces removed.
        """
        answer = Prompt.ask("Enter root folder path", console=self.console, default="")
        return answer.strip('" ')

    def display_scan_start(self, root_path: Path, output_path: Path, concurrency: int) -> None:
        """Show where the scan starts and where the CSV will be written.

        Args:
            root_path: Resolved root folder.
            output_path: CSV file that will be created.
            concurrency: Number of worker threads.
        """
        self.console.print(f"Scanning: [cyan]{root_path}[/cyan]")
        self.console.print(f"CSV will be saved as: [cyan]{output_path}[/cyan]")
        self.console.print(f"[dim]Workers: {concurrency}[/dim]")

    def create_progress_callback(self) -> tuple[Progress, Callable[[int], None]]:
        """Create a progress display and callback for counting written rows.

        The total number of files is not known while the walk is running, so
        the display is a spinner with a running count rather than a bar.

        Returns:
            tuple[Progress, Callable[[int], None]]: A tuple containing:
                - Progress: Rich Progress instance that MUST be used as a
                  context manager (with statement).
                - callback: Accepts the number of rows written so far.

        Example:
            progress, callback = tui.create_progress_callback()
            with progress:
                for count, record in enumerate(records, start=1):
                    sink.write(record)
                    callback(count)
        """
        progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        )
        task_id = progress.add_task("Scanning files: 0", total=None)

        def callback(completed: int) -> None:
            progress.update(
                task_id,
                completed=completed,
                description=f"Scanning files: {completed:,}",
            )

        return progress, callback

    def display_summary(self, summary: ScanSummary) -> None:
        """Display final statistics after the scan completes.

        Args:
            summary: ScanSummary of the run.
        """
        if summary.interrupted:
            header_panel = Panel(
                "Scan interrupted - the CSV holds the rows written so far.",
                title="Scan Summary",
                border_style="yellow",
            )
        else:
            header_panel = Panel(
                f"CSV saved to {summary.output_path}",
                title="Scan Summary",
                border_style="green",
            )
        self.console.print(header_panel)

        table = Table(show_header=True, header_style="bold")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")

        table.add_row("Files discovered", f"{summary.files_discovered:,}")
        table.add_row("Rows written", f"{summary.records_written:,}")
        table.add_row("Total size", format_size(summary.total_bytes))
        table.add_row("Directories scanned", f"{summary.directories_scanned:,}")
        table.add_row("Directories skipped", f"{summary.directories_skipped:,}")
        table.add_row("Files skipped", f"{summary.files_skipped:,}")
        table.add_row("Hashes failed", f"{summary.hashes_failed:,}")
        table.add_row("Workers", str(summary.concurrency))

        self.console.print(table)

        if summary.issues:
            self._display_issues(summary.issues)

        self.console.print(f"Time taken: {self.format_duration(summary.duration_seconds)}")

    def _display_issues(self, issues: List[ScanIssue]) -> None:
        """Display recoverable issues in a separate panel.

        Args:
            issues: Issues collected during the scan.
        """
        max_display = 10
        counts = Counter(issue.kind for issue in issues)
        breakdown = ", ".join(
            f"{_ISSUE_LABELS[kind]}: {counts[kind]}" for kind in IssueKind if counts[kind]
        )

        lines = [f"- {_ISSUE_LABELS[i.kind]}: {i.path} ({i.message})" for i in issues[:max_display]]
        issue_text = breakdown + "\n\n" + "\n".join(lines)
        remaining = len(issues) - max_display
        if remaining > 0:
            issue_text += f"\n\n... and {remaining} more issues"

        issue_panel = Panel(
            issue_text,
            title=f"Issues ({len(issues)})",
            border_style="yellow",
        )
        self.console.print(issue_panel)

    @staticmethod
    def format_duration(seconds: float) -> str:
        """Convert seconds to an 'hh:mm:ss' string.

        Args:
            seconds: Duration in seconds.

        Returns:
            Formatted duration, e.g. "00:05:23".
        """
        return format_duration(seconds)
