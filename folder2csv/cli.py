"""
folder2csv - CLI Interface.

A command-line interface for listing every file under a folder into a CSV
file, one row per file with its size, modification time and content hash.

Usage Examples:
    # Scan a folder; the CSV goes to ~/Desktop/data.csv (or data(1).csv, ...)
    python -m folder2csv scan /path/to/data

    # Prompt for the folder interactively
    python -m folder2csv scan

    # Choose the output file and the number of worker threads
    python -m folder2csv scan /path/to/data --output listing.csv --workers 4

    # Write a run report and show debug messages
    python -m folder2csv scan /path/to/data --log-file scan.log --verbose
"""

import errno
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from folder2csv import __version__
from folder2csv.errors import FatalInputError, FatalOutputError
from folder2csv.orchestration import ScanOrchestrator
from folder2csv.ui import ScanTUI

# Initialize Typer app
app = typer.Typer(
    name="folder2csv",
    help="folder2csv - List every file under a folder into a CSV file.",
    add_completion=False,
    no_args_is_help=True,
)

# Rich console for consistent output formatting
console = Console()


def configure_logging(verbose: bool) -> None:
    """
    Route the package loggers through Rich on stderr.

    Args:
        verbose: Show DEBUG messages instead of only warnings and errors.
    """
    package_logger = logging.getLogger("folder2csv")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.addHandler(
        RichHandler(console=Console(stderr=True), show_path=False, markup=False)
    )
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(f"folder2csv v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """folder2csv - List every file under a folder into a CSV file."""
    pass


@app.command()
def scan(
    root: Optional[str] = typer.Argument(
        None,
        help="Folder to scan. Prompted for when omitted.",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="CSV file to write. A numeric suffix is added if it exists. "
        "Defaults to data.csv on the Desktop.",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        min=1,
        envvar="FOLDER2CSV_WORKERS",
        help="Number of worker threads. Defaults to CPU count minus one.",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        "-l",
        help="Path for a scan report file.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        help="Enable verbose output.",
    ),
) -> None:
    """
    Write one CSV row per file found under ROOT.

    Each row holds the file's path, folder, name, modification time, size
    and XXH64 content hash. Folders that cannot be read are skipped and
    reported at the end.

    Exit status is 0 whenever a CSV was written, including a partial CSV
    left by Ctrl+C during the scan; 1 when the folder or the output file is
    unusable; 130 when interrupted before any output existed.
    """
    configure_logging(verbose)
    tui = ScanTUI(console=console)

    if root is None:
        root = tui.prompt_root_path()

    try:
        orchestrator = ScanOrchestrator(
            root_path=root,
            output_path=output,
            concurrency=workers,
            log_file_path=log_file,
            tui=tui,
        )
    except FatalInputError as e:
        console.print(f"[red]Error:[/red] {e}")
        console.print(
            "[dim]Please check the path and ensure the folder is available offline.[/dim]"
        )
        raise typer.Exit(1)

    try:
        summary = orchestrator.run()

    except KeyboardInterrupt:
        console.print("\n[yellow]Scan interrupted by user.[/yellow]")
        raise typer.Exit(130)

    except FatalOutputError as e:
        console.print(f"[red]Error:[/red] {e}")
        if getattr(e.__cause__, "errno", None) == errno.ENOSPC:
            console.print("[dim]Disk full - free up space and retry.[/dim]")
        raise typer.Exit(1)

    if summary.interrupted:
        console.print("[yellow]Scan interrupted by user. Partial CSV saved.[/yellow]")
    else:
        console.print("[green]CSV saved successfully![/green]")
    if summary.log_file_path is not None:
        console.print(f"[dim]Log written to: {summary.log_file_path}[/dim]")


if __name__ == "__main__":
    app()
