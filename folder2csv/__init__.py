"""folder2csv - Folder listing to CSV.

A Python application that walks a folder tree, extracts per-file metadata
and a content hash on a bounded pool of worker threads, and writes one CSV
row per file.
"""

__version__ = "0.1.0"

from .models import (
    IssueKind,
    Record,
    ScanIssue,
    ScanSummary,
)

__all__ = [
    "__version__",
    "IssueKind",
    "Record",
    "ScanIssue",
    "ScanSummary",
]


def main() -> None:
    """Entry point for the folder2csv CLI application.

    This function is called when the `folder2csv` command is invoked after
    package installation via pip. It imports and runs the Typer app from
    the folder2csv.cli module.
    """
    from folder2csv.cli import app
    app()
