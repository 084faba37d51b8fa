"""ScanLogger for writing a structured report of a scan run.

This module provides the ScanLogger class that generates a section-based
text report: header, scan settings, issues grouped by kind, and summary.
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional, TextIO

from folder2csv.models import IssueKind, ScanIssue, ScanSummary
from folder2csv.output import format_duration


class ScanLogger:
    """Logger for scan runs with structured output format.

    Usage:
        with ScanLogger(log_file_path=Path("scan.log")) as logger:
            logger.log_header()
            logger.log_scan_settings(root_path, output_path, concurrency)
            logger.log_issues(summary.issues)
            logger.log_summary(summary)

    Attributes:
        SEPARATOR: The 65-character separator line used between sections.
    """

    SEPARATOR = "=" * 65

    def __init__(self, log_file_path: Optional[Path] = None) -> None:
        """Initialize the ScanLogger.

        Args:
            log_file_path: Optional path for the log file. If not provided,
                generates a timestamped filename in the current directory.

        Raises:
            OSError: If the log file path is not writable.
        """
        self._start_timestamp = datetime.now()
        self._file_handle: Optional[TextIO] = None

        if log_file_path is None:
            timestamp_str = self._start_timestamp.strftime("%Y-%m-%d_%H-%M-%S")
            self._log_file_path = Path.cwd() / f"scan_log_{timestamp_str}.log"
        else:
            self._log_file_path = Path(log_file_path)

        self._validate_path()

    def _validate_path(self) -> None:
        """Validate that the log file's parent directory is usable.

        Raises:
            OSError: If the parent directory doesn't exist or is not writable.
        """
        parent = self._log_file_path.parent
        if not parent.exists():
            raise OSError(f"Parent directory does not exist: {parent}")
        if not parent.is_dir():
            raise OSError(f"Parent path is not a directory: {parent}")
        try:
            test_file = parent / f".folder2csv_test_{id(self)}"
            test_file.touch()
            test_file.unlink()
        except PermissionError:
            raise OSError(f"Permission denied: cannot write to {parent}")

    def __enter__(self) -> "ScanLogger":
        """Enter the context manager, opening the log file.

        Raises:
            OSError: If the file cannot be opened for writing.
        """
        try:
            self._file_handle = open(self._log_file_path, "w", encoding="utf-8")
        except OSError as e:
            raise OSError(f"Cannot open log file for writing: {e}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit the context manager, closing the log file."""
        if self._file_handle is not None:
            try:
                self._file_handle.close()
            except OSError as e:
                print(f"Warning: Error closing log file: {e}", file=sys.stderr)
            finally:
                self._file_handle = None

    def get_log_path(self) -> Path:
        """Get the path to the log file."""
        return self._log_file_path

    def log_header(self) -> None:
        """Write the title and start timestamp."""
        self._write_separator()
        self._write_line("folder2csv - Scan Log")
        self._write_separator()
        self._write_line(f"Timestamp: {self._format_timestamp(self._start_timestamp)}")
        self._write_line("")

    def log_scan_settings(self, root_path: Path, output_path: Path, concurrency: int) -> None:
        """Write the scan settings section.

        Args:
            root_path: Resolved root folder.
            output_path: CSV file being written.
            concurrency: Number of worker threads.
        """
        self._write_separator()
        self._write_line("SCAN SETTINGS")
        self._write_separator()
        self._write_line(f"Root Path: {root_path}")
        self._write_line(f"Output File: {output_path}")
        self._write_line(f"Workers: {concurrency}")
        self._write_line("")

    def log_issues(self, issues: List[ScanIssue]) -> None:
        """Write every recoverable issue, grouped by kind.

        Args:
            issues: Issues collected during the scan.
        """
        self._write_separator()
        self._write_line("ISSUES")
        self._write_separator()

        if not issues:
            self._write_line("None")
            self._write_line("")
            return

        for kind in IssueKind:
            group = [issue for issue in issues if issue.kind is kind]
            if not group:
                continue
            self._write_line(f"{kind.value} ({len(group)}):")
            for issue in group:
                self._write_line(f"- {issue.path}: {issue.message}", indent=2)
            self._write_line("")

    def log_summary(self, summary: ScanSummary) -> None:
        """Write the summary section.

        Args:
            summary: The ScanSummary of the run.
        """
        self._write_separator()
        self._write_line("SUMMARY")
        self._write_separator()
        self._write_line(f"Files discovered: {summary.files_discovered:,}")
        self._write_line(f"Rows written: {summary.records_written:,}")
        self._write_line(f"Total bytes: {summary.total_bytes:,}")
        self._write_line(f"Directories scanned: {summary.directories_scanned:,}")
        self._write_line(f"Directories skipped: {summary.directories_skipped}")
        self._write_line(f"Files skipped: {summary.files_skipped}")
        self._write_line(f"Hashes failed: {summary.hashes_failed}")
        if summary.interrupted:
            self._write_line("Status: INTERRUPTED")
        self._write_line(f"Duration: {format_duration(summary.duration_seconds)}")
        self._write_line("")
        self._write_line(f"Output file: {summary.output_path}")
        self._write_line(f"Log file: {self._log_file_path}")
        self._write_separator()

    def _format_timestamp(self, dt: datetime) -> str:
        return dt.strftime("%Y-%m-%d %H:%M:%S")

    def _write_separator(self) -> None:
        self._write_line(self.SEPARATOR)

    def _write_line(self, text: str, indent: int = 0) -> None:
        """Write a line to the log file with optional indentation.

        Args:
            text: The text to write.
            indent: Number of spaces to indent the line.
        """
        if self._file_handle is None:
            print(
                f"Warning: Attempted to write to closed log file: {text}",
                file=sys.stderr,
            )
            return

        try:
            self._file_handle.write(" " * indent + text + "\n")
        except OSError as e:
            print(f"Warning: Error writing to log file: {e}", file=sys.stderr)
