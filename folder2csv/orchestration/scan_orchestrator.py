"""ScanOrchestrator for coordinating a complete folder-to-CSV scan.

This module provides the ScanOrchestrator class, which validates the input,
picks the output file, and wires the pipeline together:

    TreeWalker -> WorkerPool (MetadataExtractor + ContentHasher) -> RowSink

Example:
    from folder2csv.orchestration import ScanOrchestrator

    orchestrator = ScanOrchestrator(root_path="/data", concurrency=4)
    print(f"Writing {orchestrator.output_path}")
    summary = orchestrator.run()
"""

import logging
import os
import time
from pathlib import Path
from typing import List, Optional, Union

from folder2csv.errors import FatalInputError, FatalOutputError
from folder2csv.models import ScanSummary
from folder2csv.output import RowSink, default_output_dir, unique_output_path
from folder2csv.processing import WorkerPool, default_concurrency
from folder2csv.scanning import ContentHasher, MetadataExtractor, TreeWalker
from folder2csv.ui import ScanTUI

from .scan_logger import ScanLogger

logger = logging.getLogger(__name__)

PathInput = Union[str, "os.PathLike[str]"]


def resolve_root_path(root_path: Optional[PathInput]) -> Path:
    """Validate and normalize the folder to scan.

    Surrounding quotes and spaces are removed, as left behind when a path is
    pasted from a file manager.

    Args:
        root_path: Folder entered by the user.

    Returns:
        Absolute, normalized path of an existing directory.

    Raises:
        FatalInputError: If the path is missing, blank, does not exist or is
            not a directory.
    """
    if root_path is None:
        raise FatalInputError("No folder path entered!")

    text = os.fspath(root_path).strip('" ')
    if not text:
        raise FatalInputError("No folder path entered!")

    resolved = Path(os.path.abspath(os.path.expanduser(text)))
    if not resolved.exists():
        raise FatalInputError(f"Root folder not found: {resolved}")
    if not resolved.is_dir():
        raise FatalInputError(f"Root path is not a directory: {resolved}")
    return resolved


def resolve_output_path(output_path: Optional[PathInput] = None) -> Path:
    """Pick a CSV path that does not exist yet.

    Args:
        output_path: Requested CSV file. Defaults to data.csv in
            default_output_dir(). A ".csv" extension is added when the
            requested name has none.

    Returns:
        Absolute path of a file that does not exist.
    """
    if output_path is None:
        return unique_output_path(default_output_dir().absolute())

    requested = Path(os.path.abspath(os.path.expanduser(os.fspath(output_path))))
    if requested.suffix:
        return unique_output_path(requested.parent, requested.stem, requested.suffix)
    return unique_output_path(requested.parent, requested.name, ".csv")


class ScanOrchestrator:
    """Orchestrates a folder scan from root validation to the final summary.

    Input is validated in the constructor, so a bad root folder fails before
    any file is created. run() then streams Records into the CSV as workers
    complete them.

    Attributes:
        root_path: Absolute path of the folder being scanned.
        output_path: CSV file that run() creates.
        concurrency: Number of extraction worker threads.
        log_file_path: Optional path of the run report.
    """

    def __init__(
        self,
        root_path: Optional[PathInput],
        output_path: Optional[PathInput] = None,
        concurrency: Optional[int] = None,
        log_file_path: Optional[PathInput] = None,
        tui: Optional[ScanTUI] = None,
    ) -> None:
        """Initialize the ScanOrchestrator.

        Args:
            root_path: Folder to scan.
            output_path: Requested CSV file; made unique if it already exists.
                Defaults to data.csv on the Desktop (or the current directory).
            concurrency: Number of worker threads. Defaults to
                default_concurrency(); clamped to at least 1.
            log_file_path: Optional path for a structured run report.
            tui: Optional ScanTUI for console output.

        Raises:
            FatalInputError: If root_path is missing, blank, nonexistent or
                not a directory.
        """
        self.root_path = resolve_root_path(root_path)
        self.output_path = resolve_output_path(output_path)
        self.concurrency = max(concurrency if concurrency is not None else default_concurrency(), 1)
        self.log_file_path = (
            Path(os.path.abspath(os.fspath(log_file_path))) if log_file_path is not None else None
        )

        self._tui = tui or ScanTUI()
        self._hasher = ContentHasher()
        self._extractor = MetadataExtractor(self._hasher)

    def run(self) -> ScanSummary:
        """Execute the scan and write the CSV.

        The header row is written once before any data row. Rows appear in
        completion order. A KeyboardInterrupt stops the workers, keeps the
        rows written so far and marks the summary as interrupted.

        Returns:
            ScanSummary with counts, issues and duration.

        Raises:
            FatalOutputError: If the CSV cannot be created or written. A
                partially written file is removed.
        """
        start_time = time.time()
        self._hasher.clear_issues()
        self._extractor.clear_issues()

        sink = self._open_sink()

        walker = TreeWalker(exclude=self._excluded_paths())
        pool = WorkerPool(self._extractor, concurrency=self.concurrency)

        self._tui.display_scan_start(self.root_path, self.output_path, self.concurrency)

        interrupted = False
        total_bytes = 0
        hashes_failed = 0
        records = pool.run(walker.walk(self.root_path))
        try:
            sink.write_header()
            progress, callback = self._tui.create_progress_callback()
            with progress:
                for record in records:
                    sink.write(record)
                    total_bytes += record.size_bytes
                    if not record.content_hash:
                        hashes_failed += 1
                    callback(sink.rows_written)
        except KeyboardInterrupt:
            interrupted = True
            logger.warning("Scan interrupted by user after %d rows", sink.rows_written)
        except Exception:
            sink.discard()
            raise
        finally:
            # Stops the pool threads when the loop did not run to completion
            records.close()

        try:
            sink.close()
        except Exception:
            sink.discard()
            raise

        extractor_issues = self._extractor.get_issues()
        summary = ScanSummary(
            root_path=self.root_path,
            output_path=self.output_path,
            files_discovered=walker.files_found,
            records_written=sink.rows_written,
            directories_scanned=walker.directories_scanned,
            directories_skipped=walker.directories_skipped,
            files_skipped=len(extractor_issues),
            hashes_failed=hashes_failed,
            total_bytes=total_bytes,
            concurrency=self.concurrency,
            duration_seconds=time.time() - start_time,
            issues=walker.get_issues() + extractor_issues + self._hasher.get_issues(),
            interrupted=interrupted,
        )

        if self.log_file_path is not None:
            self._write_log(summary)

        self._tui.display_summary(summary)
        return summary

    def _open_sink(self) -> RowSink:
        """Create the CSV, moving to the next free name if the chosen one
        was taken after the constructor picked it.
        """
        while True:
            sink = RowSink(self.output_path)
            try:
                return sink.open()
            except FatalOutputError as e:
                if not isinstance(e.__cause__, FileExistsError):
                    raise
                logger.warning("Output file appeared before the scan started: %s", self.output_path)
                self.output_path = resolve_output_path(self.output_path)

    def _excluded_paths(self) -> List[Path]:
        excluded = [self.output_path]
        if self.log_file_path is not None:
            excluded.append(self.log_file_path)
        return excluded

    def _write_log(self, summary: ScanSummary) -> None:
        """Write the run report; a failure here never fails the scan."""
        try:
            with ScanLogger(log_file_path=self.log_file_path) as scan_logger:
                scan_logger.log_header()
                scan_logger.log_scan_settings(self.root_path, self.output_path, self.concurrency)
                scan_logger.log_issues(summary.issues)
                scan_logger.log_summary(summary)
            summary.log_file_path = scan_logger.get_log_path()
        except OSError as e:
            logger.warning("Could not write log file: %s", e)
