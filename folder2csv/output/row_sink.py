"""
CSV row sink for the Records produced by a scan.

This module contains the RowSink class, the single owner of the output
stream. Writes are serialized with a lock so rows from concurrent callers
never interleave.
"""

import csv
import logging
import threading
from pathlib import Path
from typing import Callable, List, Optional, TextIO

from folder2csv.errors import FatalOutputError
from folder2csv.models import Record

from .formatting import COLUMNS, record_to_row

logger = logging.getLogger(__name__)


class RowSink:
    """
    Appends one CSV row per Record to an output file.

    The header is written exactly once, by whoever orchestrates the run,
    before any data row. Any failure to create or write the file is fatal
    and raised as FatalOutputError, because a CSV with a missing row in the
    middle cannot be repaired afterwards.

    Usage:
        with RowSink(Path("data.csv")) as sink:
            sink.write_header()
            for record in records:
                sink.write(record)
    """

    def __init__(
        self,
        output_path: Path,
        formatter: Callable[[Record], List[str]] = record_to_row,
        columns: Optional[List[str]] = None,
    ) -> None:
        """
        Create a RowSink for the given destination.

        Parameters:
            output_path (Path): CSV file to create. Opened by open() or on
                entering the context manager.
            formatter (Callable[[Record], List[str]]): Converts a Record to
                cell values.
            columns (Optional[List[str]]): Header row; defaults to COLUMNS.
        """
        self.output_path = Path(output_path)
        self._formatter = formatter
        self._columns = list(columns) if columns is not None else list(COLUMNS)
        self._file_handle: Optional[TextIO] = None
        self._writer = None
        self._lock = threading.Lock()
        self._header_written = False
        self._created = False
        self.rows_written = 0

    def open(self) -> "RowSink":
        """
        Create the output file for writing.

        The file must not exist yet; an existing file is never truncated.

        Returns:
            RowSink: This instance.

        Raises:
            FatalOutputError: If the file cannot be created, including when
                it already exists (the cause is then a FileExistsError).
        """
        try:
            self._file_handle = open(self.output_path, "x", newline="", encoding="utf-8")
        except OSError as e:
            raise FatalOutputError(f"Cannot create output file {self.output_path}: {e}") from e
        self._created = True
        self._writer = csv.writer(self._file_handle)
        logger.debug("Opened output file: %s", self.output_path)
        return self

    def __enter__(self) -> "RowSink":
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def write_header(self) -> None:
        """
        Write the column-name row.

        Raises:
            RuntimeError: If the sink is not open or the header was already written.
            FatalOutputError: If the write fails.
        """
        with self._lock:
            if self._header_written:
                raise RuntimeError("Header row has already been written")
            self._write_row(self._columns)
            self._header_written = True

    def write(self, record: Record) -> None:
        """
        Append one data row for record.

        Safe to call from several threads; each row is written whole.

        Parameters:
            record (Record): The Record to write.

        Raises:
            RuntimeError: If the sink is not open or the header is missing.
            FatalOutputError: If the write fails.
        """
        row = self._formatter(record)
        with self._lock:
            if not self._header_written:
                raise RuntimeError("Header row must be written before data rows")
            self._write_row(row)
            self.rows_written += 1

    def _write_row(self, row: List[str]) -> None:
        if self._writer is None:
            raise RuntimeError(f"Output file is not open: {self.output_path}")
        try:
            self._writer.writerow(row)
        except OSError as e:
            raise FatalOutputError(f"Failed writing to {self.output_path}: {e}") from e

    def close(self) -> None:
        """
        Flush and close the output file. Safe to call more than once.

        Raises:
            FatalOutputError: If buffered rows cannot be flushed.
        """
        with self._lock:
            if self._file_handle is None:
                return
            handle = self._file_handle
            self._file_handle = None
            self._writer = None
            try:
                handle.close()
            except OSError as e:
                raise FatalOutputError(f"Failed closing {self.output_path}: {e}") from e

    def discard(self) -> None:
        """
        Close the output file and delete it.

        Used after a fatal failure so no half-written CSV is left behind.
        Only a file created by this sink is deleted.
        Cleanup is best effort: problems are logged, not raised.
        """
        try:
            self.close()
        except FatalOutputError as e:
            logger.warning("%s", e)
        if not self._created:
            return
        try:
            self.output_path.unlink()
            logger.debug("Removed partial output file: %s", self.output_path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not remove partial output file %s: %s", self.output_path, e)

    @property
    def is_open(self) -> bool:
        """Whether the output file is currently open."""
        return self._file_handle is not None
