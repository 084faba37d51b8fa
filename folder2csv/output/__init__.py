"""CSV output package for folder2csv.

This package provides the RowSink class, which serializes Records to a CSV
file with one writer at a time, plus the helpers it relies on:

- formatting: column names and Record-to-row conversion (hyperlink formula,
  human-readable size, timestamp format).
- output_path: default output folder and collision-free file names.

Example:
    >>> from folder2csv.output import RowSink, default_output_dir, unique_output_path
    >>> path = unique_output_path(default_output_dir())
    >>> with RowSink(path) as sink:
    ...     sink.write_header()
    ...     sink.write(record)
"""

from .formatting import (
    COLUMNS,
    format_duration,
    format_hyperlink,
    format_modified,
    format_size,
    record_to_row,
)
from .output_path import default_output_dir, unique_output_path
from .row_sink import RowSink

__all__ = [
    "COLUMNS",
    "RowSink",
    "default_output_dir",
    "format_duration",
    "format_hyperlink",
    "format_modified",
    "format_size",
    "record_to_row",
    "unique_output_path",
]
