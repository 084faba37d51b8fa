"""
Row formatting for the CSV output.

Turns a Record into the list of cell values written by RowSink, adding the
two cosmetic columns: an Excel hyperlink formula and a human-readable size.
"""

from datetime import datetime
from typing import List

from folder2csv.models import Record

# Column names, in output order
COLUMNS = [
    "path-link",
    "path",
    "folder",
    "filename",
    "modified",
    "size",
    "pretty-size",
    "extension",
    "hash",
]

_SIZE_UNITS = [
    (1024 ** 4, "TB"),
    (1024 ** 3, "GB"),
    (1024 ** 2, "MB"),
    (1024, "KB"),
]


def format_size(size_bytes: int) -> str:
    """
    Convert a byte count to a human-readable size.

    Uses 1024-based units with at most two decimals; trailing zeros are
    dropped.

    Parameters:
        size_bytes (int): Size in bytes.

    Returns:
        str: e.g. "5 B", "1.5 KB", "1 MB", "2.25 GB".
    """
    for threshold, unit in _SIZE_UNITS:
        if size_bytes >= threshold:
            value = f"{size_bytes / threshold:.2f}".rstrip("0").rstrip(".")
            return f"{value} {unit}"
    return f"{size_bytes} B"


def format_hyperlink(path: str) -> str:
    """
    Build a spreadsheet formula that opens the file when clicked.

    Parameters:
        path (str): Absolute file path.

    Returns:
        str: ``=HYPERLINK("<path>", "Open")`` with embedded quotes doubled.
    """
    escaped = path.replace('"', '""')
    return f'=HYPERLINK("{escaped}", "Open")'


def format_modified(modified_at: datetime) -> str:
    """Format a modification time as 'YYYY-MM-DD HH:MM:SS'."""
    return modified_at.strftime("%Y-%m-%d %H:%M:%S")


def format_duration(seconds: float) -> str:
    """
    Convert elapsed seconds to an 'hh:mm:ss' string.

    Parameters:
        seconds (float): Duration in seconds; fractions are dropped.

    Returns:
        str: e.g. "00:05:23". Hours are not capped at 24.
    """
    total_seconds = max(int(seconds), 0)
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    secs = total_seconds % 60
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def record_to_row(record: Record) -> List[str]:
    """
    Convert a Record to CSV cell values in COLUMNS order.

    Parameters:
        record (Record): The extracted file metadata.

    Returns:
        List[str]: One value per column.
    """
    return [
        format_hyperlink(record.path),
        record.path,
        record.directory,
        record.name,
        format_modified(record.modified_at),
        str(record.size_bytes),
        format_size(record.size_bytes),
        record.extension,
        record.content_hash,
    ]
