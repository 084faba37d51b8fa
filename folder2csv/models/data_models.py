"""
Core data models for folder2csv.

This module contains the following dataclasses:
- Record: Metadata and content hash of one file, one CSV row
- ScanIssue: A recoverable problem met while walking or extracting
- ScanSummary: Summary of a complete scan run
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from .issue_kind import IssueKind


@dataclass(frozen=True)
class Record:
    """Metadata extracted from a single file."""
    path: str                         # Absolute, normalized file path
    directory: str                    # Absolute parent directory
    name: str                         # Base name including extension
    modified_at: datetime             # Last modification time (local)
    size_bytes: int                   # Size at stat time
    extension: str                    # Text after the last dot, may be empty
    content_hash: str                 # XXH64 hex digest, empty if unreadable
    modified_ns: int = 0              # Modification time in ns, as reported by stat


@dataclass(frozen=True)
class ScanIssue:
    """A recoverable problem encountered during a scan."""
    kind: IssueKind                   # Which recoverable condition
    path: str                         # Directory or file concerned
    message: str                      # Human-readable reason


@dataclass
class ScanSummary:
    """Summary of the scan workflow returned by ScanOrchestrator."""
    root_path: Path                   # Scanned root directory
    output_path: Path                 # CSV file written
    files_discovered: int = 0         # Regular files reported by the walker
    records_written: int = 0          # Data rows written to the CSV
    directories_scanned: int = 0      # Directories listed successfully
    directories_skipped: int = 0      # Directories that could not be listed
    files_skipped: int = 0            # Files that vanished before stat
    hashes_failed: int = 0            # Rows written with an empty hash
    total_bytes: int = 0              # Sum of size_bytes over written rows
    concurrency: int = 1              # Worker threads used
    duration_seconds: float = 0.0     # Wall-clock duration
    issues: List[ScanIssue] = field(default_factory=list)  # All recoverable issues
    interrupted: bool = False         # Whether the run was interrupted by the user
    log_file_path: Optional[Path] = None  # Run report, if one was written
