"""
Models package for folder2csv.

This package provides convenient imports for all data models:
- IssueKind: Enum of recoverable scan conditions
- Record: Per-file metadata row
- ScanIssue: Recoverable problem met during a scan
- ScanSummary: Scan workflow summary
"""

from .issue_kind import IssueKind
from .data_models import (
    Record,
    ScanIssue,
    ScanSummary,
)

__all__ = [
    "IssueKind",
    "Record",
    "ScanIssue",
    "ScanSummary",
]
