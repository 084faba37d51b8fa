"""
IssueKind enum for the recoverable conditions met during a scan.

A live filesystem changes underneath the scan, so three conditions are
expected in steady state and never abort the run:
1. Directory Unreadable - a directory could not be listed; its subtree is skipped
2. File Vanished - a file could not be stat'ed after discovery; no row is written
3. Content Unreadable - a file was stat'ed but not fully read; row has an empty hash
"""

from enum import Enum


class IssueKind(Enum):
    """Categories of recoverable scan issues."""
    DIRECTORY_UNREADABLE = "directory_unreadable"  # Listing failed, subtree skipped
    FILE_VANISHED = "file_vanished"                # Stat failed, file skipped
    CONTENT_UNREADABLE = "content_unreadable"      # Read failed, hash left empty
