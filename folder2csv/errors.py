"""Fatal error types for folder2csv.

Only conditions that prevent producing any output are fatal. Everything else
met during a scan is recorded as a ScanIssue and the run continues.
"""


class FatalInputError(ValueError):
    """The root folder is missing, blank, nonexistent or not a directory."""


class FatalOutputError(OSError):
    """The CSV destination cannot be created or written."""
