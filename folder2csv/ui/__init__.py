"""Terminal user interface package for folder2csv.

This package provides the ScanTUI class, the Rich-based console front end
used by the CLI and the orchestrator.
"""

from .scan_tui import ScanTUI

__all__ = ["ScanTUI"]
