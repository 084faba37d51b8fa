"""Workflow orchestration package for folder2csv.

This package contains orchestration components for scan runs:
- ScanLogger: Structured report of a scan run written to a log file.
- ScanOrchestrator: Central coordinator of the walk, extract and write pipeline.
"""

from folder2csv.orchestration.scan_logger import ScanLogger
from folder2csv.orchestration.scan_orchestrator import (
    ScanOrchestrator,
    resolve_output_path,
    resolve_root_path,
)

__all__ = ["ScanLogger", "ScanOrchestrator", "resolve_output_path", "resolve_root_path"]
