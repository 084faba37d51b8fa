"""Concurrent processing package for folder2csv.

This package provides the WorkerPool class, which extracts file metadata on
a bounded number of threads, and default_concurrency(), the worker count
used when none is configured.

Example:
    >>> from folder2csv.processing import WorkerPool, default_concurrency
    >>> from folder2csv.scanning import MetadataExtractor
    >>> pool = WorkerPool(MetadataExtractor(), concurrency=default_concurrency())
"""

from .worker_pool import WorkerPool, default_concurrency

__all__ = ["WorkerPool", "default_concurrency"]
