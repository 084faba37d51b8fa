"""Streaming content hasher.

This module provides the ContentHasher class for computing XXH64 digests of
files. Files are read in fixed-size chunks so memory use per file does not
depend on file size.

Example:
    >>> from folder2csv.scanning import ContentHasher
    >>> hasher = ContentHasher()
    >>> digest = hasher.hash_file("/path/to/file.txt")
    >>> if digest:
    ...     print(f"XXH64: {digest}")
"""

import logging
import os
import threading
from typing import List, Union

import xxhash

from folder2csv.models import IssueKind, ScanIssue

logger = logging.getLogger(__name__)

# Buffer size for chunked file reading (64KB)
CHUNK_SIZE = 64 * 1024


class ContentHasher:
    """Computes XXH64 digests of file contents.

    XXH64 is fast and non-cryptographic: identical bytes always give the same
    digest and any difference gives a different digest with overwhelming
    probability, which is all a file listing needs for duplicate spotting.

    The hasher is safe to share between worker threads. Each call owns its
    own file handle and hash state; only the issue list is shared and it is
    guarded by a lock.

    Attributes:
        chunk_size: Number of bytes read per chunk.

    Example:
        >>> hasher = ContentHasher()
        >>> hasher.hash_file("empty.txt")
        'ef46db3751d8e999'
    """

    def __init__(self, chunk_size: int = CHUNK_SIZE) -> None:
        """Initialize the ContentHasher.

        Args:
            chunk_size: Number of bytes read per chunk. Must be positive.

        Raises:
            ValueError: If chunk_size is not positive.
        """
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.chunk_size = chunk_size
        self._issues: List[ScanIssue] = []
        self._lock = threading.Lock()

    def hash_file(self, file_path: Union[str, "os.PathLike[str]"]) -> str:
        """Compute the XXH64 digest of a file.

        Args:
            file_path: Path to the file to hash.

        Returns:
            The lowercase hex digest, or an empty string if the file could
            not be opened or read to the end. A partial digest is never
            returned.
        """
        hasher = xxhash.xxh64()
        try:
            with open(file_path, "rb") as f:
                while True:
                    chunk = f.read(self.chunk_size)
                    if not chunk:
                        break
                    hasher.update(chunk)
        except PermissionError:
            self._record_issue(file_path, "Permission denied reading file")
            return ""
        except OSError as e:
            self._record_issue(file_path, f"Error reading file: {e}")
            return ""

        return hasher.hexdigest()

    def _record_issue(self, file_path: Union[str, "os.PathLike[str]"], message: str) -> None:
        path = str(file_path)
        logger.warning("%s: %s", message, path)
        with self._lock:
            self._issues.append(
                ScanIssue(kind=IssueKind.CONTENT_UNREADABLE, path=path, message=message)
            )

    def get_issues(self) -> List[ScanIssue]:
        """Get the issues recorded while hashing.

        Returns:
            Copy of the list of CONTENT_UNREADABLE issues.
        """
        with self._lock:
            return self._issues.copy()

    def clear_issues(self) -> None:
        """Clear the list of recorded issues."""
        with self._lock:
            self._issues.clear()
