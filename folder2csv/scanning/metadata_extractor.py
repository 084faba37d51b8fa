"""Per-file metadata extraction.

This module provides the MetadataExtractor class, which turns a discovered
file path into a Record: one stat call for size, time and names, followed by
a streamed content hash.
"""

import logging
import os
import stat
import threading
from datetime import datetime
from typing import List, Optional, Union

from folder2csv.models import IssueKind, Record, ScanIssue

from .file_hasher import ContentHasher

logger = logging.getLogger(__name__)


def split_extension(name: str) -> str:
    """Return the text after the last dot of a file name, without the dot.

    A name without a dot, or ending in a dot, has no extension. For a dot-file
    such as ``.bashrc`` the extension is ``bashrc``.

    Args:
        name: Base name of the file.

    Returns:
        The extension, or an empty string.
    """
    return name.rpartition(".")[2] if "." in name else ""


class MetadataExtractor:
    """Builds Records from file paths.

    A file that cannot be stat'ed (deleted or moved since it was discovered,
    or access denied) is skipped: a FILE_VANISHED issue is recorded and no
    Record is produced. A file that can be stat'ed but not read still yields
    a Record, with an empty content_hash.

    Safe to call from several worker threads at once.

    Example:
        >>> extractor = MetadataExtractor()
        >>> record = extractor.extract("/data/a.txt")
        >>> record.size_bytes, record.extension
        (5, 'txt')
    """

    def __init__(self, hasher: Optional[ContentHasher] = None) -> None:
        """Initialize the MetadataExtractor.

        Args:
            hasher: Optional ContentHasher instance. If not provided,
                a new instance will be created.
        """
        self._hasher = hasher if hasher is not None else ContentHasher()
        self._issues: List[ScanIssue] = []
        self._lock = threading.Lock()

    def extract(self, file_path: Union[str, "os.PathLike[str]"]) -> Optional[Record]:
        """Extract metadata and content hash for a single file.

        Args:
            file_path: Path to the file.

        Returns:
            The Record, or None if the file could not be stat'ed or is no
            longer a regular file.
        """
        path = os.path.abspath(os.fspath(file_path))

        try:
            stat_result = os.stat(path, follow_symlinks=False)
        except FileNotFoundError:
            self._record_skip(path, "File not found")
            return None
        except PermissionError:
            self._record_skip(path, "Permission denied")
            return None
        except OSError as e:
            self._record_skip(path, f"Error accessing file: {e}")
            return None

        if not stat.S_ISREG(stat_result.st_mode):
            self._record_skip(path, "No longer a regular file")
            return None

        name = os.path.basename(path)
        return Record(
            path=path,
            directory=os.path.dirname(path),
            name=name,
            modified_at=datetime.fromtimestamp(stat_result.st_mtime),
            modified_ns=stat_result.st_mtime_ns,
            size_bytes=stat_result.st_size,
            extension=split_extension(name),
            content_hash=self._hasher.hash_file(path),
        )

    def _record_skip(self, path: str, message: str) -> None:
        logger.warning("%s, skipping: %s", message, path)
        with self._lock:
            self._issues.append(
                ScanIssue(kind=IssueKind.FILE_VANISHED, path=path, message=message)
            )

    def get_issues(self) -> List[ScanIssue]:
        """Get the FILE_VANISHED issues recorded so far.

        Returns:
            Copy of the list of issues.
        """
        with self._lock:
            return self._issues.copy()

    def clear_issues(self) -> None:
        """Clear the list of recorded issues."""
        with self._lock:
            self._issues.clear()

    @property
    def hasher(self) -> ContentHasher:
        """Get the ContentHasher instance used by this extractor.

        Returns:
            The ContentHasher instance.
        """
        return self._hasher
