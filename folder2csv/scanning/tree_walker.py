"""Iterative directory traversal.

This module provides the TreeWalker class, which discovers every regular file
beneath a root directory using an explicit stack of pending directories
instead of recursion, so tree depth never limits the walk.

Symbolic links are never followed: a link to a file is not reported and a
link to a directory is not descended into. FIFOs, sockets and device nodes
are skipped as well.

Example:
    >>> from folder2csv.scanning import TreeWalker
    >>> walker = TreeWalker()
    >>> for path in walker.walk("/data"):
    ...     print(path)
"""

import logging
import os
from typing import Iterable, Iterator, List, Optional, Set, Tuple, Union

from folder2csv.models import IssueKind, ScanIssue

logger = logging.getLogger(__name__)


class TreeWalker:
    """Discovers regular files under a root directory without recursion.

    Each call to walk() starts a fresh traversal; the returned iterator is
    lazy and cannot be restarted. A directory is listed completely before
    any of its files are emitted, so a listing failure never leaves a
    directory half reported.

    Directories that cannot be listed are recorded as DIRECTORY_UNREADABLE
    issues and their subtrees are skipped; the walk carries on with the
    remaining pending directories.

    Attributes:
        directories_scanned: Directories listed successfully in the last walk.
        directories_skipped: Directories that could not be listed.
        files_found: Regular files emitted.
    """

    def __init__(self, exclude: Optional[Iterable[Union[str, "os.PathLike[str]"]]] = None) -> None:
        """Initialize the TreeWalker.

        Args:
            exclude: Optional absolute file paths that are never reported,
                e.g. the CSV being written inside the scanned tree.
        """
        self._exclude: Set[str] = {
            os.path.normcase(os.path.abspath(p)) for p in (exclude or ())
        }
        self._issues: List[ScanIssue] = []
        self.directories_scanned = 0
        self.directories_skipped = 0
        self.files_found = 0

    def walk(self, root: Union[str, "os.PathLike[str]"]) -> Iterator[str]:
        """Yield the absolute path of every regular file under root.

        Args:
            root: Directory to walk. Normalized to an absolute path.

        Yields:
            Absolute file paths; sibling files in name order.
        """
        self.directories_scanned = 0
        self.directories_skipped = 0
        self.files_found = 0

        pending: List[str] = [os.path.abspath(os.fspath(root))]

        while pending:
            directory = pending.pop()
            listing = self._list_directory(directory)
            if listing is None:
                continue

            files, subdirs = listing
            self.directories_scanned += 1

            # Reversed so the stack pops subdirectories in name order
            pending.extend(reversed(subdirs))

            for file_path in files:
                self.files_found += 1
                yield file_path

    def _list_directory(self, directory: str) -> Optional[Tuple[List[str], List[str]]]:
        files: List[str] = []
        subdirs: List[str] = []
        try:
            with os.scandir(directory) as entries:
                for entry in sorted(entries, key=lambda e: e.name):
                    if entry.is_symlink():
                        logger.debug("Skipping symbolic link: %s", entry.path)
                        continue
                    if entry.is_dir(follow_symlinks=False):
                        subdirs.append(entry.path)
                    elif entry.is_file(follow_symlinks=False):
                        if os.path.normcase(entry.path) in self._exclude:
                            logger.debug("Skipping excluded file: %s", entry.path)
                            continue
                        files.append(entry.path)
        except PermissionError:
            self._record_skip(directory, "Permission denied listing directory")
            return None
        except OSError as e:
            self._record_skip(directory, f"Error listing directory: {e}")
            return None

        return files, subdirs

    def _record_skip(self, directory: str, message: str) -> None:
        logger.warning("%s: %s", message, directory)
        self.directories_skipped += 1
        self._issues.append(
            ScanIssue(kind=IssueKind.DIRECTORY_UNREADABLE, path=directory, message=message)
        )

    def get_issues(self) -> List[ScanIssue]:
        """Get the DIRECTORY_UNREADABLE issues recorded so far.

        Returns:
            Copy of the list of issues.
        """
        return self._issues.copy()

    def clear_issues(self) -> None:
        """Clear the list of recorded issues."""
        self._issues.clear()
