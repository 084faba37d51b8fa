"""File scanning package for folder2csv.

This package provides utilities for discovering files and extracting their
metadata. It contains three main classes:

- TreeWalker: Iteratively discovers every regular file under a root
  directory, skipping subtrees it cannot list.
- ContentHasher: Computes XXH64 digests of file contents in fixed-size
  chunks.
- MetadataExtractor: Builds a Record (stat fields plus content hash) for a
  single file path.

Example:
    >>> from folder2csv.scanning import MetadataExtractor, TreeWalker
    >>>
    >>> walker = TreeWalker()
    >>> extractor = MetadataExtractor()
    >>> for path in walker.walk("/data"):
    ...     record = extractor.extract(path)
"""

from .file_hasher import ContentHasher
from .metadata_extractor import MetadataExtractor
from .tree_walker import TreeWalker

__all__ = ["ContentHasher", "MetadataExtractor", "TreeWalker"]
