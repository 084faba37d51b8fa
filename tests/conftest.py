"""Pytest fixtures for folder2csv tests."""

import io
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Callable, Generator, Iterator, List
from unittest.mock import patch

import pytest
from rich.console import Console

from folder2csv.models import Record
from folder2csv.ui import ScanTUI


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for isolated test environments.

    Yields:
        Path to the temporary directory.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def output_dir(temp_dir: Path) -> Path:
    """Directory for CSV and log output, kept outside the scanned trees."""
    out = temp_dir / "out"
    out.mkdir()
    return out


@pytest.fixture
def sample_tree(temp_dir: Path) -> Path:
    """Create the two-file example tree.

    Creates:
        root/
        ├── a.txt      ("hello", 5 bytes)
        └── sub/
            └── b.txt  (0 bytes)

    Returns:
        Path to the root directory.
    """
    root = temp_dir / "root"
    root.mkdir()
    (root / "a.txt").write_bytes(b"hello")
    (root / "sub").mkdir()
    (root / "sub" / "b.txt").touch()
    return root


@pytest.fixture
def nested_tree(temp_dir: Path) -> Path:
    """Create a nested folder structure with 8 files in 6 directories.

    Creates:
        tree/
        ├── top.txt
        ├── docs/
        │   ├── report.pdf
        │   ├── notes.md
        │   └── archive/
        │       └── old.tar.gz
        ├── photos/
        │   ├── img1.jpg
        │   ├── img2.jpg
        │   └── raw/
        │       └── IMG_0001.CR2
        ├── empty/
        └── .hidden

    Returns:
        Path to the tree root.
    """
    root = temp_dir / "tree"
    root.mkdir()
    (root / "top.txt").write_text("top level")
    (root / ".hidden").write_text("dotfile")

    docs = root / "docs"
    docs.mkdir()
    (docs / "report.pdf").write_bytes(b"%PDF" + b"x" * 2000)
    (docs / "notes.md").write_text("# notes")
    (docs / "archive").mkdir()
    (docs / "archive" / "old.tar.gz").write_bytes(b"\x1f\x8b" + b"z" * 100)

    photos = root / "photos"
    photos.mkdir()
    (photos / "img1.jpg").write_bytes(b"\xff\xd8" + b"a" * 500)
    (photos / "img2.jpg").write_bytes(b"\xff\xd8" + b"b" * 500)
    (photos / "raw").mkdir()
    (photos / "raw" / "IMG_0001.CR2").write_bytes(b"c" * 4096)

    (root / "empty").mkdir()
    return root


@pytest.fixture
def wide_tree(temp_dir: Path) -> Path:
    """Create 10 directories holding 20 files each (200 files).

    Returns:
        Path to the tree root.
    """
    root = temp_dir / "wide"
    root.mkdir()
    for d in range(10):
        folder = root / f"dir{d:02d}"
        folder.mkdir()
        for f in range(20):
            (folder / f"file{f:02d}.bin").write_bytes(f"{d}-{f}".encode() * (f + 1))
    return root


@pytest.fixture
def deny_listing() -> Callable:
    """Make os.scandir fail with PermissionError for chosen directories.

    Simulating the failure keeps the tests independent of the user running
    them (chmod has no effect for root).

    Returns:
        Function taking directory paths and returning an active-able patcher.

    Example:
        with deny_listing(root / "secret"):
            paths = list(TreeWalker().walk(root))
    """
    real_scandir = os.scandir

    def factory(*denied: Path):
        denied_paths = {os.path.abspath(p) for p in denied}

        def fake_scandir(path="."):
            if os.path.abspath(os.fspath(path)) in denied_paths:
                raise PermissionError(13, "Permission denied", os.fspath(path))
            return real_scandir(path)

        return patch("folder2csv.scanning.tree_walker.os.scandir", side_effect=fake_scandir)

    return factory


@pytest.fixture
def string_console() -> Console:
    """Create a Rich Console that writes to a StringIO buffer."""
    return Console(file=io.StringIO(), force_terminal=False, width=200)


@pytest.fixture
def quiet_tui(string_console: Console) -> ScanTUI:
    """Create a ScanTUI whose output is captured instead of printed."""
    return ScanTUI(console=string_console)


@pytest.fixture
def sample_record() -> Record:
    """Create a Record for formatting and sink tests."""
    return Record(
        path="/data/docs/report.pdf",
        directory="/data/docs",
        name="report.pdf",
        modified_at=datetime(2024, 3, 15, 9, 30, 5),
        size_bytes=1536,
        extension="pdf",
        content_hash="0123456789abcdef",
    )


def make_records(count: int) -> List[Record]:
    """Build count distinct Records with fake paths."""
    return [
        Record(
            path=f"/data/file{i:04d}.txt",
            directory="/data",
            name=f"file{i:04d}.txt",
            modified_at=datetime(2024, 1, 1, 12, 0, 0),
            size_bytes=i,
            extension="txt",
            content_hash=f"{i:016x}",
        )
        for i in range(count)
    ]


@pytest.fixture
def record_factory() -> Callable[[int], List[Record]]:
    """Return the make_records helper as a fixture."""
    return make_records


@pytest.fixture
def vanishing_paths() -> Callable[[Iterator[str], str], Iterator[str]]:
    """Return a wrapper that deletes one file just before yielding its path.

    This reproduces a file disappearing between discovery and extraction.
    """

    def wrap(paths: Iterator[str], target: str) -> Iterator[str]:
        for path in paths:
            if path == target:
                os.remove(path)
            yield path

    return wrap
