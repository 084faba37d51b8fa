"""Unit tests for TreeWalker class."""

import os
import sys
from pathlib import Path
from typing import Callable
from unittest.mock import patch

import pytest

from folder2csv.models import IssueKind
from folder2csv.scanning import TreeWalker


def _all_files(root: Path) -> set:
    found = set()
    for dirpath, _dirnames, filenames in os.walk(root):
        for name in filenames:
            found.add(os.path.join(dirpath, name))
    return found


class TestTreeWalkerBasic:
    """Basic traversal tests."""

    def test_sample_tree(self, sample_tree: Path) -> None:
        """Test both files of the example tree are reported."""
        paths = list(TreeWalker().walk(sample_tree))

        assert sorted(paths) == sorted([
            str(sample_tree / "a.txt"),
            str(sample_tree / "sub" / "b.txt"),
        ])

    def test_every_file_exactly_once(self, nested_tree: Path) -> None:
        """Test each file is emitted once and nothing else is emitted."""
        paths = list(TreeWalker().walk(nested_tree))

        assert len(paths) == 8
        assert len(set(paths)) == len(paths)
        assert set(paths) == _all_files(nested_tree)

    def test_wide_tree_count(self, wide_tree: Path) -> None:
        """Test 200 files in 10 directories are all reported."""
        paths = list(TreeWalker().walk(wide_tree))

        assert len(paths) == 200
        assert len(set(paths)) == 200

    def test_paths_are_absolute(self, nested_tree: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a relative root still yields absolute paths."""
        monkeypatch.chdir(nested_tree.parent)

        paths = list(TreeWalker().walk(nested_tree.name))

        assert all(os.path.isabs(p) for p in paths)
        assert set(paths) == _all_files(nested_tree)

    def test_directories_are_not_reported(self, nested_tree: Path) -> None:
        """Test only regular files are emitted, never directories."""
        paths = list(TreeWalker().walk(nested_tree))

        assert all(os.path.isfile(p) for p in paths)
        assert str(nested_tree / "empty") not in paths

    def test_siblings_in_name_order(self, temp_dir: Path) -> None:
        """Test files within one directory come out sorted by name."""
        for name in ["c.txt", "a.txt", "b.txt"]:
            (temp_dir / name).write_text(name)

        paths = list(TreeWalker().walk(temp_dir))

        assert [os.path.basename(p) for p in paths] == ["a.txt", "b.txt", "c.txt"]

    def test_walk_is_lazy(self, wide_tree: Path) -> None:
        """Test walk returns an iterator that yields on demand."""
        walker = TreeWalker()
        iterator = walker.walk(wide_tree)

        first = next(iterator)

        assert os.path.isfile(first)
        assert walker.files_found == 1

    def test_fresh_walk_per_call(self, nested_tree: Path) -> None:
        """Test each call starts a new traversal with reset counters."""
        walker = TreeWalker()

        first = list(walker.walk(nested_tree))
        second = list(walker.walk(nested_tree))

        assert first == second
        assert walker.files_found == 8


class TestTreeWalkerEdgeCases:
    """Edge case tests."""

    def test_empty_root(self, temp_dir: Path) -> None:
        """Test an empty root yields nothing and records no issue."""
        walker = TreeWalker()

        assert list(walker.walk(temp_dir)) == []
        assert walker.get_issues() == []
        assert walker.directories_scanned == 1

    def test_deep_tree_without_recursion_limit(self, temp_dir: Path) -> None:
        """Test a tree deeper than the recursion limit is walked completely."""
        frame, stack_depth = sys._getframe(), 0
        while frame is not None:
            stack_depth += 1
            frame = frame.f_back
        limit = stack_depth + 50

        current = temp_dir
        for _ in range(limit + 100):
            current = current / "d"
            current.mkdir()
        (current / "leaf.txt").write_text("bottom")

        old_limit = sys.getrecursionlimit()
        sys.setrecursionlimit(limit)
        try:
            paths = list(TreeWalker().walk(temp_dir))
        finally:
            sys.setrecursionlimit(old_limit)

        assert len(paths) == 1
        assert paths[0].endswith(os.path.join("d", "leaf.txt"))

    def test_counters(self, nested_tree: Path) -> None:
        """Test directory and file counters after a full walk."""
        walker = TreeWalker()
        list(walker.walk(nested_tree))

        assert walker.files_found == 8
        assert walker.directories_scanned == 6
        assert walker.directories_skipped == 0

    def test_exclude(self, sample_tree: Path) -> None:
        """Test excluded paths are never reported."""
        excluded = sample_tree / "a.txt"

        paths = list(TreeWalker(exclude=[excluded]).walk(sample_tree))

        assert paths == [str(sample_tree / "sub" / "b.txt")]

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="FIFOs not supported")
    def test_fifo_skipped(self, temp_dir: Path) -> None:
        """Test named pipes are not reported as files."""
        os.mkfifo(temp_dir / "pipe")
        (temp_dir / "real.txt").write_text("data")

        paths = list(TreeWalker().walk(temp_dir))

        assert paths == [str(temp_dir / "real.txt")]


class TestTreeWalkerSymlinks:
    """Symbolic links are never followed."""

    def test_file_symlink_not_reported(self, temp_dir: Path) -> None:
        """Test a link to a file is skipped."""
        target = temp_dir / "target.txt"
        target.write_text("target content")
        try:
            (temp_dir / "link.txt").symlink_to(target)
        except OSError:
            pytest.skip("Symlinks not supported")

        paths = list(TreeWalker().walk(temp_dir))

        assert paths == [str(target)]

    def test_directory_symlink_not_descended(self, temp_dir: Path) -> None:
        """Test a link to a directory is not walked, so cycles cannot loop."""
        real = temp_dir / "real"
        real.mkdir()
        (real / "inside.txt").write_text("x")
        try:
            (real / "loop").symlink_to(temp_dir, target_is_directory=True)
        except OSError:
            pytest.skip("Symlinks not supported")

        paths = list(TreeWalker().walk(temp_dir))

        assert paths == [str(real / "inside.txt")]


class TestTreeWalkerErrors:
    """Unreadable directory handling."""

    def test_unreadable_subdirectory_skips_only_its_subtree(
        self, nested_tree: Path, deny_listing: Callable
    ) -> None:
        """Test files in sibling subtrees are still reported."""
        walker = TreeWalker()
        with deny_listing(nested_tree / "docs"):
            paths = set(walker.walk(nested_tree))

        docs_files = {p for p in _all_files(nested_tree) if p.startswith(str(nested_tree / "docs"))}
        assert paths == _all_files(nested_tree) - docs_files
        assert len(paths) == 5
        assert walker.directories_skipped == 1

    def test_unreadable_subdirectory_recorded_as_issue(
        self, nested_tree: Path, deny_listing: Callable
    ) -> None:
        """Test the skipped directory is recorded as DIRECTORY_UNREADABLE."""
        walker = TreeWalker()
        with deny_listing(nested_tree / "photos" / "raw"):
            list(walker.walk(nested_tree))

        issues = walker.get_issues()
        assert len(issues) == 1
        assert issues[0].kind is IssueKind.DIRECTORY_UNREADABLE
        assert issues[0].path == str(nested_tree / "photos" / "raw")
        assert "Permission denied" in issues[0].message

    def test_unreadable_root(self, nested_tree: Path, deny_listing: Callable) -> None:
        """Test an unreadable root yields nothing but does not raise."""
        walker = TreeWalker()
        with deny_listing(nested_tree):
            paths = list(walker.walk(nested_tree))

        assert paths == []
        assert walker.directories_skipped == 1
        assert walker.get_issues()[0].path == str(nested_tree)

    def test_several_unreadable_directories(self, wide_tree: Path, deny_listing: Callable) -> None:
        """Test every denied directory is skipped and the walk continues."""
        walker = TreeWalker()
        with deny_listing(wide_tree / "dir01", wide_tree / "dir05", wide_tree / "dir09"):
            paths = list(walker.walk(wide_tree))

        assert len(paths) == 140
        assert walker.directories_skipped == 3
        assert len(walker.get_issues()) == 3

    def test_os_error_while_listing(self, sample_tree: Path) -> None:
        """Test a generic OSError is handled like a permission error."""
        real_scandir = os.scandir

        def flaky(path="."):
            if os.fspath(path).endswith("sub"):
                raise OSError(5, "Input/output error")
            return real_scandir(path)

        walker = TreeWalker()
        with patch("folder2csv.scanning.tree_walker.os.scandir", side_effect=flaky):
            paths = list(walker.walk(sample_tree))

        assert paths == [str(sample_tree / "a.txt")]
        assert "Input/output error" in walker.get_issues()[0].message

    def test_skip_is_logged(
        self, sample_tree: Path, deny_listing: Callable, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test a skipped directory produces a warning."""
        with caplog.at_level("WARNING", logger="folder2csv"):
            with deny_listing(sample_tree / "sub"):
                list(TreeWalker().walk(sample_tree))

        assert "Permission denied" in caplog.text
        assert "sub" in caplog.text

    def test_clear_issues(self, sample_tree: Path, deny_listing: Callable) -> None:
        """Test that clear_issues empties the issue list."""
        walker = TreeWalker()
        with deny_listing(sample_tree / "sub"):
            list(walker.walk(sample_tree))

        walker.clear_issues()

        assert walker.get_issues() == []
