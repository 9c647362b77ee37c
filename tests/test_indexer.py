"""
Unit tests for the directory indexer.
"""

import tempfile
from pathlib import Path

import pytest

from folder_sift.indexer import scan_items, scan_sieve_folders
from folder_sift.types import ItemKind


def create_test_tree(structure: dict, base_path: Path) -> None:
    """
    Create a directory tree from a nested dict structure.

    Args:
        structure: Dict where keys are names; dict values are folders,
                   string values are file contents
        base_path: Base path to create the tree under
    """
    for name, children in structure.items():
        path = base_path / name
        if isinstance(children, dict):
            path.mkdir(parents=True, exist_ok=True)
            create_test_tree(children, path)
        else:
            path.write_text(children)


class TestScanSieveFolders:
    """Tests for scan_sieve_folders function."""

    def test_only_folders_sorted(self):
        """Only immediate subfolders are listed, sorted."""
        with tempfile.TemporaryDirectory() as tmp:
            create_test_tree({
                "b": {"nested": {}},
                "a": {},
                "file.txt": "x",
            }, Path(tmp))

            folders = scan_sieve_folders(tmp)

            assert [Path(f).name for f in folders] == ["a", "b"]

    def test_empty(self):
        """An empty sieve has no folders."""
        with tempfile.TemporaryDirectory() as tmp:
            assert scan_sieve_folders(tmp) == []

    def test_nonexistent_raises(self):
        """A missing sieve raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            scan_sieve_folders("/nonexistent/path/12345")

    def test_file_raises(self):
        """A file instead of a folder raises NotADirectoryError."""
        with tempfile.NamedTemporaryFile() as f:
            with pytest.raises(NotADirectoryError):
                scan_sieve_folders(f.name)


class TestScanItems:
    """Tests for scan_items function."""

    def test_files_and_folders(self):
        """Direct children are listed with their kind."""
        with tempfile.TemporaryDirectory() as tmp:
            create_test_tree({"movie.mkv": "x", "album": {"song.mp3": "x"}}, Path(tmp))

            items = scan_items(tmp)

            assert [(i.name, i.kind) for i in items] == [
                ("album", ItemKind.DIRECTORY),
                ("movie.mkv", ItemKind.FILE),
            ]
            assert items[0].is_dir

    def test_sorted_by_path(self):
        """Items come back sorted regardless of creation order."""
        with tempfile.TemporaryDirectory() as tmp:
            for name in ["c.txt", "a.txt", "b.txt"]:
                (Path(tmp) / name).write_text(name)

            assert [i.name for i in scan_items(tmp)] == ["a.txt", "b.txt", "c.txt"]

    def test_deep_lists_sub_subfolder_items(self):
        """Deep mode lists the children of subfolders, not the source's own."""
        with tempfile.TemporaryDirectory() as tmp:
            create_test_tree({
                "top.txt": "x",
                "subfolder": {"item.txt": "x", "inner": {"leaf.txt": "x"}},
                "other": {"z.txt": "x"},
            }, Path(tmp))

            items = scan_items(tmp, deep=True)

            assert [i.name for i in items] == ["z.txt", "inner", "item.txt"]
            assert all(i.name != "top.txt" for i in items)
            assert items[2].path == str(Path(tmp) / "subfolder" / "item.txt")

    def test_nonexistent_raises(self):
        """A missing source raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            scan_items("/nonexistent/path/12345")
