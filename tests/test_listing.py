"""Tests for directory listing on Pathname."""

import asyncio
import os
from pathlib import Path

import pytest

from pathname import NotFoundError, Pathname


def _read_order(directory: Path, suffix: str = "") -> list[str]:
    """Return child paths in the order the directory read yields them."""
    return [
        os.path.join(str(directory), name)
        for name in os.listdir(directory)
        if name.endswith(suffix)
    ]


class TestGetList:
    def test_lists_children_sync(self, just_files: Path) -> None:
        assert Pathname(str(just_files)).get_list_sync() == _read_order(just_files)

    def test_lists_children_async(self, just_files: Path) -> None:
        files = asyncio.run(Pathname(str(just_files)).get_list())
        assert files == _read_order(just_files)

    def test_glob_filter(self, just_files: Path) -> None:
        handle = Pathname(str(just_files))
        expected = _read_order(just_files, ".json")
        assert handle.get_list_sync("*.json") == expected
        assert asyncio.run(handle.get_list("*.json")) == expected

    def test_glob_skips_dotfiles(self, visibility: Path) -> None:
        handle = Pathname(str(visibility))
        expected = [str(visibility / "visible.json")]
        assert handle.get_list_sync("*.json") == expected
        assert asyncio.run(handle.get_list("*.json")) == expected

    def test_brace_glob(self, just_files: Path) -> None:
        names = Pathname(str(just_files)).get_list_sync("*.{json,txt}")
        assert sorted(os.path.basename(name) for name in names) == [
            "a.json",
            "b.json",
            "dummy.txt",
        ]

    def test_not_directory_sync_returns_none(self, just_files: Path) -> None:
        assert Pathname(str(just_files / "a.json")).get_list_sync() is None

    def test_not_directory_async_returns_empty(self, just_files: Path) -> None:
        assert asyncio.run(Pathname(str(just_files / "a.json")).get_list()) == []

    def test_children_keep_supplied_prefix(self, just_files: Path) -> None:
        handle = Pathname("./justFiles", base_dir=str(just_files.parent))
        names = handle.get_list_sync("a.json")
        assert names == [os.path.join("./justFiles", "a.json")]

    def test_not_recursive(self, nested: Path) -> None:
        names = {os.path.basename(p) for p in Pathname(str(nested)).get_list_sync()}
        assert names == {".hidden1", "c.json", "d.json", "mydir"}

    def test_empty_directory(self, tmp_path: Path) -> None:
        assert Pathname(str(tmp_path)).get_list_sync() == []
        assert asyncio.run(Pathname(str(tmp_path)).get_list()) == []

    def test_missing_directory_raises(self, tmp_path: Path) -> None:
        with pytest.raises(NotFoundError):
            Pathname(str(tmp_path / "missing")).get_list_sync()


class TestGetFiles:
    def test_returns_handles_sync(self, just_files: Path) -> None:
        files = Pathname(str(just_files)).get_files_sync()
        assert files == [Pathname(p) for p in _read_order(just_files)]

    def test_returns_handles_async(self, just_files: Path) -> None:
        files = asyncio.run(Pathname(str(just_files)).get_files())
        assert files == [Pathname(p) for p in _read_order(just_files)]

    def test_json_glob_in_read_order(self, just_files: Path) -> None:
        expected = [Pathname(p) for p in _read_order(just_files, ".json")]
        files = asyncio.run(Pathname(str(just_files)).get_files("*.json"))
        assert files == expected
        assert sorted(f.get_name() for f in files) == [
            str(just_files / "a.json"),
            str(just_files / "b.json"),
        ]
        assert Pathname(str(just_files)).get_files_sync("*.json") == expected

    def test_not_directory(self, just_files: Path) -> None:
        handle = Pathname(str(just_files / "a.json"))
        assert handle.get_files_sync() is None
        assert asyncio.run(handle.get_files()) == []

    def test_children_inherit_base_dir(self, just_files: Path) -> None:
        handle = Pathname("justFiles", base_dir=str(just_files.parent))
        children = handle.get_files_sync()
        assert children
        assert all(child.base_dir == str(just_files.parent) for child in children)
        assert all(child.is_file_sync() for child in children)
