"""Shared fixtures for pathname tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from pathname import Metadata, OsStorage, PathKind


@pytest.fixture
def just_files(tmp_path: Path) -> Path:
    """Create a flat directory of files.

    Structure::

        justFiles/
        ├── a.json
        ├── b.json
        └── dummy.txt
    """
    root = tmp_path / "justFiles"
    root.mkdir()
    (root / "a.json").write_text('{"a": 1}')
    (root / "b.json").write_text('{"b": 2}')
    (root / "dummy.txt").write_text("dummy")
    return root


@pytest.fixture
def nested(tmp_path: Path) -> Path:
    """Create a nested tree with a hidden directory.

    Structure::

        nested/
        ├── .hidden1/
        │   └── bad.txt
        ├── c.json
        ├── d.json
        └── mydir/
            └── e.json
    """
    root = tmp_path / "nested"
    (root / ".hidden1").mkdir(parents=True)
    (root / ".hidden1" / "bad.txt").write_text("bad")
    (root / "c.json").write_text("c")
    (root / "d.json").write_text("d")
    (root / "mydir").mkdir()
    (root / "mydir" / "e.json").write_text("e")
    return root


@pytest.fixture
def visibility(tmp_path: Path) -> Path:
    """Create visible and hidden files and directories.

    Structure::

        visibility/
        ├── .hidden/
        │   ├── .hidden.json
        │   ├── inner/
        │   └── visible.json
        ├── .hidden.json
        ├── visible/
        └── visible.json
    """
    root = tmp_path / "visibility"
    (root / ".hidden" / "inner").mkdir(parents=True)
    (root / ".hidden" / ".hidden.json").write_text("{}")
    (root / ".hidden" / "visible.json").write_text("{}")
    (root / ".hidden.json").write_text("{}")
    (root / "visible").mkdir()
    (root / "visible.json").write_text("{}")
    return root


def build_deep_tree(root: Path, levels: int, files_per_level: int = 2) -> Path:
    """Create a chain of *levels* nested directories with files at each level.

    Args:
        root: Directory to create.
        levels: Number of directory levels including *root*.
        files_per_level: Files written into each level.

    Returns:
        Path: The created root.
    """
    current = root
    for level in range(levels):
        current.mkdir()
        for index in range(files_per_level):
            (current / f"file{index}.txt").write_text(f"level {level} file {index}")
        current = current / f"level{level + 1}"
    return root


def relative_tree(root: Path) -> dict[str, str | None]:
    """Map every path below *root* to its text content (``None`` for dirs)."""
    tree: dict[str, str | None] = {}
    for dirpath, dirnames, filenames in os.walk(root):
        base = Path(dirpath)
        for name in dirnames:
            tree[(base / name).relative_to(root).as_posix()] = None
        for name in filenames:
            path = base / name
            if path.is_symlink():
                continue
            tree[path.relative_to(root).as_posix()] = path.read_text()
    return tree


class SocketStorage(OsStorage):
    """Storage that reports every stat target as a socket."""

    def stat(self, path: str) -> Metadata:
        real = super().stat(path)
        return Metadata(
            kind=PathKind.SOCKET,
            size=real.size,
            mtime=real.mtime,
            atime=real.atime,
            ctime=real.ctime,
        )
