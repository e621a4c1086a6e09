"""The ``Pathname`` handle: path-string semantics, predicates and tree operations."""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Callable
from datetime import datetime
from typing import Final

from pathname.errors import PathnameError
from pathname.matcher import match_glob
from pathname.metadata import Metadata
from pathname.storage import OsStorage, Storage
from pathname.tree import (
    CopyOptions,
    copy_tree,
    copy_tree_sync,
    delete_tree,
    delete_tree_sync,
    walk_sync,
)

logger = logging.getLogger(__name__)

_DEFAULT_STORAGE: Final[Storage] = OsStorage()
_SEPARATORS: Final[str] = os.sep + (os.altsep or "")


def _split_segments(path: str) -> list[str]:
    segments = [path.rstrip(_SEPARATORS) or path]
    for sep in _SEPARATORS:
        segments = [part for segment in segments for part in segment.split(sep)]
    return segments


def _depth(path: str) -> int:
    return path.count(os.sep)


class Pathname:
    """Value-like handle on a filesystem path.

    A handle holds the path string as supplied plus the base directory used
    to make it absolute. It owns no OS resource, and every query goes back
    to storage; nothing is cached between calls.

    Query methods come in pairs: ``x_sync()`` blocks the caller, ``x()`` is a
    coroutine that runs the storage call in a worker thread.
    """

    __slots__ = ("_pathname", "_base_dir", "_storage")

    def __init__(
        self,
        pathname: str | os.PathLike[str],
        base_dir: str | os.PathLike[str] | None = None,
        storage: Storage | None = None,
    ) -> None:
        """Initialize a handle.

        Args:
            pathname: Path string, relative or absolute. Stored unchanged.
            base_dir: Directory relative paths are resolved against.
                Defaults to the working directory at construction time.
            storage: Storage binding. Defaults to ``OsStorage``.
        """
        self._pathname = os.fspath(pathname)
        self._base_dir = os.fspath(base_dir) if base_dir is not None else os.getcwd()
        self._storage = storage if storage is not None else _DEFAULT_STORAGE

    def __repr__(self) -> str:
        return f"Pathname({self._pathname!r})"

    def __str__(self) -> str:
        return self._pathname

    def __fspath__(self) -> str:
        return self._pathname

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pathname):
            return NotImplemented
        return (self._pathname, self._base_dir) == (other._pathname, other._base_dir)

    def __hash__(self) -> int:
        return hash((self._pathname, self._base_dir))

    @property
    def base_dir(self) -> str:
        return self._base_dir

    def _child(self, pathname: str) -> Pathname:
        return Pathname(pathname, base_dir=self._base_dir, storage=self._storage)

    def _resolve(self, path: str | os.PathLike[str] | None) -> str:
        if path is None:
            return self.get_absolute_path()
        path = os.fspath(path)
        if os.path.isabs(path):
            return path
        return os.path.join(self._base_dir, path)

    def _target(self) -> str:
        # Storage is always addressed by absolute path, resolved against base_dir.
        return self.get_absolute_path()

    # ------------------------------------------------------------------
    # Path strings
    # ------------------------------------------------------------------
    def get_name(self) -> str:
        """Return the path exactly as supplied."""
        return self._pathname

    def get_absolute_path(self) -> str:
        """Return the path joined onto the base directory when relative."""
        if os.path.isabs(self._pathname):
            return self._pathname
        return os.path.join(self._base_dir, self._pathname)

    def get_canonical_path(self) -> str:
        """Return the absolute path with ``.`` and ``..`` collapsed.

        Normalization is lexical; symbolic links are not resolved.
        """
        return os.path.normpath(self.get_absolute_path())

    def get_path_extension(self) -> str:
        """Return the final segment's extension without the dot, or ``""``."""
        return os.path.splitext(self._pathname)[1][1:]

    def get_depth_sync(self) -> int:
        """Return the number of separators in the directory part of the path.

        Directories count their own canonical path, everything else counts
        its parent.

        Raises:
            NotFoundError: If the path does not exist.
        """
        canonical = self.get_canonical_path()
        if not self.is_directory_sync():
            return _depth(os.path.dirname(canonical))
        return _depth(canonical)

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------
    def stat_sync(self) -> Metadata:
        """Fetch a fresh metadata snapshot, following symbolic links.

        Raises:
            NotFoundError: If the path does not exist.
        """
        return self._storage.stat(self._target())

    async def stat(self) -> Metadata:
        return await asyncio.to_thread(self._storage.stat, self._target())

    def lstat_sync(self) -> Metadata:
        """Fetch a fresh snapshot of the path itself, not a link's target."""
        return self._storage.lstat(self._target())

    async def lstat(self) -> Metadata:
        return await asyncio.to_thread(self._storage.lstat, self._target())

    def is_directory_sync(self) -> bool:
        return self.stat_sync().is_directory

    async def is_directory(self) -> bool:
        return (await self.stat()).is_directory

    def is_file_sync(self) -> bool:
        return self.stat_sync().is_file

    async def is_file(self) -> bool:
        return (await self.stat()).is_file

    def is_socket_sync(self) -> bool:
        return self.stat_sync().is_socket

    async def is_socket(self) -> bool:
        return (await self.stat()).is_socket

    def last_modified_sync(self) -> datetime:
        return self.stat_sync().mtime

    async def last_modified(self) -> datetime:
        return (await self.stat()).mtime

    def last_accessed_sync(self) -> datetime:
        return self.stat_sync().atime

    async def last_accessed(self) -> datetime:
        return (await self.stat()).atime

    def last_changed_sync(self) -> datetime:
        return self.stat_sync().ctime

    async def last_changed(self) -> datetime:
        return (await self.stat()).ctime

    def size_sync(self) -> int:
        return self.stat_sync().size

    async def size(self) -> int:
        return (await self.stat()).size

    # ------------------------------------------------------------------
    # Visibility and matching
    # ------------------------------------------------------------------
    def _is_hidden_file(self) -> bool:
        return _split_segments(self._pathname)[-1].startswith(".")

    def _is_hidden_directory(self) -> bool:
        # A dot-prefixed ancestor hides the whole subtree; "." and ".." do not count.
        ancestors = _split_segments(self._pathname)[:-1]
        return any(
            len(segment) > 1 and segment[0] == "." and segment[1] != "."
            for segment in ancestors
        )

    def is_hidden_sync(self) -> bool:
        """Return whether the path is hidden.

        Non-directories are hidden when their own name starts with ``.``.
        Directories are hidden when one of their ancestor segments does.

        Raises:
            NotFoundError: If the path does not exist.
        """
        if not self.is_directory_sync():
            return self._is_hidden_file()
        return self._is_hidden_directory()

    async def is_hidden(self) -> bool:
        if not await self.is_directory():
            return self._is_hidden_file()
        return self._is_hidden_directory()

    def is_match(self, glob: str) -> bool:
        """Return whether the stored path matches a glob.

        Patterns without a separator are matched against the final segment.
        """
        return match_glob(self._pathname, glob)

    # ------------------------------------------------------------------
    # Access checks
    # ------------------------------------------------------------------
    def _access_sync(self, mode: int) -> bool:
        try:
            return self._storage.check_access(self._target(), mode)
        except (PathnameError, OSError) as exc:
            logger.debug("Access check failed for %s: %s", self._pathname, exc)
            return False

    async def _access(self, mode: int) -> bool:
        return await asyncio.to_thread(self._access_sync, mode)

    def is_readable_sync(self) -> bool:
        return self._access_sync(os.R_OK)

    async def is_readable(self) -> bool:
        return await self._access(os.R_OK)

    def is_writable_sync(self) -> bool:
        return self._access_sync(os.W_OK)

    async def is_writable(self) -> bool:
        return await self._access(os.W_OK)

    def is_executable_sync(self) -> bool:
        return self._access_sync(os.X_OK)

    async def is_executable(self) -> bool:
        return await self._access(os.X_OK)

    def exists_sync(self) -> bool:
        """Return whether the path exists and is readable."""
        return self._access_sync(os.R_OK)

    async def exists(self) -> bool:
        return await self._access(os.R_OK)

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------
    def _join(self, names: list[str], glob: str | None) -> list[str]:
        paths = [os.path.join(self._pathname, name) for name in names]
        if glob:
            return [path for path in paths if match_glob(path, glob)]
        return paths

    def get_list_sync(self, glob: str | None = None) -> list[str] | None:
        """List immediate children as joined path strings.

        Children come back in directory-read order, optionally filtered by
        *glob*.

        Returns:
            list[str] | None: Child paths, or ``None`` when the path is not
            a directory.

        Raises:
            NotFoundError: If the path does not exist.
        """
        if not self.is_directory_sync():
            return None
        return self._join(self._storage.read_dir(self._target()), glob)

    async def get_list(self, glob: str | None = None) -> list[str]:
        """Coroutine form of :meth:`get_list_sync`.

        Unlike the blocking form this returns ``[]`` for a non-directory.
        """
        if not await self.is_directory():
            return []
        names = await asyncio.to_thread(self._storage.read_dir, self._target())
        return self._join(names, glob)

    def get_files_sync(self, glob: str | None = None) -> list[Pathname] | None:
        """Like :meth:`get_list_sync` but yields child handles."""
        paths = self.get_list_sync(glob)
        if paths is None:
            return None
        return [self._child(path) for path in paths]

    async def get_files(self, glob: str | None = None) -> list[Pathname]:
        """Like :meth:`get_list` but yields child handles; ``[]`` for non-directories."""
        return [self._child(path) for path in await self.get_list(glob)]

    def walk_sync(self, visitor: Callable[[Pathname], bool] | None = None) -> list[Pathname]:
        """Pre-order walk from this handle; see :func:`pathname.tree.walk_sync`."""
        return walk_sync(self, visitor)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def delete_sync(self) -> None:
        """Unlink this path. Directories need :meth:`delete_recursively_sync`."""
        self._storage.unlink(self._target())

    async def delete(self) -> None:
        await asyncio.to_thread(self._storage.unlink, self._target())

    def delete_recursively_sync(self, root: str | os.PathLike[str] | None = None) -> None:
        """Remove *root* (default: this path) and everything below it.

        A relative *root* is resolved against the handle's base directory.
        A missing root is a no-op. The first failure propagates and leaves
        a partially deleted tree.
        """
        delete_tree_sync(self._storage, self._resolve(root))

    async def delete_recursively(self, root: str | os.PathLike[str] | None = None) -> None:
        await delete_tree(self._storage, self._resolve(root))

    def _copy_options(self, overwrite: bool, source: str | os.PathLike[str] | None) -> CopyOptions:
        return CopyOptions(overwrite=overwrite, source=self._resolve(source))

    def copy_recursively_sync(
        self,
        destination: str | os.PathLike[str],
        overwrite: bool = False,
        source: str | os.PathLike[str] | None = None,
    ) -> None:
        """Copy the directory *source* (default: this path) to *destination*.

        Relative paths are resolved against the handle's base directory.

        Args:
            destination: Directory to create.
            overwrite: Delete an existing destination first instead of failing.
            source: Directory to copy from.

        Raises:
            AlreadyExistsError: If *destination* exists and *overwrite* is off.
                Nothing is modified in that case.
        """
        copy_tree_sync(
            self._storage, self._resolve(destination), self._copy_options(overwrite, source)
        )

    async def copy_recursively(
        self,
        destination: str | os.PathLike[str],
        overwrite: bool = False,
        source: str | os.PathLike[str] | None = None,
    ) -> None:
        await copy_tree(
            self._storage, self._resolve(destination), self._copy_options(overwrite, source)
        )
