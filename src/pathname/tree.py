"""Recursive tree operations: delete, copy and the conditional walk.

All traversals use an explicit stack (DFS) instead of Python recursion so
very deep trees cannot exhaust the interpreter's recursion limit. The
coroutine variants await one storage call at a time and never fan out
across siblings.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pathname.errors import AlreadyExistsError, IOFailureError, NotFoundError
from pathname.metadata import Metadata
from pathname.storage import Storage

if TYPE_CHECKING:
    from pathname.handle import Pathname

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CopyOptions:
    """Options for a recursive copy.

    Attributes:
        overwrite: Replace an existing destination instead of failing.
        source: Directory to copy from. ``None`` means the handle's own path.
    """

    overwrite: bool = False
    source: str | None = None


# ----------------------------------------------------------------------
# Delete
# ----------------------------------------------------------------------
def _lstat_or_none(storage: Storage, path: str) -> Metadata | None:
    try:
        return storage.lstat(path)
    except NotFoundError:
        return None


def delete_tree_sync(storage: Storage, root: str) -> None:
    """Remove *root* and everything below it.

    A missing root is a no-op. Non-empty child directories are descended
    into, empty ones are removed directly, everything else is unlinked.
    Each directory is removed only after its children. The first failure
    propagates; nothing is retried or rolled back.

    Args:
        storage: Storage binding.
        root: Path to remove.
    """
    meta = _lstat_or_none(storage, root)
    if meta is None:
        logger.debug("Nothing to delete: %s", root)
        return
    if not meta.is_directory:
        logger.debug("Unlinking %s", root)
        storage.unlink(root)
        return

    # Stack items: (directory_path, children_removed)
    stack: list[tuple[str, bool]] = [(root, False)]

    while stack:
        current, children_removed = stack.pop()
        if children_removed:
            logger.debug("Removing directory %s", current)
            storage.rmdir(current)
            continue

        stack.append((current, True))
        for name in storage.read_dir(current):
            child = os.path.join(current, name)
            if not storage.lstat(child).is_directory:
                logger.debug("Unlinking %s", child)
                storage.unlink(child)
            elif storage.read_dir(child):
                stack.append((child, False))
            else:
                logger.debug("Removing directory %s", child)
                storage.rmdir(child)


async def delete_tree(storage: Storage, root: str) -> None:
    """Coroutine form of :func:`delete_tree_sync`."""
    try:
        meta = await asyncio.to_thread(storage.lstat, root)
    except NotFoundError:
        logger.debug("Nothing to delete: %s", root)
        return
    if not meta.is_directory:
        logger.debug("Unlinking %s", root)
        await asyncio.to_thread(storage.unlink, root)
        return

    stack: list[tuple[str, bool]] = [(root, False)]

    while stack:
        current, children_removed = stack.pop()
        if children_removed:
            logger.debug("Removing directory %s", current)
            await asyncio.to_thread(storage.rmdir, current)
            continue

        stack.append((current, True))
        for name in await asyncio.to_thread(storage.read_dir, current):
            child = os.path.join(current, name)
            child_meta = await asyncio.to_thread(storage.lstat, child)
            if not child_meta.is_directory:
                logger.debug("Unlinking %s", child)
                await asyncio.to_thread(storage.unlink, child)
            elif await asyncio.to_thread(storage.read_dir, child):
                stack.append((child, False))
            else:
                logger.debug("Removing directory %s", child)
                await asyncio.to_thread(storage.rmdir, child)


# ----------------------------------------------------------------------
# Copy
# ----------------------------------------------------------------------
def _refuse_existing(destination: str) -> AlreadyExistsError:
    return AlreadyExistsError(destination, "copy", "destination already exists")


def _require_source(options: CopyOptions) -> str:
    if options.source is None:
        raise ValueError("CopyOptions.source must be set")
    return options.source


def _check_source(source: str, meta: Metadata) -> None:
    if not meta.is_directory:
        raise IOFailureError(source, "copy", "source is not a directory")


def copy_tree_sync(storage: Storage, destination: str, options: CopyOptions) -> None:
    """Copy the directory ``options.source`` to *destination*.

    The source is checked before anything is created. An existing
    destination fails with ``AlreadyExistsError`` before any
    mutation unless ``options.overwrite`` is set, in which case it is
    deleted first. Children are classified with ``lstat``: directories are
    copied recursively, symbolic links are recreated (not dereferenced) and
    everything else has its bytes copied. Each destination directory is
    created before its children. Partial copies are left in place on
    failure.

    Args:
        storage: Storage binding.
        destination: Directory to create.
        options: Copy options with ``source`` set.

    Raises:
        NotFoundError: If the source is missing.
        IOFailureError: If the source is not a directory.
        AlreadyExistsError: If *destination* exists and overwrite is off.
        ValueError: If ``options.source`` is ``None``.
    """
    source = _require_source(options)
    _check_source(source, storage.stat(source))
    stack: list[tuple[str, str]] = [(source, destination)]

    while stack:
        src, dst = stack.pop()

        if _lstat_or_none(storage, dst) is not None:
            if not options.overwrite:
                raise _refuse_existing(dst)
            delete_tree_sync(storage, dst)

        logger.debug("Creating directory %s", dst)
        storage.mkdir(dst)

        child_dirs: list[tuple[str, str]] = []
        for name in storage.read_dir(src):
            child_src = os.path.join(src, name)
            child_dst = os.path.join(dst, name)
            meta = storage.lstat(child_src)
            if meta.is_directory:
                child_dirs.append((child_src, child_dst))
            elif meta.is_symlink:
                target = storage.read_link(child_src)
                logger.debug("Linking %s -> %s", child_dst, target)
                storage.symlink(target, child_dst)
            else:
                logger.debug("Copying %s -> %s", child_src, child_dst)
                storage.copy_bytes(child_src, child_dst)

        # Push children in reverse so the first listed is copied first
        stack.extend(reversed(child_dirs))


async def copy_tree(storage: Storage, destination: str, options: CopyOptions) -> None:
    """Coroutine form of :func:`copy_tree_sync`."""
    source = _require_source(options)
    _check_source(source, await asyncio.to_thread(storage.stat, source))
    stack: list[tuple[str, str]] = [(source, destination)]

    while stack:
        src, dst = stack.pop()

        try:
            await asyncio.to_thread(storage.lstat, dst)
        except NotFoundError:
            pass
        else:
            if not options.overwrite:
                raise _refuse_existing(dst)
            await delete_tree(storage, dst)

        logger.debug("Creating directory %s", dst)
        await asyncio.to_thread(storage.mkdir, dst)

        child_dirs: list[tuple[str, str]] = []
        for name in await asyncio.to_thread(storage.read_dir, src):
            child_src = os.path.join(src, name)
            child_dst = os.path.join(dst, name)
            meta = await asyncio.to_thread(storage.lstat, child_src)
            if meta.is_directory:
                child_dirs.append((child_src, child_dst))
            elif meta.is_symlink:
                target = await asyncio.to_thread(storage.read_link, child_src)
                logger.debug("Linking %s -> %s", child_dst, target)
                await asyncio.to_thread(storage.symlink, target, child_dst)
            else:
                logger.debug("Copying %s -> %s", child_src, child_dst)
                await asyncio.to_thread(storage.copy_bytes, child_src, child_dst)

        stack.extend(reversed(child_dirs))


# ----------------------------------------------------------------------
# Walk
# ----------------------------------------------------------------------
def walk_sync(
    start: Pathname,
    visitor: Callable[[Pathname], bool] | None = None,
) -> list[Pathname]:
    """Visit *start* and its descendants in pre-order.

    The visitor's return value decides whether the walk continues into a
    directory; non-directories are leaves either way. Children at each
    level are sorted by path string so the order is deterministic.

    Args:
        start: Node to start from.
        visitor: Predicate called once per node. ``None`` accepts everything.

    Returns:
        list[Pathname]: Nodes the visitor accepted, in visit order.
    """
    accepted: list[Pathname] = []
    stack: list[Pathname] = [start]

    while stack:
        node = stack.pop()
        keep = visitor(node) if visitor is not None else True
        if not keep:
            continue
        accepted.append(node)

        if not node.is_directory_sync():
            continue
        children = sorted(node.get_files_sync() or [], key=lambda f: f.get_name())
        stack.extend(reversed(children))

    return accepted
