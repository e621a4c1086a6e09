"""Storage capability set and its ``os``-backed binding.

Everything above this module talks to the filesystem only through the
``Storage`` protocol, so tests and callers can swap in another binding.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Protocol

from pathname.errors import (
    AlreadyExistsError,
    IOFailureError,
    NotFoundError,
    PathnameError,
    PermissionDeniedError,
)
from pathname.metadata import Metadata

logger = logging.getLogger(__name__)


class Storage(Protocol):
    """Narrow set of storage primitives used by pathname handles."""

    def stat(self, path: str) -> Metadata: ...

    def lstat(self, path: str) -> Metadata: ...

    def read_dir(self, path: str) -> list[str]: ...

    def unlink(self, path: str) -> None: ...

    def rmdir(self, path: str) -> None: ...

    def mkdir(self, path: str) -> None: ...

    def read_link(self, path: str) -> str: ...

    def symlink(self, target: str, path: str) -> None: ...

    def check_access(self, path: str, mode: int) -> bool: ...

    def copy_bytes(self, src: str, dst: str) -> None: ...


def translate_os_error(exc: OSError, path: str, operation: str) -> PathnameError:
    """Map an ``OSError`` onto the pathname error taxonomy.

    Args:
        exc: Error raised by the operating system.
        path: Path the operation was applied to.
        operation: Storage operation name.

    Returns:
        PathnameError: The matching ``PathnameError`` subclass instance.
    """
    detail = exc.strerror or str(exc)
    if isinstance(exc, FileNotFoundError):
        return NotFoundError(path, operation, detail)
    if isinstance(exc, FileExistsError):
        return AlreadyExistsError(path, operation, detail)
    if isinstance(exc, PermissionError):
        return PermissionDeniedError(path, operation, detail)
    return IOFailureError(path, operation, detail)


@contextmanager
def _translated(path: str, operation: str) -> Iterator[None]:
    try:
        yield
    except OSError as exc:
        logger.debug("%s failed: %s (%s)", operation, path, exc)
        raise translate_os_error(exc, path, operation) from exc


class OsStorage:
    """``Storage`` backed by ``os`` and ``shutil``.

    Each method is a single pass-through; nothing is cached.
    """

    def stat(self, path: str) -> Metadata:
        with _translated(path, "stat"):
            return Metadata.from_stat(os.stat(path))

    def lstat(self, path: str) -> Metadata:
        with _translated(path, "lstat"):
            return Metadata.from_stat(os.lstat(path))

    def read_dir(self, path: str) -> list[str]:
        with _translated(path, "read_dir"):
            return os.listdir(path)

    def unlink(self, path: str) -> None:
        with _translated(path, "unlink"):
            os.unlink(path)

    def rmdir(self, path: str) -> None:
        with _translated(path, "rmdir"):
            os.rmdir(path)

    def mkdir(self, path: str) -> None:
        with _translated(path, "mkdir"):
            os.mkdir(path)

    def read_link(self, path: str) -> str:
        with _translated(path, "read_link"):
            return os.readlink(path)

    def symlink(self, target: str, path: str) -> None:
        with _translated(path, "symlink"):
            os.symlink(target, path)

    def check_access(self, path: str, mode: int) -> bool:
        with _translated(path, "access"):
            return os.access(path, mode)

    def copy_bytes(self, src: str, dst: str) -> None:
        with _translated(src, "copy"):
            shutil.copyfile(src, dst)
