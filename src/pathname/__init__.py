"""pathname — filesystem pathname handles with recursive tree operations."""

from __future__ import annotations

from pathname.errors import (
    AlreadyExistsError,
    IOFailureError,
    NotFoundError,
    PathnameError,
    PermissionDeniedError,
)
from pathname.handle import Pathname
from pathname.metadata import Metadata, PathKind
from pathname.storage import OsStorage, Storage
from pathname.tree import CopyOptions, walk_sync

__version__ = "0.1.0"

__all__ = [
    "AlreadyExistsError",
    "CopyOptions",
    "IOFailureError",
    "Metadata",
    "NotFoundError",
    "OsStorage",
    "PathKind",
    "Pathname",
    "PathnameError",
    "PermissionDeniedError",
    "Storage",
    "walk_sync",
]
