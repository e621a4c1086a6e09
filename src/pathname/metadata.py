"""Point-in-time metadata snapshots."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class PathKind(Enum):
    """On-disk kind of a path."""

    FILE = "file"
    DIRECTORY = "directory"
    SOCKET = "socket"
    SYMLINK = "symlink"
    OTHER = "other"


def _kind_from_mode(mode: int) -> PathKind:
    if stat.S_ISDIR(mode):
        return PathKind.DIRECTORY
    if stat.S_ISREG(mode):
        return PathKind.FILE
    if stat.S_ISLNK(mode):
        return PathKind.SYMLINK
    if stat.S_ISSOCK(mode):
        return PathKind.SOCKET
    return PathKind.OTHER


@dataclass(frozen=True, slots=True)
class Metadata:
    """Type, size and timestamp facts about a path.

    Snapshots are fetched fresh by every query and never cached on a
    ``Pathname``. Callers that need several facts to agree should fetch
    one snapshot and reuse it.

    Attributes:
        kind: On-disk kind.
        size: Size in bytes.
        mtime: Last modification time.
        atime: Last access time.
        ctime: Last status change time.
    """

    kind: PathKind
    size: int
    mtime: datetime
    atime: datetime
    ctime: datetime

    @classmethod
    def from_stat(cls, st: os.stat_result) -> Metadata:
        """Build a snapshot from an ``os.stat_result``.

        Args:
            st: Result of ``os.stat`` or ``os.lstat``.

        Returns:
            Metadata: Snapshot with timestamps converted to ``datetime``.
        """
        return cls(
            kind=_kind_from_mode(st.st_mode),
            size=st.st_size,
            mtime=datetime.fromtimestamp(st.st_mtime),
            atime=datetime.fromtimestamp(st.st_atime),
            ctime=datetime.fromtimestamp(st.st_ctime),
        )

    @property
    def is_file(self) -> bool:
        return self.kind is PathKind.FILE

    @property
    def is_directory(self) -> bool:
        return self.kind is PathKind.DIRECTORY

    @property
    def is_socket(self) -> bool:
        return self.kind is PathKind.SOCKET

    @property
    def is_symlink(self) -> bool:
        return self.kind is PathKind.SYMLINK
