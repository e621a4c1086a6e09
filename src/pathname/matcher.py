"""Shell-style glob matching with base-name semantics, compiled through wcmatch."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import TYPE_CHECKING, Final

from wcmatch import glob

if TYPE_CHECKING:
    from wcmatch._wcparse import WcRegexp

# `**` spans directories, `{a,b}` expands, a separator-free pattern is tested
# against the final segment, and a leading `!` negates. `*` never matches a
# leading dot.
GLOB_FLAGS: Final[int] = (
    glob.GLOBSTAR | glob.BRACE | glob.MATCHBASE | glob.NEGATE | glob.NEGATEALL
)

_SEPARATORS = (os.sep, os.altsep) if os.altsep else (os.sep,)


@lru_cache(maxsize=256)
def compile_glob(pattern: str) -> WcRegexp[str]:
    """Compile a single shell-style glob.

    Args:
        pattern: Glob such as ``*.json``, ``*.{json,txt}`` or ``src/**/*.py``.

    Returns:
        WcRegexp: Compiled matcher for the one pattern.
    """
    return glob.compile(pattern, flags=GLOB_FLAGS)


def match_glob(path: str, pattern: str) -> bool:
    """Return whether *path* matches *pattern*.

    A pattern without separators is tested against the final path segment
    only, so ``*.json`` matches ``a/b/c.json``. Patterns with separators are
    tested against the whole path, and ``*`` stops at a separator.

    Args:
        path: Path string to test.
        pattern: Glob pattern.

    Returns:
        bool: ``True`` on a match.
    """
    return compile_glob(pattern).match(path.rstrip("".join(_SEPARATORS)) or path)
