"""Error taxonomy for failed pathname operations."""

from __future__ import annotations


class PathnameError(Exception):
    """Base error for failed pathname operations.

    Carries the failing path and the storage operation that was attempted,
    so callers get a single descriptive error per failure.

    Attributes:
        path: Path the operation was applied to.
        operation: Name of the storage operation (``stat``, ``mkdir``, ...).
    """

    def __init__(self, path: str, operation: str, detail: str = "") -> None:
        self.path = path
        self.operation = operation
        message = f"{operation} failed for '{path}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class NotFoundError(PathnameError):
    """The path does not exist."""


class AlreadyExistsError(PathnameError):
    """The target path is already present."""


class PermissionDeniedError(PathnameError):
    """The storage layer refused the operation."""


class IOFailureError(PathnameError):
    """Any other storage failure (disk full, device error, broken link)."""
