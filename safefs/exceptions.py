"""
Custom exceptions for safe file system operations.
"""

import errno
from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Classification of a failed safe operation."""

    NON_EXISTENT_READ = "non_existent_read"
    NON_EXISTENT_WRITE = "non_existent_write"
    NON_EXISTENT_LIST = "non_existent_list"
    PERMISSION_READ = "permission_read"
    PERMISSION_WRITE = "permission_write"
    PERMISSION_DELETE = "permission_delete"
    PERMISSION_LIST = "permission_list"
    READ_FAILED = "read_failed"
    WRITE_FAILED = "write_failed"
    DELETE_FAILED = "delete_failed"
    LIST_FAILED = "list_failed"
    MKDIR_FAILED = "mkdir_failed"
    ROOT_DELETION_REFUSED = "root_deletion_refused"


class FileSystemError(Exception):
    """Base exception for file system operations."""

    @property
    def errno(self) -> Optional[int]:
        """Error code of the first OS error found in the cause chain."""
        return find_errno(self)


class PrimitiveError(FileSystemError):
    """Raised when a raw file system call fails."""
    pass


class SafeOperationError(FileSystemError):
    """Base for classified failures of the safe operation layer."""

    def __init__(self, kind: ErrorKind, path: str, operation: str, message: str):
        super().__init__(message)
        self.kind = kind
        self.path = path
        self.operation = operation


class NonExistentError(SafeOperationError):
    """Raised when the target is absent but presence was required."""
    pass


class AccessDeniedError(SafeOperationError):
    """Raised when a permission check fails for an existing target."""
    pass


class OperationFailedError(SafeOperationError):
    """Raised when the operation itself fails after passing its pre-checks."""
    pass


class RootDeletionRefusedError(SafeOperationError):
    """Raised when a recursive removal targets an empty path or the filesystem root."""

    def __init__(self, path: str, operation: str = "remove directory"):
        super().__init__(
            ErrorKind.ROOT_DELETION_REFUSED,
            path,
            operation,
            f"refusing to {operation} at the empty or root path: {path!r}",
        )


class ShellCommandError(FileSystemError):
    """Raised when a shell fallback command exits unsuccessfully."""

    def __init__(self, message: str, result=None):
        super().__init__(message)
        self.result = result


def find_errno(error: Optional[BaseException]) -> Optional[int]:
    """Walk the ``__cause__`` chain and return the first ``errno`` found."""
    seen = set()
    while error is not None and id(error) not in seen:
        seen.add(id(error))
        if isinstance(error, OSError) and error.errno is not None:
            return error.errno
        error = error.__cause__
    return None


def is_not_found(error: Optional[BaseException]) -> bool:
    """True if the error, or anything it wraps, signals a missing path."""
    return find_errno(error) == errno.ENOENT
