"""
Safe file system operations.

This package wraps raw file system calls in pre-checked coroutines that
raise classified errors, and provides recursive directory operations that
behave the same on every supported Python runtime.
"""

from .capabilities import RuntimeCapabilities, detect_capabilities
from .config import FileSystemConfig
from .directory_manager import DirectoryManager
from .exceptions import (
    AccessDeniedError,
    ErrorKind,
    FileSystemError,
    NonExistentError,
    OperationFailedError,
    PrimitiveError,
    RootDeletionRefusedError,
    SafeOperationError,
    ShellCommandError,
    is_not_found,
)
from .file_manager import FileManager
from .primitives import AccessMode

__all__ = [
    "FileManager",
    "DirectoryManager",
    "FileSystemConfig",
    "RuntimeCapabilities",
    "detect_capabilities",
    "AccessMode",
    "ErrorKind",
    "FileSystemError",
    "PrimitiveError",
    "SafeOperationError",
    "NonExistentError",
    "AccessDeniedError",
    "OperationFailedError",
    "RootDeletionRefusedError",
    "ShellCommandError",
    "is_not_found",
]
