"""
Coroutine wrappers around the raw file system calls.

Nothing here checks preconditions: each function performs exactly one OS
call through aiofiles and reports whatever that call reports.
"""

import errno
import logging
import os
from enum import IntEnum
from typing import List, Optional, Union

import aiofiles
import aiofiles.os

from .exceptions import PrimitiveError

logger = logging.getLogger(__name__)

PathType = Union[str, "os.PathLike[str]"]


class AccessMode(IntEnum):
    """Permission flags understood by ``os.access``."""

    EXISTS = getattr(os, "F_OK", 0)
    READABLE = getattr(os, "R_OK", 4)
    WRITABLE = getattr(os, "W_OK", 2)
    EXECUTABLE = getattr(os, "X_OK", 1)


async def check_access(path: PathType, mode: AccessMode) -> None:
    """
    Check that the path grants the given access mode.

    Raises:
        FileNotFoundError: If the path does not exist
        PermissionError: If the path exists but the access mode is not granted
    """
    if await aiofiles.os.access(path, mode):
        return
    if mode != AccessMode.EXISTS and await aiofiles.os.path.exists(path):
        raise PermissionError(
            errno.EACCES, f"{AccessMode(mode).name.lower()} access denied", os.fspath(path)
        )
    raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), os.fspath(path))


async def read_file_raw(path: PathType, encoding: str = "utf-8") -> str:
    """Read a whole text file."""
    try:
        async with aiofiles.open(path, "r", encoding=encoding) as f:
            return await f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise PrimitiveError(f"failed to read file at: {os.fspath(path)}") from e


async def write_file_raw(path: PathType, contents: Union[str, bytes],
                         mode: Optional[int] = None, encoding: str = "utf-8") -> None:
    """
    Write contents to a file, replacing what was there.

    Args:
        path: File to write
        contents: Text, or bytes written unchanged
        mode: Permission bits applied if the file gets created
        encoding: Text encoding for str contents
    """
    opener = None
    if mode is not None:
        def opener(file, flags):
            return os.open(file, flags, mode)

    try:
        if isinstance(contents, bytes):
            async with aiofiles.open(path, "wb", opener=opener) as f:
                await f.write(contents)
        else:
            async with aiofiles.open(path, "w", encoding=encoding, opener=opener) as f:
                await f.write(contents)
    except (OSError, UnicodeEncodeError) as e:
        raise PrimitiveError(f"failed to write file at: {os.fspath(path)}") from e


async def remove_file_raw(path: PathType) -> None:
    """Unlink a file."""
    try:
        await aiofiles.os.remove(path)
    except OSError as e:
        raise PrimitiveError(f"failed to delete file at: {os.fspath(path)}") from e


async def list_directory_raw(path: PathType) -> List[str]:
    """Names of the entries directly inside a directory, in OS order."""
    try:
        return await aiofiles.os.listdir(path)
    except OSError as e:
        raise PrimitiveError(f"failed to read directory at: {os.fspath(path)}") from e
